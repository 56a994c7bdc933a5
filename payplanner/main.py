"""
Main application class - orchestrates all components
"""

import logging
from payplanner import create_app

logger = logging.getLogger(__name__)

class PayPlannerApp:
    """Main application class that owns the Flask app"""

    def __init__(self, config_name='development', config_overrides=None):
        self.app = create_app(config_name, config_overrides)

    def initialize_database(self, seed=True):
        """Create tables and default lookup rows"""
        from payplanner.services.database import DatabaseService

        with self.app.app_context():
            db_service = DatabaseService()
            db_service.create_tables()
            if seed:
                db_service.seed_dictionaries()
        logger.info("Database initialized")

    def run(self, **kwargs):
        """Run the development server"""
        self.app.run(**kwargs)
