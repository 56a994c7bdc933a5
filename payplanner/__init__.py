"""
PayPlanner API package
Entry point for the Flask application with factory pattern
"""

import os
from flask import Flask
from flask_cors import CORS

from payplanner.config import load_config

def create_app(config_name='development', config_overrides=None):
    """Application factory function"""
    app = Flask(__name__)

    # Load configuration
    load_config(app, config_name, config_overrides)
    app.json.sort_keys = False

    # Setup CORS for the API
    setup_cors(app)

    # Initialize database
    from payplanner.models import init_db
    init_db(app)

    # Setup middlewares (before controllers; they wrap views with the activity logger)
    from payplanner.middlewares import setup_middlewares
    setup_middlewares(app)

    # Register controllers
    from payplanner.controllers import register_controllers
    register_controllers(app)

    return app

def setup_cors(app):
    """Setup CORS from CORS_ORIGINS (comma separated, '*' for any origin)"""
    origins = app.config.get('CORS_ORIGINS') or os.getenv('CORS_ORIGINS', '*')

    if origins == '*':
        allowed_origins = '*'
    else:
        allowed_origins = [o.strip() for o in origins.split(',') if o.strip()]

    CORS(app, resources={
        r"/api/*": {
            "origins": allowed_origins,
            "allow_headers": ["Content-Type", "Authorization"],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "expose_headers": ["Location"]
        }
    })
    app.logger.info("Configured CORS for origins: %s", allowed_origins)
