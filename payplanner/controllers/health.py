"""
Liveness probe
"""

import logging
from flask import jsonify
from sqlalchemy import text

from payplanner.controllers.base import BaseController
from payplanner.models import db

logger = logging.getLogger(__name__)

class HealthController(BaseController):
    """Handles /health"""

    name = 'Health'

    def register_routes(self):
        self.app.add_url_rule('/health', 'health', self.health_check, methods=['GET'])

    def health_check(self):
        try:
            db.session.execute(text('SELECT 1'))
            database = 'ok'
        except Exception:
            db.session.rollback()
            logger.warning("Health check could not reach the database", exc_info=True)
            database = 'unavailable'
        return jsonify({'status': 'healthy', 'database': database})
