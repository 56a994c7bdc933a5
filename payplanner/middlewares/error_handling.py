"""
Error handling middleware for global error management
"""

import logging
from flask import request, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from payplanner.exceptions import NotFoundError, ValidationError
from payplanner.models import db

logger = logging.getLogger(__name__)

def validation_response(error: ValidationError):
    """400 with the message as a plain string body"""
    return error.message, 400, {'Content-Type': 'text/plain; charset=utf-8'}

def not_found_response(error: NotFoundError):
    return jsonify({'error': error.message}), 404

class ErrorHandlingMiddleware:
    """Middleware for global error handling"""

    def __init__(self, app):
        self.app = app
        self.setup_error_handlers()

    def setup_error_handlers(self):
        """Setup global error handlers"""
        @self.app.errorhandler(ValidationError)
        def validation_error(error):
            return validation_response(error)

        @self.app.errorhandler(NotFoundError)
        def entity_not_found(error):
            return not_found_response(error)

        @self.app.errorhandler(SQLAlchemyError)
        def database_error(error):
            db.session.rollback()
            logger.error("Database error on %s %s", request.method, request.path, exc_info=error)
            return jsonify({'error': 'Internal server error'}), 500

        @self.app.errorhandler(404)
        def not_found(error):
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Resource not found'}), 404
            return "Page not found", 404

        @self.app.errorhandler(405)
        def method_not_allowed(error):
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Method not allowed'}), 405
            return "Method not allowed", 405

        @self.app.errorhandler(Exception)
        def unhandled_error(error):
            if isinstance(error, HTTPException):
                return error
            db.session.rollback()
            logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=error)
            if request.path.startswith('/api/'):
                return jsonify({'error': 'Internal server error'}), 500
            return "Internal server error", 500
