"""
Base controller with common functionality
"""

from functools import wraps
from typing import Dict

from flask import request, jsonify

from payplanner.exceptions import DataValidationError, NotFoundError, ValidationError
from payplanner.middlewares.error_handling import not_found_response, validation_response

class BaseController:
    """Base controller with common functionality"""

    # Name recorded in activity logs
    name = None

    def __init__(self, app):
        self.app = app
        self.activity_logger = app.extensions.get('activity_logger')
        self.register_routes()

    def register_routes(self):
        """Register routes - to be implemented by subclasses"""
        pass

    def api_errors(self, f):
        """Decorator turning validation and not-found errors into responses"""
        @wraps(f)
        def decorated_function(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ValidationError as error:
                return validation_response(error)
            except NotFoundError as error:
                return not_found_response(error)
        return decorated_function

    def logged(self, f, action: str = None):
        """Decorator for API routes: error translation inside, activity logging outside"""
        view = self.api_errors(f)
        if self.activity_logger is None:
            return view
        return self.activity_logger.wrap(view, self.name, action or f.__name__)

    def get_json_body(self) -> Dict:
        """JSON object body of the current request"""
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            raise DataValidationError("Request body must be a JSON object")
        return body

    def created(self, payload: Dict, location: str):
        response = jsonify(payload)
        response.status_code = 201
        response.headers['Location'] = location
        return response

    def no_content(self):
        return '', 204
