"""
Logging middleware for request/response logging
"""

import logging
from flask import request

logger = logging.getLogger('payplanner.requests')

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

def configure_logging(app):
    """Set the package log level from LOG_LEVEL and attach a handler once"""
    level = logging.getLevelName(str(app.config.get('LOG_LEVEL', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    package_logger = logging.getLogger('payplanner')
    package_logger.setLevel(level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    app.logger.setLevel(level)

class LoggingMiddleware:
    """Middleware for request logging"""

    def __init__(self, app):
        self.app = app
        self.setup_logging()

    def setup_logging(self):
        """Setup request logging"""
        @self.app.before_request
        def log_request_info():
            if request.path.startswith('/api/'):
                logger.debug("%s %s - %s", request.method, request.path, request.remote_addr)

        @self.app.after_request
        def log_response_info(resp):
            if request.path.startswith('/api/'):
                logger.debug("%s %s - %s", request.method, request.path, resp.status_code)
            return resp
