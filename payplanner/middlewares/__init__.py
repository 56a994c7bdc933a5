"""
Middlewares package
"""

from .logging import LoggingMiddleware, configure_logging
from .error_handling import ErrorHandlingMiddleware
from .activity import ActivityLogger

def setup_middlewares(app):
    """Setup all middlewares"""
    configure_logging(app)
    LoggingMiddleware(app)
    ErrorHandlingMiddleware(app)
    ActivityLogger(app)

__all__ = [
    'setup_middlewares', 'configure_logging',
    'LoggingMiddleware', 'ErrorHandlingMiddleware', 'ActivityLogger'
]
