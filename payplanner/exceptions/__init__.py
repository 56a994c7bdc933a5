"""
Custom exception classes for the application
"""

from .base import PayPlannerException, ValidationError, NotFoundError
from .data import DataValidationError, InvalidDateError, InvalidNumberError, InvalidEnumError
from .enrichment import EnrichmentError, DadataAPIError, OperationCancelledError

__all__ = [
    'PayPlannerException', 'ValidationError', 'NotFoundError',
    'DataValidationError', 'InvalidDateError', 'InvalidNumberError', 'InvalidEnumError',
    'EnrichmentError', 'DadataAPIError', 'OperationCancelledError'
]
