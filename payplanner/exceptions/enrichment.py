"""
Legal-entity enrichment (DaData) exceptions
"""

from .base import PayPlannerException

class EnrichmentError(PayPlannerException):
    """Exception raised inside the enrichment adapter"""

    def __init__(self, message: str, error_code: str = 'ENRICHMENT_ERROR'):
        super().__init__(message, error_code)

class DadataAPIError(EnrichmentError):
    """Exception raised for malformed or unexpected DaData responses"""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message, 'DADATA_API_ERROR')

class OperationCancelledError(EnrichmentError):
    """Raised when the caller cancelled the lookup; always propagated"""

    def __init__(self, message: str = "Operation cancelled by caller"):
        super().__init__(message, 'OPERATION_CANCELLED')
