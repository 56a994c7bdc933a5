"""
Base exception classes
"""

class PayPlannerException(Exception):
    """Base exception for PayPlanner application"""

    def __init__(self, message: str, error_code: str = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)

    def to_dict(self):
        """Convert exception to dictionary for JSON responses"""
        return {
            'error': self.message,
            'error_code': self.error_code,
            'type': self.__class__.__name__
        }

class ValidationError(PayPlannerException):
    """Exception raised for validation errors"""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message, 'VALIDATION_ERROR')

    def to_dict(self):
        result = super().to_dict()
        if self.field:
            result['field'] = self.field
        return result

class NotFoundError(PayPlannerException):
    """Exception raised when an id-addressed record does not exist"""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        message = f"{entity} not found" if entity_id is None else f"{entity} {entity_id} not found"
        super().__init__(message, 'NOT_FOUND')
