"""
Data validation exceptions for request parameters and payloads
"""

from .base import ValidationError

class DataValidationError(ValidationError):
    """Exception raised for data validation errors"""

    def __init__(self, message: str, field: str = None, value=None):
        self.value = value
        super().__init__(message, field)

class InvalidDateError(DataValidationError):
    """Exception raised for invalid date formats"""

    def __init__(self, date_value: str, field: str = 'date'):
        message = f"Invalid date format for '{field}': {date_value}"
        super().__init__(message, field, date_value)

class InvalidNumberError(DataValidationError):
    """Exception raised for values that are not valid numbers"""

    def __init__(self, number_value, field: str):
        message = f"Invalid number for '{field}': {number_value}"
        super().__init__(message, field, number_value)

class InvalidEnumError(DataValidationError):
    """Exception raised when a value is not one of an enumeration's members"""

    def __init__(self, enum_value, field: str, allowed: list):
        self.allowed = allowed
        message = f"Invalid value for '{field}': {enum_value}. Allowed: {', '.join(allowed)}"
        super().__init__(message, field, enum_value)

    def to_dict(self):
        result = super().to_dict()
        result['allowed'] = self.allowed
        return result
