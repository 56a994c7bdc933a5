"""
Utility functions and helpers
"""

from .validators import (
    is_blank, normalize_optional_string, normalize_string, parse_datetime,
    parse_int, parse_decimal, parse_bool, parse_enum, require
)
from .formatters import truncate_text, fit_column

__all__ = [
    'is_blank', 'normalize_optional_string', 'normalize_string', 'parse_datetime',
    'parse_int', 'parse_decimal', 'parse_bool', 'parse_enum', 'require',
    'truncate_text', 'fit_column'
]
