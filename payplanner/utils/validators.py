"""
Input validation helpers for query strings and JSON payloads
"""

import re
from datetime import datetime, date
from decimal import Decimal, InvalidOperation
from typing import Optional, Type
from payplanner.exceptions import InvalidDateError, InvalidEnumError, InvalidNumberError, DataValidationError

_TRUE_VALUES = {'true', '1', 'yes', 'on'}
_FALSE_VALUES = {'false', '0', 'no', 'off'}
_DATE_ONLY = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Signed 64-bit range accepted by the database drivers
SQL_INTEGER_MIN = -2 ** 63
SQL_INTEGER_MAX = 2 ** 63 - 1

def is_blank(value) -> bool:
    """True for None and whitespace-only strings"""
    return value is None or (isinstance(value, str) and not value.strip())

def normalize_optional_string(value) -> Optional[str]:
    """Trim a string; blank becomes None"""
    if value is None:
        return None
    value = str(value).strip()
    return value or None

def normalize_string(value) -> str:
    """Trim a string for non-nullable text columns; None becomes ''"""
    if value is None:
        return ''
    return str(value).strip()

def parse_datetime(value, field: str) -> Optional[datetime]:
    """Parse ISO-8601 date or datetime; blank is None"""
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        if _DATE_ONLY.match(text):
            return datetime.strptime(text, '%Y-%m-%d')
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(value, field)

    # Stored values are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - parsed.utcoffset()
    return parsed

def parse_int(value, field: str) -> Optional[int]:
    """Parse an integer within the signed 64-bit range; blank is None"""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidNumberError(value, field)
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError:
            raise InvalidNumberError(value, field)
    if not SQL_INTEGER_MIN <= number <= SQL_INTEGER_MAX:
        raise InvalidNumberError(value, field)
    return number

def parse_decimal(value, field: str) -> Optional[Decimal]:
    """Parse a money amount; blank is None"""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidNumberError(value, field)
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidNumberError(value, field)

def parse_bool(value, field: str) -> Optional[bool]:
    """Parse a boolean flag from JSON or query-string form"""
    if is_blank(value):
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise DataValidationError(f"Invalid boolean for '{field}': {value}", field, value)

def parse_enum(value, enum_cls: Type, field: str):
    """Parse an enum member by name (case-insensitive) or by numeric value"""
    if is_blank(value):
        return None
    if isinstance(value, enum_cls):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        for member in enum_cls:
            if member.value == value:
                return member
    else:
        text = str(value).strip()
        for member in enum_cls:
            if member.name.lower() == text.lower():
                return member
        if text.isdigit():
            return parse_enum(int(text), enum_cls, field)

    raise InvalidEnumError(value, field, [member.name for member in enum_cls])

def require(value, field: str):
    """Raise when a required value is missing"""
    if is_blank(value):
        raise DataValidationError(f"'{field}' is required", field)
    return value
