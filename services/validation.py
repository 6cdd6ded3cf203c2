"""Field validators shared by the services.

Each helper returns the cleaned value or raises ValidationError with the
message sent back to the client.
"""
import re
from typing import Any, List

from services.errors import ValidationError

DATE_PATTERN = re.compile(r'^[0-9]{4}-[0-9]{2}-[0-9]{2}$')
MONTH_PATTERN = re.compile(r'^[0-9]{4}-[0-9]{2}$')
TIME_PATTERN = re.compile(r'^[0-9]{2}:[0-9]{2}$')

INTEGER_MIN = -2 ** 31
INTEGER_MAX = 2 ** 31 - 1


def is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def whole_number(value: Any, message: str) -> int:
    if not is_number(value) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(message)
    value = int(value)
    # Integer columns are 32-bit
    if not INTEGER_MIN <= value <= INTEGER_MAX:
        raise ValidationError(message)
    return value


def intensity(value: Any, message: str = 'Intensity must be a number between 1 and 10') -> int:
    value = whole_number(value, message)
    if not 1 <= value <= 10:
        raise ValidationError(message)
    return value


def string_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f'{name} must be a list of strings')
    return [item.strip() for item in value if item.strip()]


def boolean(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f'{name} must be true or false')
    return value


def optional_text(value: Any, name: str):
    """Empty strings collapse to None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{name} must be a string')
    return value.strip() or None


def date_string(value: Any) -> str:
    # Shape only: 2024-13-01 passes, matching what the calendar stores
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        raise ValidationError('Invalid date format. Use YYYY-MM-DD')
    return value


def month_string(value: Any) -> str:
    if not isinstance(value, str) or not MONTH_PATTERN.fullmatch(value):
        raise ValidationError('Invalid month format. Use YYYY-MM')
    return value


def time_string(value: Any) -> str:
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise ValidationError('Invalid time format. Use HH:MM')
    return value


def json_object(value: Any) -> dict:
    """Parsed request body; a missing body is an empty object."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError('Request body must be a JSON object')
    return value


def required_text(value: Any, message: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationError(message)
    return value
