"""Password rules for sign-up and password changes.

- Minimum 8 characters
- Only ASCII letters and digits (no spaces, no special characters)
- At least one uppercase letter, one lowercase letter and one digit
"""
import re
from typing import List, Tuple

MIN_LENGTH = 8

_ALLOWED = re.compile(r'[A-Za-z0-9]+')
_UPPER = re.compile(r'[A-Z]')
_LOWER = re.compile(r'[a-z]')
_DIGIT = re.compile(r'[0-9]')


def validate_password(password) -> Tuple[bool, List[str]]:
    """Return (valid, errors) for the candidate password."""
    if not isinstance(password, str):
        password = ''
    errors = []

    if len(password) < MIN_LENGTH:
        errors.append(f'Password must be at least {MIN_LENGTH} characters long')
    if not _ALLOWED.fullmatch(password):
        errors.append('Password must contain only letters and numbers (no spaces or special characters)')
    if not _UPPER.search(password):
        errors.append('Password must include at least 1 uppercase letter')
    if not _LOWER.search(password):
        errors.append('Password must include at least 1 lowercase letter')
    if not _DIGIT.search(password):
        errors.append('Password must include at least 1 number')

    return not errors, errors
