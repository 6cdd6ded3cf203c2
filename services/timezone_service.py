"""Timezone helpers for user profile data."""
from datetime import date, datetime
from typing import Optional

import pytz
from pytz import timezone as pytz_timezone


def validate_timezone(timezone_str: str) -> bool:
    """
    Validate if timezone string is valid.

    Args:
        timezone_str: Timezone string to validate

    Returns:
        True if valid, False otherwise
    """
    try:
        pytz_timezone(timezone_str)
        return True
    except pytz.exceptions.UnknownTimeZoneError:
        return False


def get_user_today(user_timezone: Optional[str], now: Optional[datetime] = None) -> date:
    """
    Current calendar date in the user's timezone.

    Args:
        user_timezone: tz database name; unknown or empty values fall back to UTC
        now: aware UTC datetime to evaluate instead of the current time
    """
    if not user_timezone or not validate_timezone(user_timezone):
        user_timezone = 'UTC'
    utc_now = now or datetime.now(pytz.UTC)
    return utc_now.astimezone(pytz_timezone(user_timezone)).date()
