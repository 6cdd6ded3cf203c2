"""Calendar event service functions.

Events keep their date and time as strings, so range filters compare
`YYYY-MM-DD` text directly.
"""
import calendar
import datetime
from typing import List, Optional, Tuple

from flask import current_app
from sqlalchemy import desc

from extensions import db
from models import CalendarEvent
from services import validation
from services.errors import ValidationError
from services.ownership import get_owned_or_raise
from services.patches import CalendarEventPatch

DURATION_MESSAGE = 'Duration must be a positive number'
REMINDER_MESSAGE = 'Reminder must be a non-negative number'


def month_range(month: str) -> Tuple[str, str]:
    """Expand `YYYY-MM` into the first and last day of that month.

    `calendar.monthrange` gives the month length, so leap years and
    December 9999 need no special handling.
    """
    validation.month_string(month)
    year, month_num = (int(part) for part in month.split('-'))
    try:
        start = datetime.date(year, month_num, 1)
    except ValueError:
        raise ValidationError('Invalid month format. Use YYYY-MM')

    end = start.replace(day=calendar.monthrange(year, month_num)[1])
    return start.isoformat(), end.isoformat()


def list_events(user_id: str, date: Optional[str] = None, month: Optional[str] = None) -> List[CalendarEvent]:
    """Caller's events for a day, a month, or all time, latest first."""
    query = CalendarEvent.query.filter(CalendarEvent.user_id == user_id)

    if date:
        validation.date_string(date)
        query = query.filter(CalendarEvent.date == date)
    elif month:
        start, end = month_range(month)
        query = query.filter(CalendarEvent.date >= start, CalendarEvent.date <= end)

    return query.order_by(desc(CalendarEvent.date), desc(CalendarEvent.time)).all()


def _positive_duration(value):
    value = validation.whole_number(value, DURATION_MESSAGE)
    if value <= 0:
        raise ValidationError(DURATION_MESSAGE)
    return value


def _non_negative_reminder(value):
    value = validation.whole_number(value, REMINDER_MESSAGE)
    if value < 0:
        raise ValidationError(REMINDER_MESSAGE)
    return value


def _title(value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError('Title is required')
    return value.strip()


def create_event(user_id: str, data: dict) -> CalendarEvent:
    """Validate and persist a new event for the user."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    event_date = validation.date_string(data.get('date'))
    event_time = validation.time_string(data.get('time'))
    duration = _positive_duration(data.get('duration'))
    reminder = _non_negative_reminder(data.get('reminder'))
    title = _title(data.get('title'))
    reminder_enabled = data.get('reminder_enabled')
    reminder_enabled = True if reminder_enabled is None else validation.boolean(reminder_enabled, 'reminder_enabled')

    event = CalendarEvent(
        user_id=user_id,
        title=title,
        description=validation.optional_text(data.get('description'), 'description'),
        date=event_date,
        time=event_time,
        duration=duration,
        reminder=reminder,
        reminder_enabled=reminder_enabled,
    )
    db.session.add(event)
    db.session.commit()
    current_app.logger.info(f'Calendar event {event.id} created for user {user_id} on {event_date} {event_time}')
    return event


def _clean_patch(patch: CalendarEventPatch) -> CalendarEventPatch:
    """Validate the fields present in the patch, normalizing them in place."""
    if patch.is_set('title'):
        patch.title = _title(patch.title)
    if patch.is_set('description'):
        patch.description = validation.optional_text(patch.description, 'description')
    if patch.is_set('date'):
        patch.date = validation.date_string(patch.date)
    if patch.is_set('time'):
        patch.time = validation.time_string(patch.time)
    if patch.is_set('duration'):
        patch.duration = _positive_duration(patch.duration)
    if patch.is_set('reminder'):
        patch.reminder = _non_negative_reminder(patch.reminder)
    if patch.is_set('reminder_enabled'):
        patch.reminder_enabled = validation.boolean(patch.reminder_enabled, 'reminder_enabled')
    return patch


def update_event(user_id: str, event_id: str, patch: CalendarEventPatch) -> CalendarEvent:
    event = get_owned_or_raise(CalendarEvent, event_id, user_id, 'Calendar event')
    _clean_patch(patch)
    patch.require_changes()

    patch.apply_to(event)
    db.session.commit()
    current_app.logger.info(
        f'Calendar event {event_id} updated for user {user_id}: {sorted(patch.changes())}')
    return event


def delete_event(user_id: str, event_id: str) -> None:
    event = get_owned_or_raise(CalendarEvent, event_id, user_id, 'Calendar event')
    db.session.delete(event)
    db.session.commit()
    current_app.logger.info(f'Calendar event {event_id} deleted for user {user_id}')
