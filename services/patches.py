"""Partial-update records.

Each PUT body is parsed into a patch whose fields default to `UNSET`. Only
keys present in the request end up set, so an update touches exactly the
columns the caller sent (an explicit `null` is a change, an omitted key is
not).
"""
from dataclasses import dataclass, fields
from typing import Any, Dict

from services.errors import ValidationError


class _Unset:
    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET = _Unset()


class Patch:
    @classmethod
    def from_json(cls, body):
        if not isinstance(body, dict):
            raise ValidationError('Request body must be a JSON object')
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in body.items() if key in names})

    def changes(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not UNSET

    def require_changes(self):
        if not self.changes():
            raise ValidationError('No fields to update')

    def apply_to(self, entity):
        for name, value in self.changes().items():
            setattr(entity, name, value)
        return entity


@dataclass
class CalendarEventPatch(Patch):
    title: Any = UNSET
    description: Any = UNSET
    date: Any = UNSET
    time: Any = UNSET
    duration: Any = UNSET
    reminder: Any = UNSET
    reminder_enabled: Any = UNSET


@dataclass
class JournalEntryPatch(Patch):
    had_craving: Any = UNSET
    triggers: Any = UNSET
    intensity: Any = UNSET
    tools_used: Any = UNSET
    outcome: Any = UNSET
    notes: Any = UNSET


@dataclass
class CravingSessionPatch(Patch):
    completed_at: Any = UNSET


@dataclass
class ProfilePatch(Patch):
    display_name: Any = UNSET
    timezone: Any = UNSET
    sponsor_name: Any = UNSET
    sponsor_phone: Any = UNSET
    emergency_contact_name: Any = UNSET
    emergency_contact_phone: Any = UNSET
    timer_minutes: Any = UNSET
    sobriety_date: Any = UNSET
    onboarded: Any = UNSET
