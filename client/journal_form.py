"""Manual journal entry form.

This is the one place the 1-10 intensity range is enforced; the API accepts
whatever integer it is given.
"""
from typing import Any, Dict, Iterable, Optional

OUTCOMES = ('resisted', 'partial', 'used')


class FormError(ValueError):
    pass


def build_journal_payload(outcome: str, had_craving: bool = False, triggers: Iterable[str] = (),
                          intensity: Optional[int] = None, tools_used: Iterable[str] = (),
                          notes: Optional[str] = None) -> Dict[str, Any]:
    """Validate the form fields and return the POST /api/journal body."""
    if outcome not in OUTCOMES:
        raise FormError('Please choose an outcome')

    if not had_craving:
        intensity = None
    elif intensity is not None and not (isinstance(intensity, int) and 1 <= intensity <= 10):
        raise FormError('Intensity must be between 1 and 10')

    return {
        'had_craving': bool(had_craving),
        'triggers': [t for t in triggers if t and t.strip()],
        'intensity': intensity,
        'tools_used': [t for t in tools_used if t and t.strip()],
        'outcome': outcome,
        'notes': notes.strip() if notes and notes.strip() else None,
    }
