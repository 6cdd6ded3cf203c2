"""Journal service functions.

These helpers create, browse, edit and summarize journal entries. Entries
written by hand and entries synthesized after the mandatory coping tools are
completed go through the same `create_entry` path.
"""
from collections import Counter
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy import desc

from extensions import db
from models import JournalEntry, OUTCOMES
from services import validation
from services.errors import ValidationError
from services.ownership import get_owned_or_raise
from services.patches import JournalEntryPatch

OUTCOME_MESSAGE = 'Outcome must be one of: ' + ', '.join(OUTCOMES)


def _outcome(value) -> str:
    if value not in OUTCOMES:
        raise ValidationError(OUTCOME_MESSAGE)
    return value


def _optional_intensity(value) -> Optional[int]:
    # Range is checked by the manual entry form, not here
    if value is None:
        return None
    return validation.whole_number(value, 'Intensity must be a number')


def create_entry(user_id: str, data: dict) -> JournalEntry:
    """Validate and persist a journal entry for the user."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    had_craving = data.get('had_craving', False)
    entry = JournalEntry(
        user_id=user_id,
        had_craving=validation.boolean(had_craving, 'had_craving'),
        triggers=validation.string_list(data.get('triggers'), 'triggers'),
        intensity=_optional_intensity(data.get('intensity')),
        tools_used=validation.string_list(data.get('tools_used'), 'tools_used'),
        outcome=_outcome(data.get('outcome')),
        notes=validation.optional_text(data.get('notes'), 'notes'),
    )
    db.session.add(entry)
    db.session.commit()
    current_app.logger.info(f'Journal entry {entry.id} created for user {user_id} (outcome {entry.outcome})')
    return entry


def list_entries(user_id: str, limit: Optional[int] = None) -> List[JournalEntry]:
    """Caller's entries, newest first."""
    query = JournalEntry.query.filter_by(user_id=user_id).order_by(desc(JournalEntry.created_at))
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_entry(user_id: str, entry_id: str) -> JournalEntry:
    return get_owned_or_raise(JournalEntry, entry_id, user_id, 'Journal entry')


def update_entry(user_id: str, entry_id: str, patch: JournalEntryPatch) -> JournalEntry:
    entry = get_owned_or_raise(JournalEntry, entry_id, user_id, 'Journal entry')

    if patch.is_set('had_craving'):
        patch.had_craving = validation.boolean(patch.had_craving, 'had_craving')
    if patch.is_set('triggers'):
        patch.triggers = validation.string_list(patch.triggers, 'triggers')
    if patch.is_set('intensity'):
        patch.intensity = _optional_intensity(patch.intensity)
    if patch.is_set('tools_used'):
        patch.tools_used = validation.string_list(patch.tools_used, 'tools_used')
    if patch.is_set('outcome'):
        patch.outcome = _outcome(patch.outcome)
    if patch.is_set('notes'):
        patch.notes = validation.optional_text(patch.notes, 'notes')
    patch.require_changes()

    patch.apply_to(entry)
    db.session.commit()
    current_app.logger.info(f'Journal entry {entry_id} updated for user {user_id}: {sorted(patch.changes())}')
    return entry


def delete_entry(user_id: str, entry_id: str) -> None:
    entry = get_owned_or_raise(JournalEntry, entry_id, user_id, 'Journal entry')
    db.session.delete(entry)
    db.session.commit()
    current_app.logger.info(f'Journal entry {entry_id} deleted for user {user_id}')


def _most_common(labels: List[str], top_n: int) -> List[str]:
    # Counter.most_common keeps first-seen order among equal counts
    return [label for label, _ in Counter(labels).most_common(top_n)]


def get_journal_stats(user_id: str, window: Optional[int] = None, top_n: Optional[int] = None) -> Dict:
    """Outcome counts, most frequent triggers and tools, and average intensity.

    Counts cover every entry; the trigger and tool rankings only look at the
    `window` most recent entries.
    """
    window = window or current_app.config.get('JOURNAL_STATS_WINDOW', 20)
    top_n = top_n or current_app.config.get('JOURNAL_STATS_TOP_N', 10)

    entries = list_entries(user_id)
    outcome_counts = Counter(entry.outcome for entry in entries)
    intensities = [entry.intensity for entry in entries if entry.intensity is not None]

    recent = entries[:window]
    recent_triggers = [trigger for entry in recent for trigger in (entry.triggers or [])]
    recent_tools = [tool for entry in recent for tool in (entry.tools_used or [])]

    return {
        'totalEntries': len(entries),
        'cravingCount': sum(1 for entry in entries if entry.had_craving),
        'resistedCount': outcome_counts['resisted'],
        'partialCount': outcome_counts['partial'],
        'usedCount': outcome_counts['used'],
        'commonTriggers': _most_common(recent_triggers, top_n),
        'commonTools': _most_common(recent_tools, top_n),
        'averageIntensity': round(sum(intensities) / len(intensities), 1) if intensities else 0,
    }
