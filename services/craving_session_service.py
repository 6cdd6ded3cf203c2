"""Craving session service functions."""
from datetime import datetime, timezone
from typing import List

from flask import current_app
from sqlalchemy import desc

from extensions import db
from models import CravingSession, NEED_TYPES
from services import validation
from services.errors import ValidationError
from services.ownership import get_owned_or_raise
from services.patches import CravingSessionPatch


def create_session(user_id: str, data: dict) -> CravingSession:
    """Open a craving session from the guided craving flow."""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    need_type = data.get('need_type')
    if need_type not in NEED_TYPES:
        current_app.logger.warning(f'Invalid need_type {need_type!r} from user {user_id}')
        raise ValidationError('Invalid need_type value')

    craving_session = CravingSession(
        user_id=user_id,
        triggers=validation.string_list(data.get('triggers'), 'triggers'),
        intensity=validation.intensity(data.get('intensity')),
        need_type=need_type,
        started_at=datetime.utcnow(),
    )
    db.session.add(craving_session)
    db.session.commit()
    current_app.logger.info(f'Craving session {craving_session.id} created for user {user_id} ({need_type})')
    return craving_session


def list_sessions(user_id: str) -> List[CravingSession]:
    return CravingSession.query.filter_by(user_id=user_id).order_by(desc(CravingSession.started_at)).all()


def _parse_timestamp(value):
    """ISO-8601 text to a naive UTC datetime; None clears the field."""
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValidationError('completed_at must be an ISO-8601 timestamp')
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        raise ValidationError('completed_at must be an ISO-8601 timestamp')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def update_session(user_id: str, session_id: str, patch: CravingSessionPatch) -> CravingSession:
    craving_session = get_owned_or_raise(CravingSession, session_id, user_id, 'Craving session')
    if patch.is_set('completed_at'):
        patch.completed_at = _parse_timestamp(patch.completed_at)
    patch.require_changes()

    patch.apply_to(craving_session)
    db.session.commit()
    current_app.logger.info(f'Craving session {session_id} updated for user {user_id}')
    return craving_session
