"""Coping tool catalog and completion ledger.

Completions are append-only: nothing here updates or deletes a ledger row,
and repeated completions of the same tool are kept as separate rows.
"""
from datetime import datetime
from typing import Dict, List, Optional

from flask import current_app
from sqlalchemy import desc

from extensions import db
from models import CopingTool, CopingToolCompletion, CravingSession
from services.errors import AuthorizationError, NotFoundError, ValidationError
from services.mandatory_tools import mandatory_progress


def list_coping_tools() -> List[CopingTool]:
    """The whole catalog, ordered by title."""
    return CopingTool.query.order_by(CopingTool.title).all()


def _check_session(user_id: str, session_id: str) -> CravingSession:
    craving_session = db.session.get(CravingSession, session_id)
    if craving_session is None:
        current_app.logger.warning(f'Craving session {session_id} not found (user {user_id})')
        raise NotFoundError('Craving session not found')
    if craving_session.user_id != user_id:
        current_app.logger.warning(
            f'User {user_id} attempted to use craving session {session_id} owned by {craving_session.user_id}')
        raise AuthorizationError('Unauthorized')
    return craving_session


def record_completion(user_id: str, tool_id: str, session_id: Optional[str] = None) -> CopingToolCompletion:
    """Append a completion of `tool_id` for the user.

    The tool must exist; a session id, when given, must name one of the
    user's craving sessions. Identical requests are not deduplicated.
    """
    if not tool_id or not isinstance(tool_id, str):
        raise ValidationError('tool_id is required')
    if session_id is not None and not isinstance(session_id, str):
        raise ValidationError('session_id must be a string')

    tool = db.session.get(CopingTool, tool_id)
    if tool is None:
        current_app.logger.warning(f'Coping tool {tool_id} not found (user {user_id})')
        raise NotFoundError('Coping tool not found')

    if session_id:
        _check_session(user_id, session_id)

    completion = CopingToolCompletion(
        user_id=user_id,
        tool_id=tool.id,
        session_id=session_id or None,
        completed_at=datetime.utcnow(),
    )
    db.session.add(completion)
    db.session.commit()
    current_app.logger.info(
        f'Coping tool completion {completion.id} recorded for user {user_id} (tool {tool_id}, session {session_id})')
    return completion


def list_completions(user_id: str, session_id: Optional[str] = None) -> List[CopingToolCompletion]:
    """Caller's completions, newest first, optionally scoped to one craving session."""
    query = CopingToolCompletion.query.filter(CopingToolCompletion.user_id == user_id)
    if session_id:
        query = query.filter(CopingToolCompletion.session_id == session_id)
    return query.order_by(desc(CopingToolCompletion.completed_at)).all()


def get_mandatory_progress(user_id: str, session_id: Optional[str] = None) -> Dict:
    """How many mandatory tools the user has completed, and whether that is all of them."""
    return mandatory_progress(list_coping_tools(), list_completions(user_id, session_id))
