from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from routes.auth import get_current_user, login_required
from services import craving_session_service
from services.errors import UpstreamError
from services.patches import CravingSessionPatch

craving_sessions_bp = Blueprint('craving_sessions', __name__)


@craving_sessions_bp.route('', methods=['POST'])
@login_required
def add_session():
    user = get_current_user()
    try:
        craving_session = craving_session_service.create_session(user.id, request.get_json(silent=True))
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to create craving session for user {user.id}: {e}')
        raise UpstreamError('Failed to create craving session') from e
    return jsonify(craving_session.to_dict()), 201


@craving_sessions_bp.route('', methods=['GET'])
@login_required
def get_sessions():
    user = get_current_user()
    try:
        sessions = craving_session_service.list_sessions(user.id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch craving sessions for user {user.id}: {e}')
        raise UpstreamError('Failed to fetch craving sessions') from e
    return jsonify([craving_session.to_dict() for craving_session in sessions])


@craving_sessions_bp.route('/<session_id>', methods=['PUT'])
@login_required
def update_session(session_id):
    user = get_current_user()
    patch = CravingSessionPatch.from_json(request.get_json(silent=True))

    try:
        craving_session = craving_session_service.update_session(user.id, session_id, patch)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to update craving session {session_id} for user {user.id}: {e}')
        raise UpstreamError('Failed to update craving session') from e
    return jsonify(craving_session.to_dict())
