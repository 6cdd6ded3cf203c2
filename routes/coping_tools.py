from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from routes.auth import get_current_user, login_required
from services import validation
from services.coping_tool_service import get_mandatory_progress, list_completions, list_coping_tools, record_completion
from services.errors import UpstreamError

coping_tools_bp = Blueprint('coping_tools', __name__)


@coping_tools_bp.route('', methods=['GET'])
def get_coping_tools():
    """Public catalog; `is_mandatory` on each tool is the only mandatory-set definition."""
    current_app.logger.info('Fetching all coping tools')
    try:
        tools = list_coping_tools()
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch coping tools: {e}')
        raise UpstreamError('Failed to fetch coping tools') from e
    return jsonify([tool.to_dict() for tool in tools])


@coping_tools_bp.route('/complete', methods=['POST'])
@login_required
def complete_tool():
    user = get_current_user()
    data = validation.json_object(request.get_json(silent=True))
    tool_id = data.get('tool_id')
    session_id = data.get('session_id')
    current_app.logger.info(f'Recording coping tool completion for user {user.id} (tool {tool_id}, session {session_id})')

    try:
        completion = record_completion(user.id, tool_id, session_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to record completion for user {user.id} (tool {tool_id}): {e}')
        raise UpstreamError('Failed to record coping tool completion') from e

    return jsonify(success=True, completion=completion.to_dict())


@coping_tools_bp.route('/completions', methods=['GET'])
@login_required
def get_completions():
    user = get_current_user()
    session_id = request.args.get('session_id') or None

    try:
        completions = list_completions(user.id, session_id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to fetch completions for user {user.id} (session {session_id}): {e}')
        raise UpstreamError('Failed to fetch coping tool completions') from e

    current_app.logger.info(f'Fetched {len(completions)} completions for user {user.id}')
    return jsonify([completion.to_dict() for completion in completions])


@coping_tools_bp.route('/progress', methods=['GET'])
@login_required
def get_progress():
    user = get_current_user()
    session_id = request.args.get('session_id') or None

    try:
        progress = get_mandatory_progress(user.id, session_id)
    except SQLAlchemyError as e:
        current_app.logger.error(f'Failed to compute mandatory progress for user {user.id}: {e}')
        raise UpstreamError('Failed to compute coping tool progress') from e

    return jsonify(progress)
