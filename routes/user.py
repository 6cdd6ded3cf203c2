from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from routes.auth import get_current_user, login_required
from services import validation
from services.user_service import change_password as change_user_password
from services.user_service import get_profile as get_user_profile
from services.user_service import update_profile
from services.errors import UpstreamError
from services.patches import ProfilePatch

user_bp = Blueprint('user', __name__)


@user_bp.route('/profile', methods=['GET'])
@login_required
def get_profile():
    user = get_current_user()
    current_app.logger.info(f'Fetching profile for user {user.id}')
    return jsonify(get_user_profile(user))


@user_bp.route('/profile', methods=['PUT'])
@login_required
def put_profile():
    user = get_current_user()
    patch = ProfilePatch.from_json(request.get_json(silent=True))
    current_app.logger.info(f'Updating profile for user {user.id}: {sorted(patch.changes())}')

    try:
        user = update_profile(user, patch)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to update profile for user {user.id}: {e}')
        raise UpstreamError('Failed to update profile') from e
    return jsonify(user.to_dict())


@user_bp.route('/change-password', methods=['POST'])
@login_required
def change_password():
    user = get_current_user()
    data = validation.json_object(request.get_json(silent=True))
    message = 'currentPassword and newPassword are required'
    current_password = validation.required_text(data.get('currentPassword'), message)
    new_password = validation.required_text(data.get('newPassword'), message)

    try:
        change_user_password(user, current_password, new_password, keep_token=g.auth_token)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Failed to change password for user {user.id}: {e}')
        raise UpstreamError('Failed to change password') from e
    return jsonify(success=True)
