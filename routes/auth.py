from functools import wraps

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from services import validation
from services.user_service import create_user
from services.auth_service import AuthService
from services.errors import AuthenticationError, UpstreamError

auth_bp = Blueprint('auth', __name__)


def _bearer_token():
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


# Helper function for login required decorator
def login_required(f):
    """Decorator to require a valid bearer token for API routes"""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_session = AuthService().resolve_token(_bearer_token())
        if auth_session is None:
            return jsonify(error='Authentication required'), 401
        g.auth_token = auth_session.token
        g.current_user = auth_session.user
        return f(*args, **kwargs)
    return decorated_function


def get_current_user():
    """Get the user behind the request's bearer token"""
    return g.get('current_user')


@auth_bp.route('/sign-up', methods=['POST'])
def sign_up():
    data = validation.json_object(request.get_json(silent=True))
    email = data.get('email')
    current_app.logger.info(f'Sign-up requested for {email}')

    try:
        user = create_user(
            email=email,
            password=data.get('password'),
            display_name=validation.optional_text(data.get('name'), 'name'),
        )
        auth_session = AuthService().issue_token(user)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Sign-up error for {email}: {e}')
        raise UpstreamError('Failed to create account') from e

    return jsonify(user=user.to_dict(), session=auth_session.to_dict()), 201


@auth_bp.route('/sign-in', methods=['POST'])
def sign_in():
    data = validation.json_object(request.get_json(silent=True))
    message = 'Please enter both email and password'
    email = validation.required_text(data.get('email'), message)
    password = validation.required_text(data.get('password'), message)

    try:
        auth_session = AuthService().authenticate(email, password)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Sign-in error: {e}')
        raise UpstreamError('Failed to sign in') from e

    current_app.logger.info(f'User {auth_session.user_id} signed in')
    return jsonify(user=auth_session.user.to_dict(), session=auth_session.to_dict())


@auth_bp.route('/sign-out', methods=['POST'])
@login_required
def sign_out():
    user = get_current_user()
    AuthService().revoke_token(g.auth_token)
    current_app.logger.info(f'User {user.id} signed out')
    return jsonify(success=True)


@auth_bp.route('/session', methods=['GET'])
def current_session():
    """Session lookup polled by clients; 401 when the token is no longer valid."""
    auth_session = AuthService().resolve_token(_bearer_token())
    if auth_session is None:
        raise AuthenticationError('Authentication required')
    return jsonify(user=auth_session.user.to_dict(), session=auth_session.to_dict())
