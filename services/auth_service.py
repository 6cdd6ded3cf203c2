"""Bearer token management.

Stands in for the hosted auth provider: sign-in issues an opaque token backed
by an `AuthSession` row, and every authenticated request resolves it back to
a user.
"""
from datetime import datetime, timedelta
import secrets
from typing import Optional

from flask import current_app

from extensions import db
from models import AuthSession, User
from services.errors import AuthenticationError


class AuthService:

    def issue_token(self, user: User) -> AuthSession:
        """Create a new bearer token for the user"""
        lifetime = current_app.config.get('AUTH_TOKEN_LIFETIME', 30 * 86400)
        auth_session = AuthSession(
            user_id=user.id,
            token=secrets.token_urlsafe(32),
            expires_at=datetime.utcnow() + timedelta(seconds=lifetime),
        )
        db.session.add(auth_session)
        db.session.commit()
        current_app.logger.info(f'Auth session created for user {user.id}')
        return auth_session

    def authenticate(self, email: str, password: str) -> AuthSession:
        """Check credentials and issue a token, or raise AuthenticationError."""
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError('Invalid email or password')
        email = email.strip().lower()
        user = User.query.filter_by(email=email).first()
        if user is None or not user.check_password(password):
            current_app.logger.warning(f'Failed sign-in attempt for {email}')
            raise AuthenticationError('Invalid email or password')
        return self.issue_token(user)

    def resolve_token(self, token: str) -> Optional[AuthSession]:
        """Active session for the token, or None if unknown, expired or revoked."""
        if not token:
            return None
        auth_session = AuthSession.query.filter_by(token=token).first()
        if auth_session is None or not auth_session.is_active:
            return None
        return auth_session

    def revoke_token(self, token: str) -> bool:
        auth_session = AuthSession.query.filter_by(token=token).first()
        if auth_session is None or auth_session.revoked_at is not None:
            return False
        auth_session.revoked_at = datetime.utcnow()
        db.session.commit()
        current_app.logger.info(f'Auth session revoked for user {auth_session.user_id}')
        return True

    def revoke_all(self, user_id: str, keep_token: Optional[str] = None) -> int:
        """Revoke every active token of the user except `keep_token`."""
        now = datetime.utcnow()
        revoked = 0
        for auth_session in AuthSession.query.filter_by(user_id=user_id, revoked_at=None).all():
            if auth_session.token != keep_token:
                auth_session.revoked_at = now
                revoked += 1
        db.session.commit()
        return revoked
