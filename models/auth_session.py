"""Auth session model definition.
Bearer tokens handed out at sign-in and checked on every authenticated request.
"""
from datetime import datetime
from uuid import uuid4
from extensions import db

class AuthSession(db.Model):
    __tablename__ = 'auth_sessions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    token = db.Column(db.String(100), unique=True, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    revoked_at = db.Column(db.DateTime, nullable=True)

    @property
    def is_active(self):
        return self.revoked_at is None and datetime.utcnow() < self.expires_at

    def to_dict(self):
        return {
            'token': self.token,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'expires_at': self.expires_at.isoformat() if self.expires_at else None,
        }

    def __repr__(self):
        return f'<AuthSession {self.user_id} - {self.created_at}>'
