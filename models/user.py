"""User model definition.
This module defines the User ORM model and any user-related helper methods.
"""
from datetime import datetime
from uuid import uuid4

from extensions import db, bcrypt

class User(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    email_verified = db.Column(db.Boolean, default=False)

    # Profile information
    display_name = db.Column(db.String(120))
    timezone = db.Column(db.String(50), default='UTC')
    sponsor_name = db.Column(db.String(120))
    sponsor_phone = db.Column(db.String(40))
    emergency_contact_name = db.Column(db.String(120))
    emergency_contact_phone = db.Column(db.String(40))
    timer_minutes = db.Column(db.Integer, default=15, nullable=False)
    sobriety_date = db.Column(db.Date)
    onboarded = db.Column(db.Boolean, default=False, nullable=False)

    # Relationships
    auth_sessions = db.relationship('AuthSession', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    completions = db.relationship('CopingToolCompletion', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    craving_sessions = db.relationship('CravingSession', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    journal_entries = db.relationship('JournalEntry', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    calendar_events = db.relationship('CalendarEvent', backref='user', lazy='dynamic', cascade='all, delete-orphan')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'display_name': self.display_name,
            'timezone': self.timezone,
            'sponsor_name': self.sponsor_name,
            'sponsor_phone': self.sponsor_phone,
            'emergency_contact_name': self.emergency_contact_name,
            'emergency_contact_phone': self.emergency_contact_phone,
            'timer_minutes': self.timer_minutes,
            'sobriety_date': self.sobriety_date.isoformat() if self.sobriety_date else None,
            'onboarded': self.onboarded,
            'email_verified': self.email_verified,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<User {self.email}>'
