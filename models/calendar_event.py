"""Calendar event model definition.
Date and time are kept as the `YYYY-MM-DD` / `HH:MM` strings the client sends,
so lexical ordering matches chronological ordering.
"""
from datetime import datetime
from uuid import uuid4
from extensions import db

class CalendarEvent(db.Model):
    __tablename__ = 'calendar_events'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.String(10), nullable=False, index=True)
    time = db.Column(db.String(5), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    reminder = db.Column(db.Integer, nullable=False, default=0)  # minutes before start
    reminder_enabled = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': self.date,
            'time': self.time,
            'duration': self.duration,
            'reminder': self.reminder,
            'reminder_enabled': self.reminder_enabled,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<CalendarEvent {self.user_id} - {self.date} {self.time}>'
