"""Craving session model definition.
A craving episode opened by the guided craving flow and later marked completed.
"""
from datetime import datetime
from uuid import uuid4
from extensions import db

NEED_TYPES = ('distract', 'calm', 'support', 'escape', 'reflect')

class CravingSession(db.Model):
    __tablename__ = 'craving_sessions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    started_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    completed_at = db.Column(db.DateTime, nullable=True)
    triggers = db.Column(db.JSON, nullable=False, default=list)
    intensity = db.Column(db.Integer, nullable=False)  # 1-10
    need_type = db.Column(db.String(20), nullable=False)

    completions = db.relationship('CopingToolCompletion', backref='session', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'started_at': self.started_at.isoformat(),
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'triggers': list(self.triggers or []),
            'intensity': self.intensity,
            'need_type': self.need_type,
        }

    def __repr__(self):
        return f'<CravingSession {self.user_id} - {self.started_at} - {self.need_type}>'
