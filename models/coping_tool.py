"""Coping tool models.

`CopingTool` is the seeded catalog of exercises; `CopingToolCompletion` is the
append-only ledger of times a user finished one. A user may complete the same
tool any number of times.
"""
from datetime import datetime
from uuid import uuid4
from extensions import db

class CopingTool(db.Model):
    __tablename__ = 'coping_tools'

    id = db.Column(db.String(64), primary_key=True, default=lambda: str(uuid4()))
    title = db.Column(db.String(120), unique=True, nullable=False)
    duration = db.Column(db.String(40), nullable=False)
    steps = db.Column(db.JSON, nullable=False, default=list)
    when_to_use = db.Column(db.String(255), nullable=False)
    is_mandatory = db.Column(db.Boolean, default=False, nullable=False)

    completions = db.relationship('CopingToolCompletion', backref='tool', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'duration': self.duration,
            'steps': list(self.steps or []),
            'when_to_use': self.when_to_use,
            'is_mandatory': self.is_mandatory,
        }

    def __repr__(self):
        return f'<CopingTool {self.id} mandatory={self.is_mandatory}>'


class CopingToolCompletion(db.Model):
    __tablename__ = 'coping_tool_completions'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    tool_id = db.Column(db.String(64), db.ForeignKey('coping_tools.id'), nullable=False)
    session_id = db.Column(db.String(36), db.ForeignKey('craving_sessions.id', ondelete='SET NULL'), nullable=True)
    completed_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'tool_id': self.tool_id,
            'session_id': self.session_id,
            'completed_at': self.completed_at.isoformat(),
        }

    def __repr__(self):
        return f'<CopingToolCompletion {self.user_id} - {self.tool_id} - {self.completed_at}>'
