"""Journal entry model definition.
Entries are typed by the user or synthesized once all mandatory coping tools
are completed during a craving.
"""
from datetime import datetime
from uuid import uuid4
from extensions import db

OUTCOMES = ('resisted', 'partial', 'used')

class JournalEntry(db.Model):
    __tablename__ = 'journal_entries'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('user.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    had_craving = db.Column(db.Boolean, default=False, nullable=False)
    triggers = db.Column(db.JSON, nullable=False, default=list)
    intensity = db.Column(db.Integer, nullable=True)
    tools_used = db.Column(db.JSON, nullable=False, default=list)  # free-text labels
    outcome = db.Column(db.String(20), nullable=False)
    notes = db.Column(db.Text)

    def to_dict(self):
        return {
            'id': self.id,
            'created_at': self.created_at.isoformat(),
            'had_craving': self.had_craving,
            'triggers': list(self.triggers or []),
            'intensity': self.intensity,
            'tools_used': list(self.tools_used or []),
            'outcome': self.outcome,
            'notes': self.notes,
        }

    def __repr__(self):
        return f'<JournalEntry {self.user_id} - {self.created_at} - {self.outcome}>'
