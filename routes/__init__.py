# Blueprint registration module

# Import all blueprints
from .auth import auth_bp
from .coping_tools import coping_tools_bp
from .journal import journal_bp
from .calendar_events import calendar_events_bp
from .craving_sessions import craving_sessions_bp
from .user import user_bp

__all__ = [
    'auth_bp',
    'coping_tools_bp',
    'journal_bp',
    'calendar_events_bp',
    'craving_sessions_bp',
    'user_bp',
]
