# Python client for the Recovery Tracker API

from .api import ApiClient, ApiRequestError
from .coping_tools import CompletionResult, CopingToolsFlow
from .journal_form import FormError, build_journal_payload
from .session import SessionContext

__all__ = [
    'ApiClient',
    'ApiRequestError',
    'CompletionResult',
    'CopingToolsFlow',
    'FormError',
    'build_journal_payload',
    'SessionContext',
]
