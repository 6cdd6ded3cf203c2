"""Coping-tools workflow as seen from the app.

`CopingToolsFlow` loads the catalog and the user's completions once, records
completions as the user taps tools, and, when the screen was opened from the
craving flow, writes one journal entry as soon as every mandatory tool is
done.
"""
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Optional

from client.api import ApiRequestError
from services.mandatory_tools import (
    all_mandatory_completed,
    completed_mandatory_count,
    completed_tool_ids,
    mandatory_tools,
)

logger = logging.getLogger(__name__)

DEFAULT_AUTO_JOURNAL_INTENSITY = 5
AUTO_JOURNAL_NOTES = (
    'Completed all mandatory coping tools during a craving. '
    'This entry was added automatically.'
)
COMPLETE_FAILED_MESSAGE = 'Failed to mark the tool as complete. Please try again.'
AUTO_JOURNAL_FAILED_MESSAGE = (
    'Your tools were marked complete, but the journal entry could not be saved. '
    'Please add it manually.'
)
IN_FLIGHT_MESSAGE = 'This tool is already being marked complete.'


@dataclass
class CompletionResult:
    completed: bool
    completion: Optional[Dict[str, Any]] = None
    journal_entry: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def auto_journaled(self) -> bool:
        return self.journal_entry is not None


def completed_tool_titles(tools: List[Dict], completions: List[Dict]) -> List[str]:
    """Titles of every completed tool (mandatory or not), in catalog order."""
    done = completed_tool_ids(completions)
    return [tool['title'] for tool in tools if tool['id'] in done]


def build_auto_journal_payload(tools: List[Dict], completions: List[Dict],
                               intensity: int = DEFAULT_AUTO_JOURNAL_INTENSITY) -> Dict[str, Any]:
    return {
        'had_craving': True,
        'triggers': [],
        'intensity': intensity,
        'tools_used': completed_tool_titles(tools, completions),
        'outcome': 'resisted',
        'notes': AUTO_JOURNAL_NOTES,
    }


class CopingToolsFlow:

    def __init__(self, api, from_craving_flow=False, session_id=None,
                 auto_journal_intensity=DEFAULT_AUTO_JOURNAL_INTENSITY):
        self.api = api
        self.from_craving_flow = from_craving_flow
        self.session_id = session_id
        self.auto_journal_intensity = auto_journal_intensity
        self.tools: List[Dict] = []
        self.completions: List[Dict] = []
        self.loaded = False
        self.in_flight = set()

    def load(self):
        """Fetch the catalog and the ledger (scoped to the craving session when there is one)."""
        params = {'session_id': self.session_id} if self.session_id else None
        self.tools = self.api.get('/api/coping-tools')
        self.completions = self.api.get('/api/coping-tools/completions', params=params)
        self.loaded = True
        logger.info(f'Loaded {len(self.tools)} tools, {len(self.completions)} completions')
        return self

    def is_mandatory(self, tool_id) -> bool:
        return any(tool['id'] == tool_id for tool in mandatory_tools(self.tools))

    def is_completed(self, tool_id) -> bool:
        return tool_id in completed_tool_ids(self.completions)

    def all_mandatory_completed(self) -> bool:
        return all_mandatory_completed(self.tools, self.completions)

    def progress_text(self) -> str:
        done = completed_mandatory_count(self.tools, self.completions)
        return f'{done} / {len(mandatory_tools(self.tools))} completed'

    def complete_tool(self, tool_id) -> CompletionResult:
        """Record a completion and auto-journal if it finished the mandatory set.

        A failed journal write does not undo the completion; the result carries
        a message asking the user to add the entry by hand. Nothing prevents a
        second entry if the set is satisfied again later.
        """
        if tool_id in self.in_flight:
            return CompletionResult(completed=False, error=IN_FLIGHT_MESSAGE)

        body = {'tool_id': tool_id}
        if self.session_id:
            body['session_id'] = self.session_id

        self.in_flight.add(tool_id)
        try:
            response = self.api.post('/api/coping-tools/complete', body)
        except ApiRequestError as e:
            logger.error(f'Failed to complete tool {tool_id}: {e.message}')
            return CompletionResult(completed=False, error=COMPLETE_FAILED_MESSAGE)
        finally:
            self.in_flight.discard(tool_id)

        completion = response['completion']
        # Evaluate against the merged list rather than a refetch that may be stale
        merged = [completion] + self.completions
        self.completions = merged

        if not self.from_craving_flow or not all_mandatory_completed(self.tools, merged):
            return CompletionResult(completed=True, completion=completion)

        logger.info('All mandatory tools completed, creating journal entry')
        payload = build_auto_journal_payload(self.tools, merged, self.auto_journal_intensity)
        try:
            entry = self.api.post('/api/journal', payload)
        except ApiRequestError as e:
            logger.error(f'Failed to create auto journal entry: {e.message}')
            return CompletionResult(completed=True, completion=completion, error=AUTO_JOURNAL_FAILED_MESSAGE)

        return CompletionResult(completed=True, completion=completion, journal_entry=entry)
