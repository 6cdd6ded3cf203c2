"""
Unit tests for the mandatory coping-tool evaluator.
"""
from services.mandatory_tools import (
    all_mandatory_completed,
    completed_mandatory_count,
    completed_tool_ids,
    mandatory_progress,
    mandatory_tools,
)

TOOLS = [
    {'id': 't1', 'title': 'Deep Breathing', 'is_mandatory': True},
    {'id': 't2', 'title': 'Box Breathing', 'is_mandatory': True},
    {'id': 't3', 'title': 'Grounding Exercise', 'is_mandatory': True},
    {'id': 't4', 'title': 'Short Walk', 'is_mandatory': False},
]


def completions(*tool_ids):
    return [{'tool_id': tool_id} for tool_id in tool_ids]


class TestMandatoryEvaluator:
    """Test cases for the evaluator functions."""

    def test_mandatory_tools_keeps_catalog_order(self):
        assert [tool['id'] for tool in mandatory_tools(TOOLS)] == ['t1', 't2', 't3']

    def test_all_mandatory_completed(self):
        assert all_mandatory_completed(TOOLS, completions('t1', 't2', 't3'))

    def test_missing_one_mandatory_tool(self):
        assert not all_mandatory_completed(TOOLS, completions('t1', 't2', 't4'))

    def test_duplicates_do_not_count_twice(self):
        """Completing the same tool twice is still one tool."""
        ledger = completions('t1', 't1', 't2')
        assert completed_mandatory_count(TOOLS, ledger) == 2
        assert not all_mandatory_completed(TOOLS, ledger)

    def test_non_mandatory_completions_ignored(self):
        assert completed_mandatory_count(TOOLS, completions('t4', 't4')) == 0

    def test_empty_mandatory_set_never_satisfied(self):
        tools = [{'id': 't4', 'is_mandatory': False}]
        assert not all_mandatory_completed(tools, completions('t4'))
        assert not all_mandatory_completed([], [])

    def test_completed_tool_ids_collapses_duplicates(self):
        assert completed_tool_ids(completions('t1', 't1', 't4')) == {'t1', 't4'}

    def test_works_with_objects(self):
        """ORM rows and plain objects are read through attributes."""
        class Row:
            def __init__(self, **kwargs):
                self.__dict__.update(kwargs)

        tools = [Row(id='a', is_mandatory=True), Row(id='b', is_mandatory=False)]
        assert all_mandatory_completed(tools, [Row(tool_id='a')])

    def test_mandatory_progress(self):
        progress = mandatory_progress(TOOLS, completions('t1', 't3'))
        assert progress == {'completed': 2, 'total': 3, 'satisfied': False}
