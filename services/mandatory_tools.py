"""Mandatory coping-tool evaluation.

Pure functions over small in-memory collections. They accept ORM rows or the
JSON dicts returned by the API, so the server and the Python client share one
definition of "all mandatory tools are done".
"""
from typing import Any, Dict, Iterable, List, Set


def _field(item: Any, name: str, default=None):
    if isinstance(item, dict):
        return item.get(name, default)
    return getattr(item, name, default)


def mandatory_tools(tools: Iterable[Any]) -> List[Any]:
    """Tools flagged mandatory, in catalog order."""
    return [tool for tool in tools if _field(tool, 'is_mandatory', False)]


def completed_tool_ids(completions: Iterable[Any]) -> Set[str]:
    """Ids of tools with at least one completion; duplicates collapse."""
    return {_field(completion, 'tool_id') for completion in completions}


def completed_mandatory_count(tools: Iterable[Any], completions: Iterable[Any]) -> int:
    """Number of mandatory tools (not completions) that have been completed."""
    done = completed_tool_ids(completions)
    return sum(1 for tool in mandatory_tools(tools) if _field(tool, 'id') in done)


def all_mandatory_completed(tools: Iterable[Any], completions: Iterable[Any]) -> bool:
    """True when every mandatory tool has a completion.

    An empty mandatory set is never satisfied, so an unloaded catalog cannot
    trigger an automatic journal entry.
    """
    required = mandatory_tools(tools)
    if not required:
        return False
    done = completed_tool_ids(completions)
    return all(_field(tool, 'id') in done for tool in required)


def mandatory_progress(tools: Iterable[Any], completions: Iterable[Any]) -> Dict[str, Any]:
    tools = list(tools)
    completions = list(completions)
    return {
        'completed': completed_mandatory_count(tools, completions),
        'total': len(mandatory_tools(tools)),
        'satisfied': all_mandatory_completed(tools, completions),
    }
