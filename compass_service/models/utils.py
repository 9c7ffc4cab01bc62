"""
Parsing helpers for ranker output.

The text-generation collaborator is asked for a bare JSON array of event IDs
but sometimes wraps it in fenced code markers or adds a sentence around it.
"""

import json
import re
from typing import Any, List

_FENCE_RE = re.compile(r"```(?:json|\w+)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def clean_json_response(response: str) -> str:
    """Strip fenced code markers around a JSON payload."""
    raw = (response or "").strip()
    fenced_match = _FENCE_RE.search(raw)
    if fenced_match:
        return fenced_match.group(1).strip()
    # Unterminated fence, e.g. the model stopped before closing it
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json|\w+)?", "", raw, flags=re.IGNORECASE)
    if raw.endswith("```"):
        raw = raw[:-3]
    return raw.strip()


def coerce_ranked_ids(value: Any) -> List[str]:
    """Validate that ``value`` is a sequence of event ID strings.

    Raises:
        ValueError: if the value is not a list/tuple of strings
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a JSON array of event IDs, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Event IDs must be strings, got {type(item).__name__}")
    return list(value)


def parse_ranked_ids(response: str) -> List[str]:
    """Parse a ranker text response into a list of event IDs.

    Raises:
        ValueError: if no JSON array of strings can be recovered
    """
    cleaned = clean_json_response(response)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        # Prose around the array: fall back to the first bracketed span
        array_match = re.search(r"\[[\s\S]*\]", cleaned)
        if not array_match:
            raise ValueError(f"No JSON array in ranker output: {cleaned[:200]!r}")
        try:
            data = json.loads(array_match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse ranker output: {e}") from e
    return coerce_ranked_ids(data)
