"""Recover a JSON value from free-form model output.

Models wrap JSON in prose or code fences, or add narration around an
otherwise valid payload. `recover` tries, in order:

1. a direct parse of the whole (stripped) text,
2. the first fenced code block, optionally tagged ``json``,
3. a balanced bracket scan from the first ``{`` or ``[``.

A strategy that raises or yields ``None`` is a miss. If all three miss,
UnparsableResponse is raised.
"""

import json
import re
from typing import Any, Callable, List, Optional

from providers.errors import UnparsableResponse

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_PAIRS = {"}": "{", "]": "["}


def try_json_parse(payload: str) -> Optional[Any]:
    """Parse JSON, returning None on any failure."""
    try:
        return json.loads(payload)
    except (ValueError, TypeError):
        return None


def extract_from_code_fence(text: str) -> Optional[str]:
    """Inner text of the first fenced block, or None."""
    match = _FENCE_RE.search(text)
    if not match:
        return None
    return match.group(1).strip()


def find_json_block(text: str) -> Optional[str]:
    """Slice from the first opener to the closer that balances it.

    Closers that do not match the innermost open bracket are ignored.
    """
    stack: List[str] = []
    start = -1

    for i, char in enumerate(text):
        if char in "{[":
            if start == -1:
                start = i
            stack.append(char)
            continue

        if char in _PAIRS:
            if not stack:
                continue
            if stack[-1] == _PAIRS[char]:
                stack.pop()
                if not stack:
                    return text[start:i + 1]

    return None


def _direct(raw: str) -> Optional[Any]:
    return try_json_parse(raw.strip())


def _fenced(raw: str) -> Optional[Any]:
    payload = extract_from_code_fence(raw)
    return try_json_parse(payload) if payload else None


def _balanced(raw: str) -> Optional[Any]:
    payload = find_json_block(raw)
    return try_json_parse(payload) if payload else None


STRATEGIES: List[Callable[[str], Optional[Any]]] = [_direct, _fenced, _balanced]


def recover(raw_text: Optional[str], context: str = "response") -> Any:
    """Recover the JSON value embedded in `raw_text`.

    Args:
        raw_text: Model output expected to contain JSON
        context: Operation name used in the error message

    Returns:
        The first non-null value produced by the strategy cascade

    Raises:
        UnparsableResponse: If the text is empty or every strategy misses
    """
    if not raw_text:
        raise UnparsableResponse(context)

    for strategy in STRATEGIES:
        value = strategy(raw_text)
        if value is not None:
            return value

    raise UnparsableResponse(context)
