"""
Best-effort recovery of a JSON object from free-form model output.
"""

import json
import re
from typing import Any, Optional

_TRAILING_COMMA_OBJECT = re.compile(r",\s*}")
_TRAILING_COMMA_ARRAY = re.compile(r",\s*]")
# Naive: also matches identifier-like text followed by ':' inside string values.
_LOOSE_KEY = re.compile(r"(['\"])?([a-z0-9_]+)(['\"])?:", re.IGNORECASE)


def _loads(text: str) -> Optional[Any]:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        return None


def _brace_span(text: str) -> Optional[str]:
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and last > first:
        return text[first:last + 1]
    return None


def repair_json_text(text: str) -> str:
    """Strip trailing commas, quote loose keys and turn single quotes into double quotes."""
    cleaned = _TRAILING_COMMA_OBJECT.sub("}", text)
    cleaned = _TRAILING_COMMA_ARRAY.sub("]", cleaned)
    cleaned = _LOOSE_KEY.sub(r'"\2":', cleaned)
    return cleaned.replace("'", '"')


def extract_json(text: Optional[str]) -> Optional[Any]:
    """
    Recover a parsed JSON value from model output.

    Tries, in order: the whole text, the span between the first '{' and
    the last '}', and finally a textually repaired version of that span
    (or of the whole text when there is no span).

    Args:
        text: Raw model output.

    Returns:
        The parsed value, or None if nothing could be recovered.
    """
    if not text:
        return None

    parsed = _loads(text)
    if parsed is not None:
        return parsed

    candidate = _brace_span(text)
    if candidate is not None:
        parsed = _loads(candidate)
        if parsed is not None:
            return parsed

    return _loads(repair_json_text(candidate if candidate is not None else text))
