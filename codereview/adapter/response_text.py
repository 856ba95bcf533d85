"""
Completion text extraction across the response shapes the Gemini SDKs return.

Each strategy is a path into the response; strategies are tried in order
until one yields a non-empty string.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

PathStep = Union[str, int]
TextStrategy = Tuple[str, Callable[[Any], Optional[str]]]

_MISSING = (AttributeError, KeyError, IndexError, TypeError, ValueError)


def _step(obj: Any, key: PathStep) -> Any:
    if obj is None:
        return None
    if isinstance(key, int):
        return obj[key]
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key)


def lookup(obj: Any, path: Sequence[PathStep]) -> Any:
    """Follow ``path`` through attributes, mapping keys and list indices.

    Returns None as soon as a step is missing.
    """
    current = obj
    for key in path:
        try:
            current = _step(current, key)
        except _MISSING:
            return None
        if current is None:
            return None
    return current


def path_strategy(name: str, *path: PathStep) -> TextStrategy:
    def extract(response: Any) -> Optional[str]:
        value = lookup(response, path)
        return value if isinstance(value, str) else None

    return name, extract


DEFAULT_STRATEGIES: List[TextStrategy] = [
    path_strategy("text", "text"),
    path_strategy("output_text", "output_text"),
    path_strategy("candidate_content_parts", "candidates", 0, "content", "parts", 0, "text"),
    path_strategy("candidate_message_content", "candidates", 0, "message", "content", 0, "text"),
]


def extract_response_text(response: Any, strategies: Optional[Sequence[TextStrategy]] = None) -> str:
    """
    Return the completion text of a model response.

    Args:
        response: SDK response object or a plain dict of the same shape.
        strategies: Ordered (name, extractor) pairs; defaults to DEFAULT_STRATEGIES.

    Returns:
        The first non-empty string found, or "" if no strategy matched.
    """
    for name, extract in strategies if strategies is not None else DEFAULT_STRATEGIES:
        text = extract(response)
        if text:
            logging.debug(f"Model response text found via '{name}'")
            return text

    logging.warning("Model response contained no text in any known field")
    return ""
