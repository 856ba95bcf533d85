"""
Helpers for presenting a stored review: filtering, search and export.
"""

import json
import re
from typing import Any, List, Optional

from codereview.models import Issue

_OPENING_FENCE = re.compile(r"^```(?:[a-zA-Z0-9-]+)?\n?")
_CLOSING_FENCE = re.compile(r"```$")
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def filter_issues(issues: List[Issue], severity: str = "all", query: str = "") -> List[Issue]:
    """
    Filter issues by severity and a free-text query.

    Args:
        issues: Issues to filter.
        severity: "all", or a severity compared case-insensitively.
                  Issues without a severity count as "unknown".
        query: Case-insensitive substring searched in description,
               suggested_fix, patch and type.

    Returns:
        The matching issues, in their original order.
    """
    wanted = (severity or "all").lower()
    needle = (query or "").lower()

    matches = []
    for issue in issues:
        if wanted != "all" and (issue.severity or "unknown").lower() != wanted:
            continue
        if needle:
            haystack = (
                issue.description or "",
                issue.suggested_fix or "",
                issue.patch or "",
                issue.type or "",
            )
            if not any(needle in field.lower() for field in haystack):
                continue
        matches.append(issue)
    return matches


def find_issue(issues: List[Issue], issue_id: str) -> Optional[Issue]:
    """Find an issue by id, falling back to its position for issues without one."""
    for issue in issues:
        if issue.id == issue_id:
            return issue

    if issue_id.isdigit():
        index = int(issue_id)
        if index < len(issues) and issues[index].id is None:
            return issues[index]
    return None


def strip_fences(text: Optional[str]) -> str:
    """Return the code inside a fenced block, or the text itself if it is not fenced."""
    if not text:
        return ""
    return _CLOSING_FENCE.sub("", _OPENING_FENCE.sub("", text)).strip()


def truncate(text: Optional[str], limit: int = 120) -> str:
    if not text:
        return ""
    return text if len(text) <= limit else text[:limit - 1] + "…"


def format_lines(lines: Optional[List[int]]) -> str:
    if not lines:
        return "—"
    return "-".join(str(line) for line in lines)


def format_confidence(value: Optional[float]) -> str:
    return f"{(value or 0.0):.2f}"


def pretty_json(obj: Any) -> str:
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(obj)


def patch_filename(issue_id: Optional[str]) -> str:
    """Header-safe download name for an issue's patch."""
    safe = _UNSAFE_FILENAME_CHARS.sub("_", issue_id or "")
    return f"{safe or 'patch'}.txt"
