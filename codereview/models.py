"""
Request, result and outcome types shared by the adapter and the API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Depth(str, Enum):
    QUICK = "quick"
    MODERATE = "moderate"
    DEEP = "deep"


class ReviewRequest(BaseModel):
    code: Optional[str] = Field(None, description="Source code to review.")
    filename: Optional[str] = Field(None, description="Name of the reviewed file.")
    diff: Optional[str] = Field(None, description="Unified diff; preferred over code.")
    language: Optional[str] = Field(None, description="Language hint for the model.")
    depth: Depth = Field(Depth.MODERATE, description="Review thoroughness hint.")

    @field_validator("depth", mode="before")
    @classmethod
    def _default_depth(cls, value: Any) -> Any:
        if value is None or value == "":
            return Depth.MODERATE
        return value

    def has_input(self) -> bool:
        return bool(self.code) or bool(self.diff)

    def size(self) -> int:
        """Character count of the supplied content (the larger of code and diff)."""
        return max(len(self.code or ""), len(self.diff or ""))

    def payload(self) -> str:
        if self.diff:
            return f"DIFF:\n{self.diff}"
        return f"CODE:\n{self.code or ''}"


def _optional_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


class Issue(BaseModel):
    """A single finding. Every field may be absent in model output."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    severity: Optional[str] = None
    lines: Optional[List[int]] = None
    suggested_fix: Optional[str] = None
    patch: Optional[str] = None
    confidence: Optional[float] = None

    @field_validator("id", "type", "description", "severity", "suggested_fix", "patch", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("lines", mode="before")
    @classmethod
    def _coerce_lines(cls, value: Any) -> Optional[List[int]]:
        if not isinstance(value, list):
            return None
        lines = []
        for item in value:
            try:
                lines.append(int(item))
            except (TypeError, ValueError):
                continue
        return lines

    @field_validator("confidence", mode="before")
    @classmethod
    def _coerce_confidence(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None


class ReviewResult(BaseModel):
    """The structured review the model is asked to produce."""

    model_config = ConfigDict(extra="allow")

    summary: Optional[str] = None
    issues: List[Issue] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    tests_to_add: List[str] = Field(default_factory=list)
    refactors: List[str] = Field(default_factory=list)
    score_overall: Optional[float] = None

    @field_validator("summary", mode="before")
    @classmethod
    def _coerce_summary(cls, value: Any) -> Optional[str]:
        return _optional_text(value)

    @field_validator("issues", mode="before")
    @classmethod
    def _coerce_issues(cls, value: Any) -> List[Any]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, dict)]

    @field_validator("suggestions", "tests_to_add", "refactors", mode="before")
    @classmethod
    def _coerce_text_lists(cls, value: Any) -> List[str]:
        return _text_list(value)

    @field_validator("score_overall", mode="before")
    @classmethod
    def _coerce_score(cls, value: Any) -> Optional[float]:
        if isinstance(value, bool):
            return None
        try:
            return float(value) if value is not None else None
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_parsed(cls, parsed: Any) -> "ReviewResult":
        """Build a result from whatever the model returned, never failing."""
        if not isinstance(parsed, dict):
            return cls()
        return cls.model_validate(parsed)


@dataclass
class AdapterOutcome:
    """Result of one review call. ``parsed`` is None when no JSON could be recovered."""

    parsed: Any
    raw: str

    @property
    def ok(self) -> bool:
        """Only a JSON object counts as a usable review; scalars and arrays do not."""
        return isinstance(self.parsed, dict)


class StoredReview(BaseModel):
    review: Any = None
    raw: Optional[str] = None
