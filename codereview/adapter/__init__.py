"""
Prompt/response adapter for the Gemini review model.

Builds review prompts, calls the model, and recovers structured JSON
from its raw text output.
"""

from .client import GeminiReviewClient, MissingCredentialError
from .controller import review_code
from .extraction import extract_json
from .prompt import build_review_prompt
from .response_text import DEFAULT_STRATEGIES, extract_response_text

__all__ = [
    "GeminiReviewClient",
    "MissingCredentialError",
    "review_code",
    "extract_json",
    "build_review_prompt",
    "DEFAULT_STRATEGIES",
    "extract_response_text",
]
