"""
Prompt construction for review requests.
"""

from codereview.constants import REVIEW_INSTRUCTIONS, REVIEW_PREAMBLE, REVIEW_SCHEMA
from codereview.models import ReviewRequest


def build_review_prompt(request: ReviewRequest) -> str:
    """
    Build the instruction prompt for a review request.

    The schema is stated inline and the code (or diff, when both are
    supplied) is embedded verbatim between CODE_START and CODE_END.

    Args:
        request: The validated review request.

    Returns:
        The prompt text sent to the model.
    """
    filename = request.filename or "unknown"
    language = request.language or "unknown"

    return (
        f"{REVIEW_PREAMBLE}\n"
        f"SCHEMA:\n{REVIEW_SCHEMA}\n"
        f"{REVIEW_INSTRUCTIONS}\n"
        "CODE_START\n"
        f"Filename: {filename}\n"
        f"Language: {language}\n"
        f"Depth: {request.depth.value}\n"
        f"{request.payload()}\n"
        "CODE_END\n"
    )
