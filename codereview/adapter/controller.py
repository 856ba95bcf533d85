"""
Review orchestration: prompt, model call, JSON recovery.
"""

import logging
from typing import Awaitable, Protocol

from codereview.adapter.extraction import extract_json
from codereview.adapter.prompt import build_review_prompt
from codereview.models import AdapterOutcome, ReviewRequest


class CompletionClient(Protocol):
    def generate(self, prompt: str) -> Awaitable[str]: ...


async def review_code(request: ReviewRequest, client: CompletionClient) -> AdapterOutcome:
    """Review the request's code or diff and return the parsed result with the raw text."""
    prompt = build_review_prompt(request)
    raw = await client.generate(prompt)
    parsed = extract_json(raw)

    if parsed is None:
        logging.warning(f"Model output could not be parsed ({len(raw)} chars)")

    return AdapterOutcome(parsed=parsed, raw=raw)
