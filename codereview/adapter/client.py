"""
Gemini client wrapper used for review calls.
"""

import logging
from typing import Optional, Sequence

from google import genai

from codereview.adapter.response_text import TextStrategy, extract_response_text
from codereview.constants import DEFAULT_MODEL


class MissingCredentialError(RuntimeError):
    """Raised when no Gemini API key is configured."""


class GeminiReviewClient:
    """Sends a single prompt to Gemini and returns the completion text."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        strategies: Optional[Sequence[TextStrategy]] = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Gemini API key. Must be non-empty.
            model: Model identifier passed to generate_content.
            strategies: Optional override of the text extraction order.

        Raises:
            MissingCredentialError: If api_key is empty.
        """
        if not api_key:
            raise MissingCredentialError("GEMINI_API_KEY is not set on the server.")

        self.model = model or DEFAULT_MODEL
        self.strategies = strategies
        self._client = genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        """
        Run one completion. No retry is attempted; API errors propagate.

        Args:
            prompt: Full prompt text.

        Returns:
            The completion text, or "" if the response carried none.
        """
        logging.info(f"Requesting review from {self.model} ({len(prompt)} chars)")
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return extract_response_text(response, self.strategies)
