import asyncio
import pytest
from types import SimpleNamespace
from unittest import mock
from codereview.adapter import GeminiReviewClient, MissingCredentialError, review_code
from codereview.models import ReviewRequest

@pytest.fixture
def mock_gemini_client():
    with mock.patch("codereview.adapter.client.genai.Client") as mock_client:
        instance = mock_client.return_value
        instance.aio.models.generate_content = mock.AsyncMock(
            return_value=SimpleNamespace(text='{"summary": "ok", "issues": []}')
        )
        yield mock_client

def test_missing_api_key_fails_before_client_creation(mock_gemini_client):
    with pytest.raises(MissingCredentialError, match="GEMINI_API_KEY"):
        GeminiReviewClient("")

    mock_gemini_client.assert_not_called()

def test_generate_returns_completion_text(mock_gemini_client):
    client = GeminiReviewClient("FAKE_API_KEY", model="gemini-test")

    text = asyncio.run(client.generate("review this"))

    assert text == '{"summary": "ok", "issues": []}'
    mock_gemini_client.assert_called_with(api_key="FAKE_API_KEY")
    mock_gemini_client.return_value.aio.models.generate_content.assert_awaited_once_with(
        model="gemini-test",
        contents="review this",
    )

def test_generate_propagates_api_errors_without_retry(mock_gemini_client):
    generate = mock_gemini_client.return_value.aio.models.generate_content
    generate.side_effect = RuntimeError("quota exceeded")
    client = GeminiReviewClient("FAKE_API_KEY")

    with pytest.raises(RuntimeError, match="quota exceeded"):
        asyncio.run(client.generate("review this"))

    assert generate.await_count == 1

def test_review_code_returns_parsed_and_raw(mock_gemini_client):
    client = GeminiReviewClient("FAKE_API_KEY")

    outcome = asyncio.run(review_code(ReviewRequest(code="x = 1"), client))

    assert outcome.ok
    assert outcome.parsed == {"summary": "ok", "issues": []}
    assert outcome.raw == '{"summary": "ok", "issues": []}'

def test_review_code_unparsable_output(mock_gemini_client):
    mock_gemini_client.return_value.aio.models.generate_content.return_value = SimpleNamespace(
        text="The code looks fine to me."
    )
    client = GeminiReviewClient("FAKE_API_KEY")

    outcome = asyncio.run(review_code(ReviewRequest(code="x = 1"), client))

    assert not outcome.ok
    assert outcome.parsed is None
    assert outcome.raw == "The code looks fine to me."
