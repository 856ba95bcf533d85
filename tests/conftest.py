import pytest
from fastapi.testclient import TestClient
from codereview.api import app, get_client_factory, get_review_store, settings
from codereview.storage import InMemoryReviewStore


class FakeModelClient:
    """Stands in for GeminiReviewClient; records prompts and returns canned text."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.text


@pytest.fixture(scope="module")
def client():
    return TestClient(app)

@pytest.fixture
def store():
    memory_store = InMemoryReviewStore()
    app.dependency_overrides[get_review_store] = lambda: memory_store
    yield memory_store
    app.dependency_overrides.pop(get_review_store, None)

@pytest.fixture
def fake_model(store):
    model = FakeModelClient()
    app.dependency_overrides[get_client_factory] = lambda: (lambda: model)
    yield model
    app.dependency_overrides.pop(get_client_factory, None)

@pytest.fixture
def max_chars():
    original = settings.REVIEW_MAX_CHARS
    settings.REVIEW_MAX_CHARS = 50
    yield settings.REVIEW_MAX_CHARS
    settings.REVIEW_MAX_CHARS = original

@pytest.fixture
def sample_review():
    return {
        "summary": "Division by zero on empty input.",
        "issues": [
            {
                "id": "ISSUE-1",
                "type": "bug",
                "description": "len(numbers) can be zero",
                "severity": "high",
                "lines": [2, 3],
                "suggested_fix": "Guard against empty lists",
                "patch": "```python\nif not numbers:\n    return 0\n```",
                "confidence": 0.9,
            },
            {
                "type": "style",
                "description": "Missing docstring",
                "severity": "low",
                "confidence": 0.4,
            },
            {
                "id": "ISSUE-3",
                "type": "security",
                "description": "Unvalidated input",
            },
        ],
        "suggestions": ["Add type hints"],
        "tests_to_add": ["Test empty list"],
        "refactors": [],
        "score_overall": 62,
    }
