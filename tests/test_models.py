import pytest
from pydantic import ValidationError
from codereview.models import AdapterOutcome, Depth, Issue, ReviewRequest, ReviewResult

def test_request_defaults():
    request = ReviewRequest(code="x")
    assert request.depth is Depth.MODERATE
    assert ReviewRequest(code="x", depth=None).depth is Depth.MODERATE

def test_request_rejects_unknown_depth():
    with pytest.raises(ValidationError):
        ReviewRequest(code="x", depth="extreme")

def test_request_input_and_size():
    assert not ReviewRequest().has_input()
    assert ReviewRequest(diff="+a").has_input()
    assert ReviewRequest(code="abc").size() == 3
    assert ReviewRequest(code="ab", diff="abcd").size() == 4

def test_request_payload_prefers_diff():
    assert ReviewRequest(code="c", diff="d").payload() == "DIFF:\nd"
    assert ReviewRequest(code="c").payload() == "CODE:\nc"

def test_result_from_parsed_is_lenient():
    result = ReviewResult.from_parsed({
        "summary": None,
        "issues": [{"id": 7, "lines": ["3", "x", 5], "confidence": "high"}, "not an issue"],
        "tests_to_add": None,
        "extra_field": True,
    })

    assert result.summary is None
    assert len(result.issues) == 1
    assert result.issues[0] == Issue(id="7", lines=[3, 5], confidence=None)
    assert result.tests_to_add == []
    assert result.model_extra == {"extra_field": True}

@pytest.mark.parametrize("parsed", [None, [], "text", 3])
def test_result_from_non_object(parsed):
    assert ReviewResult.from_parsed(parsed) == ReviewResult()

def test_outcome_ok():
    assert AdapterOutcome(parsed={}, raw="{}").ok
    assert not AdapterOutcome(parsed=None, raw="?").ok
    assert AdapterOutcome(parsed={"error": "not code"}, raw="").ok
    for parsed in (0, False, "", "text", [1]):
        assert not AdapterOutcome(parsed=parsed, raw="").ok
