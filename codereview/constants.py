DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_CHARS = 500_000
DEFAULT_STORE_PATH = ".latest_review.db"

LATEST_REVIEW_KEY = "latestReview"

SEVERITIES = ("critical", "high", "medium", "low")

PARSE_FAILED_ERROR = "model_output_parse_failed"
PARSE_FAILED_MESSAGE = (
    "The model did not return valid JSON. Try reducing depth, "
    "or the server may post-process the raw output."
)
MISSING_INPUT_ERROR = "Request must include code or diff"
PAYLOAD_TOO_LARGE_ERROR = "Payload too large. Send a smaller file or a diff."
UNKNOWN_ERROR = "unknown_error"

REVIEW_SCHEMA = """{
  "summary": "short summary of main issues and overall quality",
  "issues": [
    {
      "id": "unique-id",
      "type": "bug|security|performance|style|readability|test|arch|other",
      "description": "explain the issue and why it's a problem",
      "severity": "low|medium|high|critical",
      "lines": [startLine, endLine],
      "suggested_fix": "short steps or code snippet",
      "patch": "optional full replacement/patch (include code fences if needed)",
      "confidence": 0.0
    }
  ],
  "suggestions": ["high-level improvement 1", "improvement 2"],
  "tests_to_add": ["unit test idea 1", "integration test idea 2"],
  "refactors": ["module-level refactor suggestion"],
  "score_overall": 0
}"""

REVIEW_PREAMBLE = """
You are a senior software engineer and code reviewer.

Output EXACTLY a single JSON object (no prose before/after) that conforms to the SCHEMA below.
"""

REVIEW_INSTRUCTIONS = """
INSTRUCTIONS:
- Use the text under CODE_START to analyze. If diff is provided prefer diff.
- Put line numbers relative to the given file/diff.
- Keep each issue precise. Provide confidence (0.0 - 1.0).
- If you cannot follow instructions, return {"error":"explain why"}.
"""
