import logging
import os

from functools import lru_cache
from typing import Any, Callable, Dict, Optional
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

import codereview.config as config
from codereview.adapter import GeminiReviewClient, review_code
from codereview.adapter.controller import CompletionClient
from codereview.constants import (
    MISSING_INPUT_ERROR,
    PARSE_FAILED_ERROR,
    PARSE_FAILED_MESSAGE,
    PAYLOAD_TOO_LARGE_ERROR,
    UNKNOWN_ERROR,
)
from codereview.models import ReviewRequest, ReviewResult, StoredReview
from codereview.storage import ReviewStore, create_store
from codereview.viewer import (
    filter_issues,
    find_issue,
    format_confidence,
    format_lines,
    patch_filename,
    pretty_json,
    strip_fences,
    truncate,
)

@lru_cache
def get_settings():
    return config.Settings()

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())

STATIC_DIR = os.path.join(os.path.dirname(__file__), "static")


@lru_cache
def get_review_store() -> ReviewStore:
    return create_store(settings.REVIEW_STORE, settings.REVIEW_STORE_PATH)


def get_client_factory() -> Callable[[], CompletionClient]:
    """Return a factory so credential errors surface inside the request handler."""
    current = get_settings()
    return lambda: GeminiReviewClient(current.GEMINI_API_KEY, current.GEMINI_MODEL)


app = FastAPI(
    title="Code Review API",
    description="Reviews code snippets and diffs with a Gemini model and returns structured findings.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        problems.append(f"{location}: {error.get('msg', 'invalid')}")

    detail = "; ".join(problems) or "malformed body"
    logging.warning(f"Rejected invalid request: {detail}")
    return error_response(400, f"Invalid request: {detail}")


@app.post("/api/code-review", tags=["Review"])
async def code_review(
    request_data: ReviewRequest,
    client_factory: Callable[[], CompletionClient] = Depends(get_client_factory),
    store: ReviewStore = Depends(get_review_store),
):
    if not request_data.has_input():
        return error_response(400, MISSING_INPUT_ERROR)

    max_chars = get_settings().REVIEW_MAX_CHARS
    if request_data.size() > max_chars:
        logging.warning(f"Rejected review payload of {request_data.size()} chars (max {max_chars})")
        return error_response(413, PAYLOAD_TOO_LARGE_ERROR)

    try:
        client = client_factory()
        outcome = await review_code(request_data, client)
    except Exception as e:
        logging.error(f"code-review error: {e}")
        return error_response(500, str(e) or UNKNOWN_ERROR)

    if not outcome.ok:
        return error_response(
            502,
            PARSE_FAILED_ERROR,
            raw=outcome.raw,
            message=PARSE_FAILED_MESSAGE,
        )

    try:
        store.set(StoredReview(review=outcome.parsed, raw=outcome.raw))
    except Exception as e:
        logging.error(f"Failed to store latest review: {e}")

    return {"ok": True, "review": outcome.parsed, "raw": outcome.raw}


def _issue_view(issue, position: int) -> Dict[str, Any]:
    return {
        **issue.model_dump(),
        "ref": issue.id if issue.id is not None else str(position),
        "headline": truncate(issue.description) or "No description",
        "lines_label": format_lines(issue.lines),
        "confidence_label": format_confidence(issue.confidence),
        "code": strip_fences(issue.patch),
    }


def _load_latest(store: ReviewStore) -> Optional[StoredReview]:
    entry = store.get()
    if entry is None or entry.review is None:
        return None
    return entry


@app.get("/api/review/latest", tags=["Review"])
async def latest_review(
    severity: str = Query(default="all"),
    q: str = Query(default=""),
    store: ReviewStore = Depends(get_review_store),
):
    entry = _load_latest(store)
    if entry is None:
        return error_response(404, "No review available")

    result = ReviewResult.from_parsed(entry.review)
    positions = {id(issue): index for index, issue in enumerate(result.issues)}
    matches = filter_issues(result.issues, severity, q)
    return {
        "review": entry.review,
        "raw": entry.raw,
        "result": result.model_dump(),
        "issues": [_issue_view(issue, positions[id(issue)]) for issue in matches],
        "total": len(result.issues),
    }


@app.delete("/api/review/latest", tags=["Review"])
async def clear_latest_review(store: ReviewStore = Depends(get_review_store)):
    store.clear()
    return {"ok": True}


@app.get("/api/review/latest/download", tags=["Review"])
async def download_latest_review(store: ReviewStore = Depends(get_review_store)):
    entry = _load_latest(store)
    if entry is None:
        return error_response(404, "No review available")

    return Response(
        content=pretty_json({"review": entry.review, "raw": entry.raw}),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="code-review.json"'},
    )


@app.get("/api/review/latest/issues/{issue_id:path}/patch", tags=["Review"])
async def download_patch(issue_id: str, store: ReviewStore = Depends(get_review_store)):
    entry = _load_latest(store)
    if entry is None:
        return error_response(404, "No review available")

    issue = find_issue(ReviewResult.from_parsed(entry.review).issues, issue_id)
    if issue is None or not issue.patch:
        return error_response(404, "Patch not found")

    return PlainTextResponse(
        content=strip_fences(issue.patch),
        headers={"Content-Disposition": f'attachment; filename="{patch_filename(issue.id)}"'},
    )


@app.get("/", tags=["UI"], include_in_schema=False)
async def review_page():
    return FileResponse(os.path.join(STATIC_DIR, "index.html"))


@app.get("/suggestions", tags=["UI"], include_in_schema=False)
async def suggestions_page():
    return FileResponse(os.path.join(STATIC_DIR, "suggestions.html"))
