"""Error Handlers — translate core failures into the HackerClone JSON error envelope.

Invariants:
    - Status comes from HackerCloneError.http_status; the body from to_response()
    - A rejected session cookie is cleared in the same 401 response
    - Busy/unavailable store answers 503 with Retry-After so clients back off
    - Validation details name the field but never echo submitted values
    - Unhandled exceptions answer a fixed 500 body

Design Decisions:
    - Handlers are plain module functions registered with add_exception_handler,
      so they can be exercised without decorating a live app
    - Log level follows the status: 4xx is caller error (info), 5xx is ours (error)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hackerclone.core.errors import ErrorKind, ErrorSeverity, HackerCloneError

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 5
_BACKOFF_KINDS = {ErrorKind.POOL_EXHAUSTED, ErrorKind.STORE_FAILURE}


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HackerCloneError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


async def handle_domain_error(request: Request, exc: HackerCloneError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "username": exc.context.username,
            "post_id": exc.context.post_id,
            "comment_id": exc.context.comment_id,
        },
    )
    headers = {}
    if exc.kind in _BACKOFF_KINDS:
        headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
    response = JSONResponse(
        status_code=exc.http_status, content=exc.to_response(), headers=headers,
    )
    if exc.kind is ErrorKind.UNAUTHENTICATED:
        cookie_name = _session_cookie_name(request)
        if cookie_name and cookie_name in request.cookies:
            response.delete_cookie(cookie_name)
    return response


async def handle_validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.info(
        f"Rejected request body on {request.url.path}: "
        + ", ".join(d["field"] for d in details),
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": ErrorKind.VALIDATION.value,
                "message": "Invalid request data",
                "category": "validation",
                "severity": ErrorSeverity.ERROR.value,
                "details": details,
            },
        },
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def _session_cookie_name(request: Request) -> str | None:
    context = getattr(request.app.state, "context", None)
    return context.settings.session_cookie_name if context is not None else None
