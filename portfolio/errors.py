# portfolio/errors.py
"""
Uniform JSON error bodies.

Routes raise ``HTTPException`` the usual FastAPI way; the handlers here
render them as ``{"error": ...}`` (or pass a dict detail such as
``{"message": ...}`` through untouched), turn request validation failures
into 400 + a field-error map, and map database constraint violations that
slipped past the pre-write checks to 409 / 404.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("portfolio.errors")

UNIQUE_VIOLATION = "unique"
FOREIGN_KEY_VIOLATION = "foreign_key"

# SQLSTATE codes (PostgreSQL); SQLite only gives us message text
_PG_CODES = {
    "23505": UNIQUE_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
}


def classify_integrity_error(exc: IntegrityError) -> Optional[str]:
    """Return UNIQUE_VIOLATION / FOREIGN_KEY_VIOLATION, or None if unknown."""
    orig = getattr(exc, "orig", None)
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in _PG_CODES:
        return _PG_CODES[code]

    text = str(orig if orig is not None else exc).lower()
    if "unique constraint" in text or "duplicate key" in text:
        return UNIQUE_VIOLATION
    if "foreign key constraint" in text:
        return FOREIGN_KEY_VIOLATION
    return None


def field_errors(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """pydantic error list -> {"jobTitle": ["Field required"], ...}"""
    out: Dict[str, List[str]] = {}
    for err in errors:
        loc = [str(p) for p in err.get("loc", ())]
        # drop the "body"/"query"/"path" source marker
        if loc and loc[0] in {"body", "query", "path", "header", "cookie"}:
            loc = loc[1:]
        key = ".".join(loc) or "_body"
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(key, []).append(msg)
    return out


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(body, status_code=exc.status_code, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return JSONResponse({"error": "Invalid JSON body"}, status_code=status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        {"error": "Invalid input data", "errors": field_errors(errors)},
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    kind = classify_integrity_error(exc)
    log.warning("Unhandled integrity error on %s %s: %s", request.method, request.url.path, kind)
    if kind == FOREIGN_KEY_VIOLATION:
        return JSONResponse({"error": "Referenced record not found"}, status_code=status.HTTP_404_NOT_FOUND)
    if kind == UNIQUE_VIOLATION:
        return JSONResponse({"error": "Record already exists"}, status_code=status.HTTP_409_CONFLICT)
    log.exception("Integrity error could not be classified")
    return JSONResponse({"error": "Internal Server Error"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal Server Error"}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
