# voice_agent/core/errors.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — errors
---------------------------
Upstream exception types and the global exception handlers.

The client page expects every failure as a flat JSON object:

    {"error": "Missing userId"}

so HTTPException details and unexpected exceptions are both rendered that
way, keeping the HTTP status.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base class for failures talking to an external service."""


class OpenAIError(UpstreamError):
    """
    Raised when an OpenAI REST call fails.

    `status_code` is None for transport failures (DNS, timeout...), and
    `body` carries the upstream response text when there was one.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UpstashError(UpstreamError):
    """Raised when the Upstash Redis REST store fails."""


def error_payload(message: str) -> dict:
    return {"error": message}


def add_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers on the FastAPI app.

    - HTTPException          -> {"error": detail}, same status
                                (routing 404/405 included)
    - RequestValidationError -> 400 {"error": first validation message}
    - UpstashError           -> 502
    - Unhandled Exception    -> 500 {"error": str(exc)}
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_payload(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
            message = f"{where}: {first.get('msg')}" if where else str(first.get("msg"))
        else:
            message = "Invalid request"
        return JSONResponse(status_code=400, content=error_payload(message))

    @app.exception_handler(UpstashError)
    async def upstash_exception_handler(request: Request, exc: UpstashError):
        logger.error("%s %s: memory store error: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=502, content=error_payload(str(exc)))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("%s %s error", request.method, request.url.path)
        return JSONResponse(status_code=500, content=error_payload(str(exc)))
