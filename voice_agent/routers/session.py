# voice_agent/routers/session.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — /session router
------------------------------------
Mints a short-lived realtime session for the browser.

Flow:
  POST /session
    -> create_realtime_session()  (fixed payload from settings)
    -> upstream JSON returned as-is (client_secret.value, expires_at, ...)

The browser never sees OPENAI_API_KEY; it only gets the ephemeral secret.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from voice_agent.core.config import settings
from voice_agent.core.errors import OpenAIError
from voice_agent.providers.openai_rest import MISSING_KEY_MESSAGE, create_realtime_session

router = APIRouter(tags=["session"])
logger = logging.getLogger(__name__)


@router.post("/session")
async def create_session() -> Any:
    """
    Create an OpenAI realtime session.

    - 500 {"error": "Missing OPENAI_API_KEY"} when the server has no key.
    - Upstream non-2xx: same status, upstream body passed through as text.
    - Anything else (transport error, unreadable 2xx body): 500.
    """
    if not settings.openai_api_key:
        raise HTTPException(status_code=500, detail=MISSING_KEY_MESSAGE)

    try:
        data: Dict[str, Any] = await run_in_threadpool(create_realtime_session)
    except OpenAIError as exc:
        if exc.status_code is not None and exc.status_code >= 400 and exc.body is not None:
            return Response(
                content=exc.body,
                status_code=exc.status_code,
                media_type="text/plain",
            )
        logger.error("POST /session error: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    logger.info(
        "[/session] minted realtime session (model=%s, expires_at=%s)",
        data.get("model"),
        (data.get("client_secret") or {}).get("expires_at"),
    )
    return data
