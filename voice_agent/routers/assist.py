# voice_agent/routers/assist.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — chat / TTS router
--------------------------------------
Text fallbacks for browsers without WebRTC:

POST /chat  -> chat completions, optionally with the user's memory as context
POST /tts   -> speech synthesis, returns audio/mpeg
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from voice_agent.core.config import settings
from voice_agent.core.errors import OpenAIError
from voice_agent.memory import MemoryStore, get_memory_store
from voice_agent.memory.merge import describe_memory
from voice_agent.models.assist_request import ChatRequest, TTSRequest
from voice_agent.providers.openai_rest import (
    MISSING_KEY_MESSAGE,
    chat_completion,
    synthesize_speech,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assist"])


def _raise_upstream(exc: OpenAIError, label: str) -> None:
    logger.error("%s error: %s", label, exc)
    status = exc.status_code if exc.status_code else 502
    raise HTTPException(status_code=status, detail=str(exc)) from exc


@router.post("/chat")
async def chat(
    request: ChatRequest,
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    if not settings.openai_api_key:
        raise HTTPException(status_code=500, detail=MISSING_KEY_MESSAGE)

    messages: List[Dict[str, str]] = [m.model_dump() for m in request.messages]

    if request.user_id:
        memory = await run_in_threadpool(store.load, request.user_id)
        context = describe_memory(memory)
        if context:
            messages.insert(0, {"role": "system", "content": context})

    logger.info("[/chat] user=%s turns=%d", request.user_id, len(messages))

    try:
        reply = await run_in_threadpool(chat_completion, messages, request.model)
    except OpenAIError as exc:
        _raise_upstream(exc, "POST /chat")

    return {"ok": True, "reply": reply}


@router.post("/tts")
async def tts(request: TTSRequest) -> Response:
    if not settings.openai_api_key:
        raise HTTPException(status_code=500, detail=MISSING_KEY_MESSAGE)

    try:
        audio = await run_in_threadpool(synthesize_speech, request.text, request.voice)
    except OpenAIError as exc:
        _raise_upstream(exc, "POST /tts")

    return Response(content=audio, media_type="audio/mpeg")
