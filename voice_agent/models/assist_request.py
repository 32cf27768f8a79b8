# voice_agent/models/assist_request.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — chat / TTS request models
----------------------------------------------
Bodies for the plain request/response pass-through endpoints.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, constr


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """
    Body for POST /chat.

    When `userId` is set, that user's stored memory is prepended as a
    system message before forwarding.
    """

    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = Field(..., min_length=1)
    user_id: Optional[str] = Field(default=None, alias="userId")
    model: Optional[str] = None


class TTSRequest(BaseModel):
    """Body for POST /tts."""

    text: constr(min_length=1, strip_whitespace=True)
    voice: Optional[str] = None
