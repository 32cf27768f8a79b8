# voice_agent/models/memory_request.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — memory request models
------------------------------------------
JSON bodies for the POST memory endpoints. The browser client sends
camelCase `userId`; snake_case `user_id` is accepted too.

`userId` is optional at the model level so the router can answer with
the same 400 "Missing userId" as the GET endpoints.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, constr


class MemoryPatchRequest(BaseModel):
    """
    Body for POST /memory/patch.

    Fields
    ------
    userId:
        Whose memory to update.
    patch:
        JSON object merged into the stored memory.
    deep:
        False -> top-level replace; True -> recursive merge where a null
        value removes the key.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {"userId": "sam-1", "patch": {"tone": "calm"}, "deep": False},
                {"userId": "sam-1", "patch": {"prefs": {"music": "jazz"}}, "deep": True},
            ]
        },
    )

    user_id: Optional[str] = Field(default=None, alias="userId")
    patch: Dict[str, Any] = Field(default_factory=dict)
    deep: bool = False


class MemoryNoteRequest(BaseModel):
    """Body for POST /memory/note."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    note: constr(min_length=1, strip_whitespace=True)
