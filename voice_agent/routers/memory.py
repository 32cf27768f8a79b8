# voice_agent/routers/memory.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — /memory router
-----------------------------------
Per-user memory kept in the remote key-value store.

Endpoints
---------
GET    /memory/get?userId=...
GET    /memory/set?userId=...&name=&kids=a,b&tone=&persona=&note=
       (plain GET so Safari and the memory panel can call it from a link)
POST   /memory/patch   {"userId", "patch": {...}, "deep": false}
POST   /memory/note    {"userId", "note"}
DELETE /memory?userId=...

Each write is read / merge / write-back on one key. No locking.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.concurrency import run_in_threadpool

from voice_agent.memory import MemoryStore, get_memory_store
from voice_agent.models.memory_request import MemoryNoteRequest, MemoryPatchRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/memory", tags=["memory"])


def _require_user(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=400, detail="Missing userId")
    return user_id.strip()


@router.get("/get")
async def get_memory(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    uid = _require_user(user_id)
    memory = await run_in_threadpool(store.load, uid)
    return {"ok": True, "memory": memory}


@router.get("/set")
async def set_memory(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    name: Optional[str] = None,
    kids: Optional[str] = None,
    tone: Optional[str] = None,
    persona: Optional[str] = None,
    note: Optional[str] = None,
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    """
    Query-string update. Only the given fields change; `kids` is
    comma-separated and `note` is appended to the bounded notes list.
    """
    uid = _require_user(user_id)
    memory, persisted = await run_in_threadpool(
        lambda: store.set_fields(
            uid, name=name, kids=kids, tone=tone, persona=persona, note=note
        )
    )
    return {"ok": True, "memory": memory, "persisted": persisted}


@router.post("/patch")
async def patch_memory(
    body: MemoryPatchRequest,
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    uid = _require_user(body.user_id)
    memory, persisted = await run_in_threadpool(
        lambda: store.patch(uid, body.patch, deep=body.deep)
    )
    return {"ok": True, "memory": memory, "persisted": persisted}


@router.post("/note")
async def add_note(
    body: MemoryNoteRequest,
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    uid = _require_user(body.user_id)
    memory, persisted = await run_in_threadpool(store.add_note, uid, body.note)
    return {"ok": True, "memory": memory, "persisted": persisted}


@router.delete("")
async def clear_memory(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    store: MemoryStore = Depends(get_memory_store),
) -> Dict[str, Any]:
    uid = _require_user(user_id)
    deleted = await run_in_threadpool(store.clear, uid)
    return {"ok": True, "deleted": deleted}
