# voice_agent/routers/static.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — client page router
---------------------------------------
GET /              -> client.html
GET /client.html   -> client.html
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from voice_agent.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["client"])


def _client_page() -> FileResponse:
    path = settings.client_page_path
    if not path.is_file():
        logger.error("Client page not found: %s", path)
        raise HTTPException(status_code=404, detail="Client page not found")
    return FileResponse(path, media_type="text/html")


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return _client_page()


@router.get("/client.html", include_in_schema=False)
async def client_html() -> FileResponse:
    return _client_page()
