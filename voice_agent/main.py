# voice_agent/main.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — FastAPI application entrypoint
---------------------------------------------------
This file wires everything together:

- Sets up central logging.
- Creates the FastAPI app.
- Adds CORS (the client page may be hosted elsewhere).
- Registers the {"error": ...} exception handlers.
- Mounts routers:
    * /, /client.html   (HTTP) → static voice client page
    * /session          (HTTP) → mint realtime session token
    * /memory/*         (HTTP) → per-user memory in Upstash Redis
    * /chat, /tts       (HTTP) → text chat + speech pass-through
- Exposes an ASGI `app` object for uvicorn.

Typical run command (dev):

    uvicorn voice_agent.main:app --host 0.0.0.0 --port 3000 --reload

"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voice_agent import __version__
from voice_agent.core.config import settings
from voice_agent.core.errors import add_exception_handlers
from voice_agent.routers.assist import router as assist_router
from voice_agent.routers.memory import router as memory_router
from voice_agent.routers.session import router as session_router
from voice_agent.routers.static import router as static_router
from voice_agent.utils import get_logger, setup_logging


setup_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)
logger.info(
    "Voice Agent server starting (env=%s, realtime_enabled=%s, memory_enabled=%s)",
    settings.environment,
    settings.realtime_enabled,
    settings.memory_enabled,
)


def create_app() -> FastAPI:
    """
    Application factory.

    Returns a configured FastAPI instance ready for uvicorn.
    """
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(static_router)
    app.include_router(session_router)
    app.include_router(memory_router)
    app.include_router(assist_router)

    @app.get("/health", tags=["meta"])
    async def health_check():
        """
        Lightweight health check for the hosting platform.
        """
        return {
            "ok": True,
            "environment": settings.environment,
            "realtime_enabled": settings.realtime_enabled,
            "memory_enabled": settings.memory_enabled,
        }

    logger.info("FastAPI app created (env=%s)", settings.environment)
    return app


# ASGI app for uvicorn / gunicorn
app = create_app()


if __name__ == "__main__":
    """
    Allow `python3 -m voice_agent.main` during development.
    """
    import uvicorn

    logger.info("Voice Agent server listening on http://localhost:%s", settings.port)
    uvicorn.run(
        "voice_agent.main:app",
        host=settings.api_host,
        port=settings.port,
        reload=(settings.environment == "development"),
    )
