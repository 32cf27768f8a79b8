# voice_agent/core/config.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — Configuration
----------------------------------
Central configuration for the server, including:

- app metadata and HTTP bind address,
- static client page location,
- OpenAI credentials and the realtime session defaults,
- Upstash Redis REST credentials for per-user memory,
- memory limits.

Every value can be overridden via environment variables or a `.env` file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, List, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------

# This file is: voice_agent/core/config.py
PACKAGE_DIR: Path = Path(__file__).resolve().parents[1]   # .../voice_agent
ROOT_DIR: Path = PACKAGE_DIR.parent

STATIC_DIR: Path = PACKAGE_DIR / "static"

DEFAULT_INSTRUCTIONS = (
    "You are Dummy, a concise, friendly voice assistant. Keep replies short "
    "unless asked. Speak when the user addresses you."
)


# ---------------------------------------------------------------------------
# Settings model
# ---------------------------------------------------------------------------


class Settings(BaseSettings):
    """
    Global configuration for the voice agent server.

    Instantiated once at import time as `settings`. Env var names are the
    upper-cased field names (PORT, OPENAI_API_KEY, UPSTASH_REDIS_REST_URL...).
    """

    model_config = SettingsConfigDict(
        env_file=ROOT_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- App / server basics -----------------------------------------------
    app_name: str = "Voice Agent Server"
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    # e.g. "warning"; unset -> DEBUG when debug, else INFO
    log_level: Optional[str] = None

    api_host: str = "0.0.0.0"
    port: int = 3000

    # CORS_ALLOW_ORIGINS=https://a.example,https://b.example (a JSON list works too)
    cors_allow_origins: Annotated[List[str], NoDecode] = ["*"]

    # --- Static client ------------------------------------------------------
    static_dir: Path = STATIC_DIR
    client_page: str = "client.html"

    # --- OpenAI -------------------------------------------------------------
    openai_api_key: Optional[str] = Field(
        default=None,
        description="Server-side OpenAI key (env: OPENAI_API_KEY).",
    )
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout_s: float = 20.0

    # Realtime session defaults. The client can still adjust VAD and other
    # params over the data channel once connected.
    realtime_model: str = "gpt-4o-realtime-preview-2024-12-17"
    realtime_voice: str = "verse"
    realtime_modalities: List[str] = ["audio", "text"]
    realtime_output_audio_format: str = "pcm16"
    realtime_temperature: float = 0.8
    realtime_max_output_tokens: str = "inf"
    realtime_instructions: str = DEFAULT_INSTRUCTIONS

    # Set REALTIME_TURN_DETECTION=server_vad to send a turn_detection block.
    realtime_turn_detection: Optional[Literal["server_vad"]] = None
    realtime_vad_threshold: float = 0.5
    realtime_vad_silence_ms: int = 500
    realtime_vad_prefix_padding_ms: int = 300

    # e.g. "whisper-1"; None leaves input transcription off.
    realtime_transcription_model: Optional[str] = None

    # Plain request/response collaborators
    chat_model: str = "gpt-4o-mini"
    tts_model: str = "gpt-4o-mini-tts"
    tts_voice: str = "verse"

    # --- Upstash Redis REST (memory) ---------------------------------------
    # e.g. https://us1-shiny-12345.upstash.io
    upstash_redis_rest_url: Optional[str] = None
    upstash_redis_rest_token: Optional[str] = None
    upstash_timeout_s: float = 5.0

    # --- Memory limits ------------------------------------------------------
    memory_key_prefix: str = "memory:"
    memory_max_notes: int = 50

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [origin.strip() for origin in text.split(",") if origin.strip()]

    @property
    def realtime_enabled(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def memory_enabled(self) -> bool:
        return bool(self.upstash_redis_rest_url and self.upstash_redis_rest_token)

    @property
    def client_page_path(self) -> Path:
        return self.static_dir / self.client_page


# Single global settings instance used by the rest of the app.
settings = Settings()


if __name__ == "__main__":
    # Minimal self-test so you can quickly verify config loading.
    print("Voice Agent Server — Settings self-test")
    print(f"ROOT_DIR        : {ROOT_DIR}")
    print(f"Client page     : {settings.client_page_path}")
    print(f"Environment     : {settings.environment}")
    print(f"Bind            : {settings.api_host}:{settings.port}")
    print(f"Realtime        : enabled={settings.realtime_enabled}, model={settings.realtime_model}")
    print(f"Memory          : enabled={settings.memory_enabled}, max_notes={settings.memory_max_notes}")
