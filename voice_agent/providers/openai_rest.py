# voice_agent/providers/openai_rest.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — OpenAI REST provider
-----------------------------------------
This module is the ONLY place that knows how to talk to the OpenAI HTTP API.

Responsibilities:
- Build the fixed realtime session payload from settings.
- Mint short-lived realtime sessions (POST /realtime/sessions).
- Forward plain chat completions and text-to-speech requests.

All three are plain request/response calls: the interesting parts
(turn detection, voice, transcription) are configuration objects handed
to the API as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from voice_agent.core.config import Settings, settings
from voice_agent.core.errors import OpenAIError
from voice_agent.utils import Stopwatch

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Missing OPENAI_API_KEY"


def build_session_payload(cfg: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Build the JSON body for POST /realtime/sessions.

    Optional blocks:
    - turn_detection, when REALTIME_TURN_DETECTION=server_vad
    - input_audio_transcription, when REALTIME_TRANSCRIPTION_MODEL is set
    """
    cfg = cfg or settings

    payload: Dict[str, Any] = {
        "model": cfg.realtime_model,
        "modalities": list(cfg.realtime_modalities),
        "voice": cfg.realtime_voice,
        "output_audio_format": cfg.realtime_output_audio_format,
        "tool_choice": "auto",
        "temperature": cfg.realtime_temperature,
        "max_response_output_tokens": _max_tokens_value(cfg.realtime_max_output_tokens),
        "instructions": cfg.realtime_instructions,
    }

    if cfg.realtime_turn_detection:
        payload["turn_detection"] = {
            "type": cfg.realtime_turn_detection,
            "threshold": cfg.realtime_vad_threshold,
            "silence_duration_ms": cfg.realtime_vad_silence_ms,
            "prefix_padding_ms": cfg.realtime_vad_prefix_padding_ms,
        }

    if cfg.realtime_transcription_model:
        payload["input_audio_transcription"] = {
            "model": cfg.realtime_transcription_model,
        }

    return payload


def _max_tokens_value(raw: str) -> Any:
    """The API takes either the literal "inf" or an integer."""
    value = raw.strip()
    if value.isdigit():
        return int(value)
    return value


def _headers(extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    api_key = settings.openai_api_key
    if not api_key:
        raise OpenAIError(MISSING_KEY_MESSAGE)

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    if extra:
        headers.update(extra)
    return headers


def _post(
    path: str,
    payload: Dict[str, Any],
    *,
    extra_headers: Optional[Dict[str, str]] = None,
) -> requests.Response:
    """
    POST a JSON payload to the OpenAI API.

    Raises OpenAIError on transport errors and on non-2xx responses
    (carrying status code and body text).
    """
    url = f"{settings.openai_base_url.rstrip('/')}/{path.lstrip('/')}"
    headers = _headers(extra_headers)

    try:
        with Stopwatch(f"OpenAI POST /{path.lstrip('/')}", logger):
            resp = requests.post(
                url,
                headers=headers,
                json=payload,
                timeout=settings.openai_timeout_s,
            )
    except requests.RequestException as exc:
        raise OpenAIError(f"OpenAI HTTP error: {exc}") from exc

    if not resp.ok:
        preview = resp.text[:200].replace("\n", " ")
        logger.warning("OpenAI %s returned HTTP %s: %s", path, resp.status_code, preview)
        raise OpenAIError(
            f"OpenAI HTTP {resp.status_code}",
            status_code=resp.status_code,
            body=resp.text,
        )

    return resp


def create_realtime_session() -> Dict[str, Any]:
    """
    Mint a short-lived realtime session.

    Returns
    -------
    dict
        The upstream JSON as-is; it should include client_secret.value and
        client_secret.expires_at.

    Raises
    ------
    OpenAIError
        If the key is missing, the HTTP call fails, or the body is not JSON.
    """
    resp = _post(
        "/realtime/sessions",
        build_session_payload(),
        extra_headers={"OpenAI-Beta": "realtime=v1"},
    )

    try:
        data = resp.json()
    except ValueError as exc:
        raise OpenAIError("OpenAI returned non-JSON session response.", resp.status_code, resp.text) from exc

    if not isinstance(data, dict) or "client_secret" not in data:
        logger.warning("Realtime session response has no client_secret: keys=%s",
                       list(data) if isinstance(data, dict) else type(data).__name__)

    return data


def chat_completion(
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
) -> str:
    """
    Call chat completions and return the assistant text (stripped).

    Raises OpenAIError on HTTP failure or a malformed/empty response.
    """
    payload: Dict[str, Any] = {
        "model": model or settings.chat_model,
        "messages": messages,
    }
    resp = _post("/chat/completions", payload)

    try:
        data = resp.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        raise OpenAIError(
            "Chat response JSON missing choices[0].message.content",
            resp.status_code,
            resp.text,
        ) from exc

    if not isinstance(content, str) or not content.strip():
        raise OpenAIError("Chat model returned empty content.", resp.status_code)

    return content.strip()


def synthesize_speech(text: str, voice: Optional[str] = None) -> bytes:
    """Return MP3 bytes for `text` from the speech endpoint."""
    payload = {
        "model": settings.tts_model,
        "voice": voice or settings.tts_voice,
        "input": text,
        "response_format": "mp3",
    }
    resp = _post("/audio/speech", payload)
    return resp.content


if __name__ == "__main__":
    """
    Minimal self-test: prints the session payload without calling OpenAI.
    """
    import json

    print("Voice Agent Server — openai_rest.py self-test\n")
    print(f"API key set: {settings.realtime_enabled}")
    print(json.dumps(build_session_payload(), indent=2))
