# voice_agent/providers/upstash_rest.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — Upstash Redis REST provider
------------------------------------------------
Tiny client for the Upstash Redis REST interface:

    GET  {url}/get/{key}     -> {"result": "<string>" | null}
    POST {url}/set/{key}     -> {"result": "OK"}      (body = value)
    GET  {url}/del/{key}     -> {"result": <int>}

Values are stored as JSON text. When the store is not configured the
client degrades to "nothing stored": get() returns None and set()
returns False, so the server still runs without memory.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from voice_agent.core.config import settings
from voice_agent.core.errors import UpstashError
from voice_agent.utils import Stopwatch

logger = logging.getLogger(__name__)


class UpstashRestClient:
    """
    Key-value access over Upstash REST.

    Parameters
    ----------
    url, token:
        Override the configured credentials. When omitted they are read
        from settings at call time, so env changes are picked up.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._url = url
        self._token = token
        self._timeout = timeout

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    @property
    def url(self) -> Optional[str]:
        return self._url or settings.upstash_redis_rest_url

    @property
    def token(self) -> Optional[str]:
        return self._token or settings.upstash_redis_rest_token

    @property
    def timeout(self) -> float:
        return self._timeout if self._timeout is not None else settings.upstash_timeout_s

    @property
    def configured(self) -> bool:
        return bool(self.url and self.token)

    def _endpoint(self, command: str, key: str) -> str:
        return f"{self.url.rstrip('/')}/{command}/{quote(key, safe='')}"

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"}

    def _result(self, resp: requests.Response, command: str) -> Any:
        if resp.status_code != 200:
            preview = resp.text[:200].replace("\n", " ")
            raise UpstashError(f"Upstash {command} HTTP {resp.status_code}: {preview}")

        try:
            data = resp.json()
        except ValueError as exc:
            raise UpstashError(f"Upstash {command} returned non-JSON response.") from exc

        if isinstance(data, dict) and data.get("error"):
            raise UpstashError(f"Upstash {command} error: {data['error']}")

        if not isinstance(data, dict):
            raise UpstashError(f"Upstash {command} returned unexpected payload.")

        return data.get("result")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        """
        Return the stored value for `key`.

        - JSON text is decoded; non-JSON text is returned as the raw string.
        - Missing key or unconfigured store -> None.
        """
        if not self.configured:
            return None

        try:
            with Stopwatch(f"Upstash GET {key}", logger):
                resp = requests.get(
                    self._endpoint("get", key),
                    headers=self._headers(),
                    timeout=self.timeout,
                )
        except requests.RequestException as exc:
            raise UpstashError(f"Upstash get failed: {exc}") from exc

        raw = self._result(resp, "get")
        if raw is None:
            return None

        if not isinstance(raw, str):
            return raw

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw

    def set(self, key: str, value: Any) -> bool:
        """
        Store `value` as JSON text under `key`.

        Returns False (and stores nothing) when the store is not configured.
        """
        if not self.configured:
            logger.debug("Upstash not configured; dropping write for %s", key)
            return False

        body = json.dumps(value, ensure_ascii=False)
        try:
            with Stopwatch(f"Upstash SET {key}", logger):
                resp = requests.post(
                    self._endpoint("set", key),
                    headers=self._headers(),
                    data=body.encode("utf-8"),
                    timeout=self.timeout,
                )
        except requests.RequestException as exc:
            raise UpstashError(f"Upstash set failed: {exc}") from exc

        self._result(resp, "set")
        return True

    def delete(self, key: str) -> bool:
        """Delete `key`. Returns True when a key was actually removed."""
        if not self.configured:
            return False

        try:
            resp = requests.get(
                self._endpoint("del", key),
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstashError(f"Upstash del failed: {exc}") from exc

        removed = self._result(resp, "del")
        return bool(removed)
