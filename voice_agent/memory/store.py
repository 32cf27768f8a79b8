# voice_agent/memory/store.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — per-user memory store
------------------------------------------

One key per user (`memory:<user_id>`) in the remote key-value store.
Every update is a read / merge / write-back cycle:

    current = kv.get(key) or {}
    updated = fn(current)
    kv.set(key, updated)

There is no locking: concurrent writers for the same user are
last-write-wins. The store keeps no local state between requests.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from voice_agent.core.config import settings
from voice_agent.memory.merge import (
    append_note,
    apply_profile_fields,
    deep_merge,
    shallow_merge,
    trim_notes,
)
from voice_agent.providers.upstash_rest import UpstashRestClient

logger = logging.getLogger(__name__)

Memory = Dict[str, Any]


class MemoryStore:
    """
    Read/merge/write access to per-user memory.

    Parameters
    ----------
    kv:
        Anything with get(key), set(key, value) and delete(key).
        Defaults to the Upstash REST client.
    key_prefix:
        Prefix for user keys. Defaults to settings.memory_key_prefix.
    max_notes:
        Notes list bound. Defaults to settings.memory_max_notes.
    """

    def __init__(
        self,
        kv: Optional[Any] = None,
        key_prefix: Optional[str] = None,
        max_notes: Optional[int] = None,
    ) -> None:
        self.kv = kv if kv is not None else UpstashRestClient()
        self._key_prefix = key_prefix
        self._max_notes = max_notes

    @property
    def key_prefix(self) -> str:
        return self._key_prefix if self._key_prefix is not None else settings.memory_key_prefix

    @property
    def max_notes(self) -> int:
        return self._max_notes if self._max_notes is not None else settings.memory_max_notes

    def key_for(self, user_id: str) -> str:
        return f"{self.key_prefix}{user_id}"

    # ------------------------------------------------------------------
    # Read / write
    # ------------------------------------------------------------------

    def load(self, user_id: str) -> Memory:
        """Return the user's memory, `{}` when missing or not an object."""
        key = self.key_for(user_id)
        value = self.kv.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.warning(
                "[MemoryStore] %s holds a %s, not an object; treating as empty.",
                key,
                type(value).__name__,
            )
            return {}
        return value

    def save(self, user_id: str, memory: Memory) -> bool:
        return bool(self.kv.set(self.key_for(user_id), memory))

    def update(self, user_id: str, fn: Callable[[Memory], Memory]) -> Tuple[Memory, bool]:
        """
        Read, apply `fn`, bound the notes list, write back.

        Returns (updated memory, persisted).
        """
        current = self.load(user_id)
        updated = trim_notes(fn(current), self.max_notes)
        persisted = self.save(user_id, updated)
        logger.info(
            "[MemoryStore] Updated %s (keys=%s, persisted=%s)",
            self.key_for(user_id),
            sorted(updated),
            persisted,
        )
        return updated, persisted

    # ------------------------------------------------------------------
    # Update flavours
    # ------------------------------------------------------------------

    def patch(self, user_id: str, patch: Memory, *, deep: bool = False) -> Tuple[Memory, bool]:
        merge = deep_merge if deep else shallow_merge
        return self.update(user_id, lambda current: merge(current, patch))

    def add_note(self, user_id: str, note: str) -> Tuple[Memory, bool]:
        return self.update(user_id, lambda current: append_note(current, note, self.max_notes))

    def set_fields(self, user_id: str, **fields: Optional[str]) -> Tuple[Memory, bool]:
        return self.update(
            user_id,
            lambda current: apply_profile_fields(current, max_notes=self.max_notes, **fields),
        )

    def clear(self, user_id: str) -> bool:
        key = self.key_for(user_id)
        deleted = bool(self.kv.delete(key))
        logger.info("[MemoryStore] Cleared %s (deleted=%s)", key, deleted)
        return deleted


# Global instance used by the routers
memory_store = MemoryStore()


def get_memory_store() -> MemoryStore:
    """FastAPI dependency; tests override it with an in-memory store."""
    return memory_store
