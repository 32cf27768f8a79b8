"""
Per-user memory package.

    from voice_agent.memory import get_memory_store

    store = get_memory_store()
    memory, persisted = store.patch(user_id, {"tone": "calm"}, deep=True)
"""

from .store import (
    Memory,
    MemoryStore,
    get_memory_store,
    memory_store,
)

__all__ = [
    "Memory",
    "MemoryStore",
    "get_memory_store",
    "memory_store",
]
