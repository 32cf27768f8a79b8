"""
Voice Agent Server
------------------
Small FastAPI service that serves the voice client page, mints realtime
session tokens and keeps per-user memory in a remote key-value store.
"""

__version__ = "0.1.0"
