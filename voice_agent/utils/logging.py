# voice_agent/utils/logging.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — logging utilities
--------------------------------------
Central logging configuration.

Upstream error previews (OpenAI, Upstash) are logged verbatim, and those
can echo credentials back, so every root handler gets a filter that masks
bearer tokens, OpenAI keys and ephemeral session secrets.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

QUIET_LOGGERS = ("uvicorn.access", "urllib3")

_SECRET_PATTERNS = (
    re.compile(r"(Bearer\s+)[A-Za-z0-9._\-]+"),
    re.compile(r"\b(sk-)[A-Za-z0-9_\-]{6,}"),
    re.compile(r"\b(ek_)[A-Za-z0-9_\-]{6,}"),
)


def redact_secrets(text: str) -> str:
    """'Bearer abc123' -> 'Bearer ***', 'sk-proj-xyz...' -> 'sk-***'"""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


class SecretRedactingFilter(logging.Filter):
    """Rewrites the formatted message with secrets masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def resolve_level(level: Union[str, int, None], debug: bool = False) -> int:
    """
    LOG_LEVEL wins when it names a real level ("info", "WARNING", 10...);
    otherwise DEBUG in debug mode, INFO elsewhere.
    """
    if isinstance(level, int):
        return level
    if level:
        value = getattr(logging, level.strip().upper(), None)
        if isinstance(value, int):
            return value
    return logging.DEBUG if debug else logging.INFO


def setup_logging(
    *,
    debug: bool = False,
    level: Union[str, int, None] = None,
    quiet: Optional[Iterable[str]] = None,
) -> None:
    """
    Configure root logging for the process.

    Safe to call twice: an existing handler set (uvicorn --reload, pytest)
    is kept and only re-levelled, and the redacting filter is added once.
    """
    base_level = resolve_level(level, debug)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=base_level, format=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.setLevel(base_level)

    for handler in root.handlers:
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(SecretRedactingFilter())

    for name in quiet if quiet is not None else QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(base_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
