# voice_agent/utils/__init__.py
# -*- coding: utf-8 -*-
"""
Voice Agent Server — Utility toolbox
------------------------------------
- logging : central logging configuration
- timers  : Stopwatch for upstream latency

    from voice_agent.utils import setup_logging, get_logger
"""

from __future__ import annotations

from .logging import (  # noqa: F401
    setup_logging,
    get_logger,
    redact_secrets,
)

from .timers import (  # noqa: F401
    Stopwatch,
)
