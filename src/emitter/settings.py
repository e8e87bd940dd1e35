from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "EMITTER_LOG_LEVEL"
ENV_TRACE_DISPATCH = "EMITTER_TRACE_DISPATCH"

_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")

# Anything else non-empty ("1", "yes", "on", ...) counts as set.
_FALSE_WORDS = frozenset({"", "0", "false", "no", "n", "off"})


def _as_bool(value: Any) -> bool:
    """Read a flag from an env string or a plain Python value."""
    if not isinstance(value, str):
        return bool(value)
    return value.strip().lower() not in _FALSE_WORDS


@dataclass
class EmitterSettings:
    """Runtime settings for emitter diagnostics.

    Values come from the environment (prefix: EMITTER_) via :func:`load_settings`:

        EMITTER_LOG_LEVEL=DEBUG EMITTER_TRACE_DISPATCH=1 python app.py

    ``trace_dispatch`` makes ``emit`` log every listener call at DEBUG level.
    """

    log_level: str = "WARNING"
    trace_dispatch: bool = False

    def validate(self) -> None:
        """Normalize settings to safe values."""
        name = str(self.log_level).strip().upper()
        if name not in _LEVEL_NAMES:
            logger.warning("Unknown log level %r; falling back to WARNING", self.log_level)
            name = "WARNING"
        self.log_level = name
        self.trace_dispatch = _as_bool(self.trace_dispatch)

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)

    def as_dict(self) -> Dict[str, Any]:
        return {"log_level": self.log_level, "trace_dispatch": self.trace_dispatch}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EmitterSettings:
    """Build settings from environment variables, falling back to defaults."""
    env = os.environ if environ is None else environ
    settings = EmitterSettings()
    if ENV_LOG_LEVEL in env:
        settings.log_level = env[ENV_LOG_LEVEL]
    if ENV_TRACE_DISPATCH in env:
        settings.trace_dispatch = _as_bool(env[ENV_TRACE_DISPATCH])
    settings.validate()
    return settings


SETTINGS = load_settings()
