"""
Emitter package root.

Provides a minimal synchronous event emitter:
- Emitter: register listeners with on/once/only, remove them with off, dispatch with emit
- mixin: give any object (or class) its own emitter methods and state
- Settings and logging helpers for diagnosing dispatch

Listeners run in registration order on the caller's stack. Errors raised by a
listener propagate to the code that called ``emit``.
"""
from .emitter import Emitter, Listener, ListenerKind, mixin
from .errors import EmitterError, InvalidListenerError, MixinError
from .logging_config import configure_logging
from .settings import SETTINGS, EmitterSettings, load_settings

__all__ = [
    "Emitter",
    "Listener",
    "ListenerKind",
    "mixin",
    "EmitterError",
    "InvalidListenerError",
    "MixinError",
    "configure_logging",
    "SETTINGS",
    "EmitterSettings",
    "load_settings",
]
