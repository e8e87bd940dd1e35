"""
A minimal, synchronous event emitter.

Listeners are invoked in registration order on the caller's stack. ``emit``
iterates over a snapshot of the listener list, so listeners may register,
remove or re-emit on the same emitter while a dispatch is in progress.

The emitter can be used directly, subclassed, or attached to any object
through :func:`mixin`:

    class Door:
        ...

    door = mixin(Door())
    door.on("open", lambda who: print(who, "opened the door"))
    door.emit("open", "player")
"""
from __future__ import annotations

import logging
import types
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import settings as _settings
from .errors import InvalidListenerError, MixinError

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]

# Per-host state attributes; event names never become attributes.
_LISTENERS_ATTR = "_emitter_listeners"
_EXCLUSIVE_ATTR = "_emitter_exclusive"


class ListenerKind(Enum):
    NORMAL = "normal"
    ONCE = "once"
    ONLY = "only"


@dataclass(eq=False)
class Listener:
    """A registered callback plus the mode it was registered with.

    Attributes:
        kind: How the entry was registered (``on``, ``once`` or ``only``).
        callback: The callable exactly as the caller passed it in.
        first: For ``only`` entries, refuse replacement until cleared.
        fired: For ``once`` entries, set right before the callback runs.
    """

    kind: ListenerKind
    callback: Callback
    first: bool = False
    fired: bool = False

    def matches(self, fn: Callback) -> bool:
        # Equality rather than identity so bound methods can be removed.
        return self.callback is fn or self.callback == fn


def _name(fn: Any) -> str:
    return getattr(fn, "__name__", repr(fn))


def _check_callable(fn: Any, event: Any) -> None:
    if not callable(fn):
        raise InvalidListenerError(f"listener for event {event!r} must be callable, got {type(fn).__name__}")


def _state(host: Any, attr: str) -> Dict[str, Any]:
    store = getattr(host, attr, None)
    if store is None:
        store = {}
        try:
            setattr(host, attr, store)
        except (AttributeError, TypeError) as exc:
            raise MixinError(f"{type(host).__name__} object cannot hold emitter state") from exc
    return store


def _listeners_of(host: Any) -> Dict[str, List[Listener]]:
    return _state(host, _LISTENERS_ATTR)


def _exclusive_of(host: Any) -> Dict[str, Listener]:
    return _state(host, _EXCLUSIVE_ATTR)


def _discard(host: Any, event: str, entry: Listener) -> None:
    """Remove one specific entry (by identity), dropping the key if it empties."""
    listeners = _listeners_of(host)
    entries = listeners.get(event)
    if not entries:
        return
    remaining = [e for e in entries if e is not entry]
    if remaining:
        listeners[event] = remaining
    else:
        del listeners[event]


class Emitter:
    """Synchronous event emitter.

    ``Emitter()`` creates a standalone emitter. ``Emitter(obj)`` mixes the
    emitter methods into ``obj`` and returns ``obj`` itself (see :func:`mixin`).
    """

    def __new__(cls, *args: Any, **kwargs: Any) -> Any:
        # Only Emitter itself treats its argument as a mixin target; subclasses
        # keep their constructor arguments.
        target = args[0] if args else kwargs.get("target")
        if cls is Emitter and target is not None:
            return mixin(target)
        return super().__new__(cls)

    def __init__(self, target: Any = None) -> None:
        if target is not None:
            # Already handled by mixin() in __new__.
            return
        setattr(self, _LISTENERS_ATTR, {})
        setattr(self, _EXCLUSIVE_ATTR, {})

    # ------------------------ Registration ------------------------
    def on(self, event: str, fn: Callback) -> Any:
        """Register ``fn`` to be called every time ``event`` is emitted."""
        _check_callable(fn, event)
        _listeners_of(self).setdefault(event, []).append(Listener(ListenerKind.NORMAL, fn))
        logger.debug("Registered listener %s for event '%s'", _name(fn), event)
        return self

    def once(self, event: str, fn: Callback) -> Any:
        """Register ``fn`` for a single invocation of ``event``.

        The entry is removed before ``fn`` runs, so nested emits of the same
        event never reach it. ``off(event, fn)`` removes it by the original ``fn``.
        """
        _check_callable(fn, event)
        _listeners_of(self).setdefault(event, []).append(Listener(ListenerKind.ONCE, fn))
        logger.debug("Registered one-shot listener %s for event '%s'", _name(fn), event)
        return self

    def only(
        self,
        event: Optional[str] = None,
        options: Any = None,
        fn: Optional[Callback] = None,
        *,
        first: bool = False,
    ) -> Any:
        """Install, replace or clear the exclusive listener for ``event``.

        Call shapes:
            only(event, fn)                   -- install/replace the exclusive listener
            only(event, {"first": True}, fn)  -- install; later installs are ignored
            only(event, fn, first=True)       -- same as above
            only(event)                       -- clear the exclusive listener for event
            only()                            -- clear every exclusive listener

        While installed, ``emit(event)`` calls the exclusive listener and
        nothing else. Listeners added with ``on``/``once`` stay registered.
        """
        exclusive = _exclusive_of(self)
        if event is None:
            exclusive.clear()
            logger.debug("Cleared all exclusive listeners")
            return self

        if options is not None and not isinstance(options, Mapping):
            if fn is None and callable(options):
                options, fn = None, options
            else:
                raise InvalidListenerError(f"options for event {event!r} must be a mapping, got {type(options).__name__}")
        if options is not None:
            first = first or bool(options.get("first", False))

        if fn is None:
            if exclusive.pop(event, None) is not None:
                logger.debug("Cleared exclusive listener for event '%s'", event)
            return self

        _check_callable(fn, event)
        current = exclusive.get(event)
        if current is not None and current.first:
            logger.debug(
                "Ignoring exclusive listener %s for event '%s'; %s was installed first",
                _name(fn),
                event,
                _name(current.callback),
            )
            return self
        exclusive[event] = Listener(ListenerKind.ONLY, fn, first=first)
        logger.debug("Installed exclusive listener %s for event '%s' (first=%s)", _name(fn), event, first)
        return self

    # ------------------------ Removal ------------------------
    def off(self, event: Optional[str] = None, fn: Optional[Callback] = None) -> Any:
        """Remove listeners registered with ``on``/``once``.

        ``off()`` removes everything, ``off(event)`` removes every listener for
        ``event`` and ``off(event, fn)`` removes each entry registered with
        ``fn``. Exclusive listeners are managed by :meth:`only` and are left alone.
        """
        listeners = _listeners_of(self)
        if event is None:
            listeners.clear()
            logger.debug("Removed all listeners")
            return self
        if fn is None:
            if listeners.pop(event, None) is not None:
                logger.debug("Removed all listeners for event '%s'", event)
            return self

        entries = listeners.get(event)
        if not entries:
            return self
        remaining = [entry for entry in entries if not entry.matches(fn)]
        if len(remaining) == len(entries):
            return self
        if remaining:
            listeners[event] = remaining
        else:
            del listeners[event]
        logger.debug("Removed %d listener(s) %s from event '%s'", len(entries) - len(remaining), _name(fn), event)
        return self

    # ------------------------ Dispatch ------------------------
    def emit(self, event: str, /, *args: Any, **kwargs: Any) -> Any:
        """Call the listeners for ``event`` with the given arguments.

        ``event`` is positional-only, so any keyword (``event=`` included) is
        passed through to the listeners.

        Exceptions raised by a listener propagate to the caller and stop the
        current dispatch.
        """
        exclusive = _exclusive_of(self).get(event)
        if exclusive is not None:
            logger.debug("Emitting '%s' to exclusive listener %s", event, _name(exclusive.callback))
            exclusive.callback(*args, **kwargs)
            return self

        entries = list(_listeners_of(self).get(event, ()))
        if not entries:
            logger.debug("Emitting '%s' with no listeners", event)
            return self
        logger.debug("Emitting '%s' to %d listeners", event, len(entries))
        trace = _settings.SETTINGS.trace_dispatch
        for entry in entries:
            if entry.kind is ListenerKind.ONCE:
                if entry.fired:
                    continue
                entry.fired = True
                _discard(self, event, entry)
            if trace:
                logger.debug("Dispatching '%s' to %s", event, _name(entry.callback))
            entry.callback(*args, **kwargs)
        return self

    # ------------------------ Queries ------------------------
    def listeners(self, event: str) -> List[Callback]:
        """Return the callbacks registered for ``event`` with ``on``/``once``, in order."""
        return [entry.callback for entry in _listeners_of(self).get(event, ())]

    def has(self, event: str) -> bool:
        """Return True if emitting ``event`` would call at least one listener."""
        return bool(_listeners_of(self).get(event)) or event in _exclusive_of(self)

    def event_names(self) -> List[str]:
        return list(_listeners_of(self))

    # Aliases
    add_listener = on
    add_event_listener = on
    remove_listener = off
    remove_event_listener = off
    remove_all_listeners = off
    has_listeners = has
    hasListeners = has


_METHOD_NAMES = (
    "on",
    "once",
    "only",
    "off",
    "emit",
    "listeners",
    "has",
    "has_listeners",
    "hasListeners",
    "event_names",
    "add_listener",
    "add_event_listener",
    "remove_listener",
    "remove_event_listener",
    "remove_all_listeners",
)


def mixin(target: Any) -> Any:
    """Attach the emitter methods to ``target`` and return it.

    An instance gets bound methods and its own fresh state. A class gets the
    methods as regular methods, so ``mixin`` also works as a class decorator
    and each instance creates its own state on first use; a class with
    ``__slots__`` and no ``__dict__`` raises :class:`MixinError` at that point.

    Existing attributes on ``target`` with the same names as the emitter
    methods (``on``, ``emit``, ``off``, ...) are overwritten.
    """
    try:
        if isinstance(target, type):
            for name in _METHOD_NAMES:
                setattr(target, name, getattr(Emitter, name))
        else:
            setattr(target, _LISTENERS_ATTR, {})
            setattr(target, _EXCLUSIVE_ATTR, {})
            for name in _METHOD_NAMES:
                setattr(target, name, types.MethodType(getattr(Emitter, name), target))
    except (AttributeError, TypeError) as exc:
        raise MixinError(f"cannot mix emitter methods into {type(target).__name__} object") from exc
    logger.debug("Mixed emitter methods into %r", target)
    return target
