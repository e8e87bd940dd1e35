class EmitterError(Exception):
    """Base error for the emitter package."""


class InvalidListenerError(EmitterError, TypeError):
    """Raised when a listener is not callable or ``only`` options are malformed."""


class MixinError(EmitterError, TypeError):
    """Raised when emitter methods cannot be attached to a target object."""
