import logging
import os
from typing import Mapping, Optional

from .settings import ENV_LOG_LEVEL, load_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(default_level: int = logging.INFO, environ: Optional[Mapping[str, str]] = None) -> None:
    """Install a root handler for emitter diagnostics.

    The level comes from :func:`load_settings` when EMITTER_LOG_LEVEL is set,
    so unknown names fall back the same way settings do; otherwise
    ``default_level`` is used.
    """
    env = os.environ if environ is None else environ
    level = load_settings(env).level if ENV_LOG_LEVEL in env else default_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
