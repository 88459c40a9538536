"""Logger factory shared by all modules."""

import logging
import os
import sys

LOG_LEVEL_ENV = "INSIGHT_LOG_LEVEL"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger("insight_blueprint")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the package root logger."""
    _configure_root()
    return logging.getLogger(name)
