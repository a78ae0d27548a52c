"""
Shared utilities.
"""
import logging
import sys

from firerisk.config import settings

_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger("firerisk")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if settings.debug else settings.log_level.upper())
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a module logger under the shared firerisk handler."""
    _configure_root()
    return logging.getLogger(name)


__all__ = ["get_logger"]
