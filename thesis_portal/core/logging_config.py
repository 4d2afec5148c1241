"""
Logging setup for the thesis management backend.

Configured once at application start; modules log through
``logging.getLogger(__name__)``.
"""

import logging
import sys

from thesis_portal.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the package logger."""
    global _configured
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger("thesis_portal")
    root.setLevel((level or settings.LOG_LEVEL).upper())
    root.addHandler(handler)

    # SQL echo is too noisy outside of debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    _configured = True
