"""
Logging setup.

One stdout handler on the root logger; modules log through
`logging.getLogger(__name__)`. Gunicorn captures stdout in production.
"""
import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    if any(getattr(h, "_progress_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler._progress_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
