import logging
import sys


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger. Safe to call twice."""
    global _CONFIGURED
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _CONFIGURED = True
