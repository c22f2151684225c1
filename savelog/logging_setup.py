from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """
    Set the ``savelog`` logger level and give it a console handler, unless the
    process already routes logging somewhere (a host app, pytest).
    """
    global _CONFIGURED
    logger = logging.getLogger("savelog")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if _CONFIGURED or logging.getLogger().handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _CONFIGURED = True
