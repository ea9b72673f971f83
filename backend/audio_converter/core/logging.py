from __future__ import annotations

import logging

from .config import settings


_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Install a single console handler on the root logger.

    Safe to call more than once; later calls only adjust the level.
    """
    global _configured

    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(log_level)
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    root.addHandler(handler)

    # uvicorn installs its own handlers; keep its access log from doubling up
    logging.getLogger("uvicorn.access").propagate = False
    _configured = True
