"""Shared logging helpers for lifeboard."""

from __future__ import annotations

import logging

# httpx logs every request at INFO, which drowns the ingest summary lines.
_NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    verbose_http: bool = False,
) -> None:
    """Initialise the root logger for CLI use.

    Mirrors ``logging.basicConfig`` with a terse format. Pass ``force=True`` to
    reconfigure during tests; ``verbose_http`` keeps per-request logs of the HTTP
    stack at the requested level.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = level if verbose_http else max(level, logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
