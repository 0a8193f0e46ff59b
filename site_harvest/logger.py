"""Logging for the crawler.

All modules share one logger named ``SiteHarvest``::

    from site_harvest.logger import logger
    logger.info("Scraped %d pages", count)

Records go to stderr, so ``site-harvest crawl --stdout`` keeps stdout for the
JSON document. The CLI calls :func:`init_logging` once per run to apply
``--log-level``, ``--log-file`` and ``--log-format``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

_DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "SiteHarvest"
_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024


def init_logging(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = _DEFAULT_FORMAT,
) -> logging.Logger:
    """Install fresh handlers on the ``SiteHarvest`` logger.

    Handlers from an earlier call are dropped. With *log_file* set, records
    are also appended to that file, rotated at 5 MiB with three backups.
    """
    formatter = logging.Formatter(log_format)
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    lg.addHandler(console)

    if log_file is not None:
        rotating = RotatingFileHandler(
            filename=str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=3, encoding="utf-8"
        )
        rotating.setFormatter(formatter)
        lg.addHandler(rotating)

    return lg


logger: logging.Logger = init_logging()

__all__ = ["logger", "init_logging"]
