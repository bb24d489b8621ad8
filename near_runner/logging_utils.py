from __future__ import annotations

import logging
from typing import Final, TextIO

_LOGGER_NAME: Final[str] = "near.runner"


def get_runner_logger() -> logging.Logger:
    """Return the shared logger used to report run progress on the console."""

    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def log_section(
    log_handle: TextIO,
    header: str,
    content: str | None = None,
    level: int = logging.INFO,
) -> None:
    log_handle.write(f"{header}\n")
    if content:
        log_handle.write(f"{content}\n")
    log_handle.flush()

    # Mirror the most important log events to the console so the user sees progress
    logger = get_runner_logger()
    if content:
        logger.log(level, "%s %s", header, content)
    else:
        logger.log(level, "%s", header)
