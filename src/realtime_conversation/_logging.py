# -*- coding: utf-8 -*-
"""The logger for the realtime conversation package."""

import logging

_DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)-7s | "
    "%(module)s:%(funcName)s:%(lineno)s - %(message)s"
)

logger = logging.getLogger("realtime_conversation")


def setup_logger(
    level: str = "INFO",
    filepath: str | None = None,
) -> None:
    """Set up the package logger.

    Args:
        level (`str`, defaults to `"INFO"`):
            The logging level, chosen from "INFO", "DEBUG", "WARNING",
            "ERROR" and "CRITICAL".
        filepath (`str | None`, optional):
            The filepath to save the logging output.
    """
    if level not in ["INFO", "DEBUG", "WARNING", "ERROR", "CRITICAL"]:
        raise ValueError(
            f"Invalid logging level: {level}. Must be one of "
            f"'INFO', 'DEBUG', 'WARNING', 'ERROR', 'CRITICAL'.",
        )

    logger.handlers.clear()
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
    logger.addHandler(handler)

    if filepath:
        file_handler = logging.FileHandler(filepath, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
