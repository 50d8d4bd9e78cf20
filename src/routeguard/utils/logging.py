"""Logging setup."""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = logging.WARNING, log_file: str | None = None) -> None:
    """Configure root logging, to stderr or to a file."""
    if isinstance(level, str):
        name = level
        level = logging.getLevelName(name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    logging.basicConfig(filename=log_file, level=level, format=LOG_FORMAT, force=True)
