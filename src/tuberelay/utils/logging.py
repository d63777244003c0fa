"""Logging utilities."""

import logging
import sys
import traceback
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = logging.INFO):
    """Configure console logging for the application."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def log_error(msg: str, exc: Exception | None = None, log_file: Path | None = None):
    """Log errors to a file for debugging."""
    if log_file is None:
        log_file = Path.home() / "tuberelay_error.log"
    try:
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"{msg}\n")
            if exc:
                f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("-" * 50 + "\n")
    except OSError as e:
        logging.getLogger(__name__).warning(f"Could not write error log {log_file}: {e}")
