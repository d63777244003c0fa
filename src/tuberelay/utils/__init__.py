"""Utility functions and classes for TubeRelay."""

from .config import Config
from .files import format_duration, format_file_size, generate_filename, sanitize_filename
from .logging import log_error, setup_logging

__all__ = [
    "Config",
    "log_error",
    "setup_logging",
    "sanitize_filename",
    "generate_filename",
    "format_file_size",
    "format_duration",
]
