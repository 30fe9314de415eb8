"""Utility functions and classes for vidprobe."""

from .config import Config
from .paths import safe_filename
from .logging import log_error, setup_logging

__all__ = ["Config", "safe_filename", "log_error", "setup_logging"]
