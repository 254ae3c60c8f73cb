"""Utility helpers for reusable functionality."""

from .datetime import ensure_app_timezone, get_app_timezone, now_in_app_timezone
from .files import remove_file_safely, sanitize_filename

__all__ = [
    "ensure_app_timezone",
    "get_app_timezone",
    "now_in_app_timezone",
    "remove_file_safely",
    "sanitize_filename",
]
