"""Shared utilities: datetime, generators, sanitization."""

from newsecho.shared.utils.datetime import ensure_utc, utc_now
from newsecho.shared.utils.generators import generate_cuid
from newsecho.shared.utils.sanitization import InputSanitizer, sanitize_file_name

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "InputSanitizer",
    "sanitize_file_name",
]
