"""Shared helpers: UTC time, push keys, text sanitization."""

from askfreely.shared.utils.datetime import (
    to_epoch_ms,
    to_iso,
    utc_now,
)
from askfreely.shared.utils.generators import generate_push_id
from askfreely.shared.utils.sanitization import (
    sanitize_text,
    truncate_utf16,
    utf16_code_units,
    utf16_length,
)

__all__ = [
    "utc_now",
    "to_iso",
    "to_epoch_ms",
    "generate_push_id",
    "sanitize_text",
    "truncate_utf16",
    "utf16_code_units",
    "utf16_length",
]
