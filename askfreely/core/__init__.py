"""Core: config, rate limiting, exception handlers and application bootstrap."""

from askfreely.core.config import get_settings

__all__ = ["get_settings"]
