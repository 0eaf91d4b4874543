"""Utility functions and helpers."""

from .sanitization import DEFAULT_ALLOWED, default_config, sanitize_html

__all__ = ["DEFAULT_ALLOWED", "default_config", "sanitize_html"]
