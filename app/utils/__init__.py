"""Utility helpers for reusable functionality."""

from .datetime import ensure_app_timezone, get_app_timezone

__all__ = [
    "ensure_app_timezone",
    "get_app_timezone",
]
