"""Utility modules."""

from multisub.utils.config import Settings, get_settings
from multisub.utils.logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
]
