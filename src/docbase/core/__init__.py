"""Core docbase utilities: settings, logging and exceptions."""

from docbase.core.config import Settings, get_settings
from docbase.core.exceptions import (
    CollectionConfigError,
    CreationError,
    DocbaseError,
    HookError,
)
from docbase.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "DocbaseError",
    "CollectionConfigError",
    "CreationError",
    "HookError",
]
