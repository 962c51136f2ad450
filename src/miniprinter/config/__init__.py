"""Configuration for miniprinter."""

from miniprinter.config.settings import (
    DEFAULT_PUZZLE_URL,
    FetchSettings,
    PrinterSettings,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_PUZZLE_URL",
    "FetchSettings",
    "PrinterSettings",
    "Settings",
    "get_settings",
]
