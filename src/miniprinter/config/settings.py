"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested sections use a double underscore, e.g. MINIPRINTER_PRINTER__DPI=180.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PUZZLE_URL = "https://www.nytimes.com/svc/crosswords/v6/puzzle/mini.json"


class PrinterSettings(BaseModel):
    """Thermal printer geometry and transport."""

    # Paper geometry (58mm paper, 203 DPI head)
    chars_per_line: int = Field(default=32, ge=1)
    pixels_per_char: int = Field(default=12, ge=1)
    dpi: float = Field(default=203.0, gt=0)

    # Transport
    transport: Literal["console", "serial", "preview"] = "console"
    output: Optional[Path] = None  # stdout when unset
    port: str = "/dev/serial0"
    baudrate: int = 9600
    encoding: str = "utf-8"
    cut_feed_lines: int = Field(default=3, ge=0, le=255)

    @property
    def dot_width(self) -> int:
        """Printable width in dots."""
        return self.chars_per_line * self.pixels_per_char


class FetchSettings(BaseModel):
    """Puzzle download settings."""

    url: str = DEFAULT_PUZZLE_URL
    user_agent: str = "miniprinter"
    timeout: float = Field(default=30.0, gt=0)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MINIPRINTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    printer: PrinterSettings = Field(default_factory=PrinterSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
