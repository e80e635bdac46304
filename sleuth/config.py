"""
Configuration - Environment-driven settings.

Environment variables:
    SLEUTH_ENV             development | production (default: development);
                           production hides the API docs pages
    SLEUTH_ELEMENTS_FILE   element file for `sleuth play` (default: ./elements.toml)
    SLEUTH_LOG_LEVEL       logging level name (default: WARNING)
    ALLOWED_ORIGINS        comma-separated CORS origins for the API (default: *)

Command-line flags override the environment.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    """Runtime settings for the CLI and the API."""
    env: str = "development"
    elements_file: str = "./elements.toml"
    log_level: str = "WARNING"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("SLEUTH_ENV", "development"),
            elements_file=os.getenv("SLEUTH_ELEMENTS_FILE", "./elements.toml"),
            log_level=os.getenv("SLEUTH_LOG_LEVEL", "WARNING").upper(),
            allowed_origins=[
                origin.strip()
                for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
        )

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def configure_logging(level: str | int = "WARNING", filename: str | None = None):
    """
    Configure root logging once for the process.

    The terminal UI redraws the whole screen, so `sleuth play` logs to a
    file (or not at all) rather than stderr.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, filename=filename)
