"""
Process settings and logging configuration for deckload.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _env_path(name: str) -> Optional[Path]:
    value = os.environ.get(name)
    return Path(value) if value else None


@dataclass(slots=True)
class Settings:
    """Application-level settings."""

    log_level: str = "WARNING"
    log_file: Optional[Path] = None
    calibration_path: Optional[Path] = None
    scenario_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            log_level=os.environ.get("DECKLOAD_LOG_LEVEL", "WARNING").upper(),
            log_file=_env_path("DECKLOAD_LOG_FILE"),
            calibration_path=_env_path("DECKLOAD_CALIBRATION"),
            scenario_path=_env_path("DECKLOAD_SCENARIO"),
        )


def init_logging(settings: Settings) -> None:
    """Configure basic logging to stderr and optional file."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file is not None:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
    )

    logging.getLogger(__name__).info("Logging initialized at %s", settings.log_level)
