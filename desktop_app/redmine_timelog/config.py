"""Konfigurations-Utilities für den Redmine Zeiterfassungs-Client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_STORAGE_PATH = Path.home() / ".config" / "redmine-timelog" / "storage.json"
DEFAULT_REQUEST_TIMEOUT = 15
DEFAULT_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(slots=True)
class AppConfig:
    """Konfigurationswerte für die Anwendung."""

    storage_path: Path = field(default_factory=lambda: DEFAULT_STORAGE_PATH)
    request_timeout: int = DEFAULT_REQUEST_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL


def load_config(env_path: Optional[Path] = None) -> AppConfig:
    """Lädt die Konfiguration aus Umgebungsvariablen und einer optionalen `.env` Datei."""

    env_path = env_path or Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    storage_path = os.getenv("REDMINE_TIMELOG_STORAGE")
    return AppConfig(
        storage_path=Path(storage_path).expanduser() if storage_path else DEFAULT_STORAGE_PATH,
        request_timeout=int(os.getenv("REDMINE_TIMELOG_TIMEOUT", DEFAULT_REQUEST_TIMEOUT)),
        log_level=os.getenv("REDMINE_TIMELOG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Richtet das Root-Logging auf stderr ein."""

    logging.basicConfig(level=getattr(logging, level.upper(), logging.WARNING), format=LOG_FORMAT)


__all__ = ["AppConfig", "configure_logging", "load_config"]
