"""Settings read from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .client import DEFAULT_BASE_URL

DEFAULT_TIMEOUT = 30.0
DEFAULT_STORAGE_PATH = "~/.ams-mcp/storage.json"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    storage_path: Path = Path(DEFAULT_STORAGE_PATH).expanduser()
    log_level: str = DEFAULT_LOG_LEVEL


def load_env() -> None:
    """Load .env from the project directory, falling back to a cwd search."""
    here = Path(__file__).resolve().parent
    for candidate in [here / ".env", here.parent / ".env", here.parent.parent / ".env"]:
        if candidate.exists():
            load_dotenv(candidate)
            return
    load_dotenv()


def load_settings() -> Settings:
    """Build settings from ``AMS_*`` environment variables.

    Raises:
        ValueError: If ``AMS_TIMEOUT`` is not a positive number
    """
    timeout_str = os.getenv("AMS_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(timeout_str)
    except ValueError:
        raise ValueError(f"AMS_TIMEOUT must be a number, got {timeout_str!r}")
    if timeout <= 0:
        raise ValueError(f"AMS_TIMEOUT must be positive, got {timeout_str!r}")

    return Settings(
        base_url=os.getenv("AMS_BASE_URL") or DEFAULT_BASE_URL,
        timeout=timeout,
        storage_path=Path(os.getenv("AMS_STORAGE_PATH") or DEFAULT_STORAGE_PATH).expanduser(),
        log_level=(os.getenv("AMS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
