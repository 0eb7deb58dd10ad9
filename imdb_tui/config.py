# config.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


class ConfigError(Exception):
    """Raised when required configuration is missing."""


@dataclass
class Config:
    """Holds all application configuration."""
    API_BASE_URL: str = "https://www.omdbapi.com/"
    API_KEY_ENV: str = "OMDB_API_KEY"
    LOG_FILE: Path = Path.home() / ".cache" / "imdb-tui" / "imdb-tui.log"
    LOG_LEVEL: str = "INFO"
    LOG_ROTATION: str = "1 MB"
    LOG_RETENTION: int = 3


def load_api_key(config: Config, environ: Mapping[str, str] = os.environ) -> str:
    """Returns the provider key from the environment or raises ConfigError."""
    api_key = environ.get(config.API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigError(f"{config.API_KEY_ENV} environment variable is not set.")
    return api_key
