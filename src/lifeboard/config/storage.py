"""Where lifeboard keeps its SQLite database and HTTP cache."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var

DATA_DIR_ENV: Final[str] = "LIFEBOARD_DATA_DIR"
DATABASE_URI_ENV: Final[str] = "DATABASE_URI"
DATABASE_FILENAME: Final[str] = "lifeboard.db"
HTTP_CACHE_FILENAME: Final[str] = "http_cache.db"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def data_dir(*, create: bool = True) -> Path:
    """``$LIFEBOARD_DATA_DIR``, else ``lifeboard`` under the XDG data home."""

    configured = optional_env_var(DATA_DIR_ENV)
    if configured is not None:
        path = Path(configured)
    else:
        xdg = optional_env_var("XDG_DATA_HOME")
        path = (Path(xdg) if xdg else Path.home() / ".local" / "share") / "lifeboard"
    path = path.expanduser().resolve()
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def get_database_config() -> DatabaseConfig:
    uri = optional_env_var(DATABASE_URI_ENV)
    if uri is None:
        uri = f"sqlite+pysqlite:///{data_dir() / DATABASE_FILENAME}"
    return DatabaseConfig(uri=uri)


def get_http_cache_path() -> Path:
    return data_dir() / HTTP_CACHE_FILENAME
