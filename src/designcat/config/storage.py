"""Where catalog data lives and how much of it may be stored."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_int, optional_env_var

APP_DIR_NAME: Final[str] = "designcat"
DEFAULT_DB_FILENAME: Final[str] = "designcat.db"
DEFAULT_NAMESPACE: Final[str] = "designcat"
DEFAULT_CAPACITY_BYTES: Final[int] = 5 * 1024 * 1024


def _platform_data_root() -> Path:
    if os.name == "nt":
        local = os.getenv("LOCALAPPDATA")
        return Path(local) if local else Path.home() / "AppData" / "Local"
    xdg = os.getenv("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Location of the SQLite store plus the key namespace and byte budget."""

    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    namespace: str = DEFAULT_NAMESPACE
    capacity_bytes: int = DEFAULT_CAPACITY_BYTES

    @classmethod
    def from_environment(cls) -> StorageConfig:
        data_dir = optional_env_var("DESIGNCAT_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else _platform_data_root() / APP_DIR_NAME,
            namespace=optional_env_var("DESIGNCAT_NAMESPACE") or DEFAULT_NAMESPACE,
            capacity_bytes=env_int("DESIGNCAT_STORAGE_CAPACITY", DEFAULT_CAPACITY_BYTES),
        )

    def database_path(self, *, ensure: bool = True) -> Path:
        directory = self.data_dir.expanduser().resolve()
        if ensure:
            directory.mkdir(parents=True, exist_ok=True)
        return directory / self.database_filename

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def get_storage_config() -> StorageConfig:
    return StorageConfig.from_environment()


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    """``DATABASE_URI`` wins; otherwise the SQLite file under the data dir."""

    uri = optional_env_var("DATABASE_URI")
    if uri is not None:
        return DatabaseConfig(uri=uri)
    return DatabaseConfig(uri=(storage or get_storage_config()).database_uri())
