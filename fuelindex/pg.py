"""Embedded PostgreSQL settings and their on-disk configuration."""

from __future__ import annotations

import enum
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PLAIN = "plain"
MD5 = "md5"
SCRAM_SHA256 = "scram-sha-256"

FUEL_HOME_DIR = ".fuel"
INDEXER_CONFIG_DIR = "indexer"


class AuthMethod(enum.Enum):
    PLAIN = PLAIN
    MD5 = MD5
    SCRAM_SHA256 = SCRAM_SHA256


def into_auth_method(s: str) -> AuthMethod:
    try:
        return AuthMethod(s)
    except ValueError:
        raise ValueError(f"unsupported authentication method: {s!r}") from None


class PostgresVersion(enum.Enum):
    V15 = "v15"
    V14 = "v14"
    V13 = "v13"
    V12 = "v12"
    V11 = "v11"
    V10 = "v10"
    V9 = "v9"

    def into_semver(self) -> str:
        return _SEMVER[self]

    @classmethod
    def from_str(cls, s: str) -> PostgresVersion:
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"unsupported PostgreSQL version: {s!r}") from None

    def __str__(self) -> str:
        return self.value


_SEMVER = {
    PostgresVersion.V15: "15.1.0",
    PostgresVersion.V14: "14.6.0",
    PostgresVersion.V13: "13.9.0",
    PostgresVersion.V12: "12.13.0",
    PostgresVersion.V11: "11.18.0",
    PostgresVersion.V10: "10.23.0",
    PostgresVersion.V9: "9.6.24",
}


def home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError as e:
        raise RuntimeError("Failed to detect $HOME directory.") from e


def default_indexer_dir() -> Path:
    return home_dir() / FUEL_HOME_DIR / INDEXER_CONFIG_DIR


def db_dir_or_default(d: str | os.PathLike | None, name: str) -> Path:
    return Path(d) if d is not None else default_indexer_dir() / name


def db_config_file_name(name: str) -> str:
    return f"{name}-db.json"


def _optional_path(value: Any) -> Path | None:
    return None if value is None else Path(value)


@dataclass
class PgEmbedConfig:
    """Settings of an embedded PostgreSQL database."""

    name: str
    user: str
    password: str
    port: int
    database_dir: Path | None = None
    auth_method: str = PLAIN
    persistent: bool = False
    timeout: int | None = None
    migration_dir: Path | None = None
    postgres_version: PostgresVersion = PostgresVersion.V14

    @classmethod
    def from_file(cls, database_dir: str | os.PathLike | None, name: str) -> PgEmbedConfig:
        """Load the saved configuration of database ``name``."""
        directory = db_dir_or_default(database_dir, name)
        logger.info("Using database directory at %s", directory)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / db_config_file_name(name)
        if not path.is_file():
            raise FileNotFoundError(f"PgEmbedConfig file {path} does not exist.")
        return cls.from_json(path.read_text(encoding="utf-8"))

    def to_json(self) -> str:
        data = {
            "name": self.name,
            "user": self.user,
            "password": self.password,
            "port": self.port,
            "database_dir": None if self.database_dir is None else str(self.database_dir),
            "auth_method": self.auth_method,
            "persistent": self.persistent,
            "timeout": self.timeout,
            "migration_dir": None if self.migration_dir is None else str(self.migration_dir),
            "postgres_version": self.postgres_version.name,
        }
        return json.dumps(data, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> PgEmbedConfig:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("database configuration must be a JSON object")
        try:
            port = data["port"]
            if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 65535:
                raise ValueError(f"invalid port: {port!r}")
            timeout = data.get("timeout")
            if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, int)):
                raise ValueError(f"invalid timeout: {timeout!r}")
            try:
                version = PostgresVersion[data["postgres_version"]]
            except KeyError:
                raise ValueError(
                    f"unsupported PostgreSQL version: {data['postgres_version']!r}"
                ) from None
            return cls(
                name=str(data["name"]),
                user=str(data["user"]),
                password=str(data["password"]),
                port=port,
                database_dir=_optional_path(data.get("database_dir")),
                auth_method=str(data["auth_method"]),
                persistent=bool(data["persistent"]),
                timeout=timeout,
                migration_dir=_optional_path(data.get("migration_dir")),
                postgres_version=version,
            )
        except KeyError as e:
            raise ValueError(f"missing field {e.args[0]!r} in database configuration") from None

    def save(self, directory: str | os.PathLike | None) -> Path | None:
        """Write the configuration into ``directory``; nothing is written without one."""
        if directory is None:
            return None
        path = Path(directory) / db_config_file_name(self.name)
        logger.info("Writing PgEmbedConfig to %s", path)
        path.write_text(self.to_json(), encoding="utf-8")
        return path