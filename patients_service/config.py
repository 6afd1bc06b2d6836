"""Service configuration loaded from a YAML file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Mapping

import yaml

ENV_LOCAL = "local"
ENV_PROD = "prod"

PASSWORD = "password"


class ConfigError(Exception):
    """Raised when the configuration cannot be located or read."""


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"cannot read config: section {key!r} must be a mapping")
    return value


def _as_int(value: Any, key: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"cannot read config: {key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"cannot read config: {key} must be an integer") from exc


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


@dataclass
class ServerConfig:
    host: str = "localhost"
    port: int = 8080

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> "ServerConfig":
        cfg = cls()
        if data.get("host") is not None:
            cfg.host = _as_str(data["host"])
        if data.get("port") is not None:
            cfg.port = _as_int(data["port"], "server.port")
        return cfg


@dataclass
class DbConfig:
    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str = PASSWORD
    db_name: str = "patients_db"
    ssl_mode: str = "disable"

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> "DbConfig":
        cfg = cls()
        for key in ("host", "user", "password", "db_name", "ssl_mode"):
            if data.get(key) is not None:
                setattr(cfg, key, _as_str(data[key]))
        if data.get("port") is not None:
            cfg.port = _as_int(data["port"], "db.port")
        return cfg


@dataclass
class SqlConfig:
    path: str

    @classmethod
    def _from_mapping(cls, data: Mapping[str, Any]) -> "SqlConfig":
        path = data.get("path")
        if path is None or path == "":
            raise ConfigError("cannot read config: field sql.path is required but the value is not provided")
        return cls(path=_as_str(path))


@dataclass
class Config:
    sql: SqlConfig
    env: str = ENV_LOCAL
    server: ServerConfig = field(default_factory=ServerConfig)
    db: DbConfig = field(default_factory=DbConfig)


def must_load(environ: Mapping[str, str] | None = None) -> Config:
    """Load the configuration named by the CONFIG_PATH variable."""
    env = os.environ if environ is None else environ
    config_path = env.get("CONFIG_PATH", "")
    if not config_path:
        raise ConfigError("config path is empty")
    return must_load_path(config_path)


def must_load_path(config_path: str | os.PathLike[str]) -> Config:
    """Load the configuration from a YAML file."""
    path = os.fspath(config_path)
    if not os.path.exists(path):
        raise ConfigError(f"config file does not exist: {path}")
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read config: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigError("cannot read config: top level must be a mapping")

    env = data.get("env")
    return Config(
        env=_as_str(env) if env is not None else ENV_LOCAL,
        server=ServerConfig._from_mapping(_section(data, "server")),
        db=DbConfig._from_mapping(_section(data, "db")),
        sql=SqlConfig._from_mapping(_section(data, "sql")),
    )