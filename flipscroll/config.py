"""Configuration loading for flipscroll."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

from .core.paging import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_PAGER_LENGTH, Limit, coerce_limit
from .server.ui.layout import container_attribute

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    import tomli as tomllib  # type: ignore


class ConfigError(ValueError):
    """Raised when a configuration file contains invalid values."""


@dataclass(slots=True)
class TableConfig:
    """Defaults for a table controller."""

    container_selector: str = "#flip-scroll"
    action: str = ""
    page: int = DEFAULT_PAGE
    limit: Limit = DEFAULT_LIMIT
    pager_length: int = DEFAULT_PAGER_LENGTH
    data_key: str | None = None


@dataclass(slots=True)
class TransportConfig:
    """HTTP client settings for fetching ``<action>.json`` payloads."""

    base_url: str = "https://localhost"
    timeout_seconds: float = 60.0
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ServerConfig:
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    title: str = "flipscroll"


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(slots=True)
class DatasetConfig:
    """A dataset served as ``/<action>.json``.

    Exactly one of ``sql`` (a DuckDB query) or ``csv`` (a file path) is set.
    """

    action: str
    sql: str | None = None
    csv: Path | None = None
    data_key: str | None = None
    labels: Mapping[str, str] = field(default_factory=dict)

    @property
    def resolved_data_key(self) -> str:
        return self.data_key or self.action.rstrip("/").rsplit("/", 1)[-1]


@dataclass(slots=True)
class Config:
    """Top-level configuration container."""

    table: TableConfig = field(default_factory=TableConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    datasets: dict[str, DatasetConfig] = field(default_factory=dict)


def _load_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        try:
            return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc


def load_config(path: str | Path | None = None) -> Config:
    """Load configuration from ``path`` if provided, otherwise defaults.

    Parameters
    ----------
    path:
        Path to a ``config.toml`` file. When ``None`` or missing the default
        configuration is used.
    """

    cfg = Config()
    if path is None:
        return cfg

    config_path = Path(path)
    data = _load_toml(config_path)
    table_data = data.get("table")
    if isinstance(table_data, Mapping):
        cfg.table = _parse_table(table_data, base=cfg.table)
    transport_data = data.get("transport")
    if isinstance(transport_data, Mapping):
        cfg.transport = _parse_transport(transport_data, base=cfg.transport)
    server_data = data.get("server")
    if isinstance(server_data, Mapping):
        cfg.server = _parse_server(server_data, base=cfg.server)
    logging_data = data.get("logging")
    if isinstance(logging_data, Mapping):
        cfg.logging = _parse_logging(logging_data, base=cfg.logging)
    datasets_data = data.get("datasets")
    if datasets_data is not None:
        cfg.datasets = _parse_datasets(datasets_data, root=config_path.parent)
    return cfg


def _parse_table(data: Mapping[str, Any], base: TableConfig) -> TableConfig:
    overrides: MutableMapping[str, Any] = {}
    if "container_selector" in data:
        selector = str(data["container_selector"]).strip()
        if not selector:
            raise ConfigError("table.container_selector must not be empty")
        try:
            container_attribute(selector)
        except ValueError as exc:
            raise ConfigError(f"table.container_selector: {exc}") from exc
        overrides["container_selector"] = selector
    if "action" in data:
        overrides["action"] = str(data["action"])
    if "page" in data:
        overrides["page"] = _positive_int(data["page"], "table.page")
    if "limit" in data:
        try:
            overrides["limit"] = coerce_limit(data["limit"])
        except ValueError as exc:
            raise ConfigError(f"table.limit: {exc}") from exc
    if "pager_length" in data:
        overrides["pager_length"] = _positive_int(data["pager_length"], "table.pager_length")
    if "data_key" in data:
        overrides["data_key"] = str(data["data_key"]) if data["data_key"] else None
    if not overrides:
        return base
    return replace(base, **overrides)


def _parse_transport(data: Mapping[str, Any], base: TransportConfig) -> TransportConfig:
    overrides: MutableMapping[str, Any] = {}
    if "base_url" in data:
        base_url = str(data["base_url"]).strip()
        if not base_url.startswith(("http://", "https://")):
            raise ConfigError("transport.base_url must start with http:// or https://")
        overrides["base_url"] = base_url
    if "timeout_seconds" in data:
        try:
            timeout = float(data["timeout_seconds"])
        except (TypeError, ValueError) as exc:
            raise ConfigError("transport.timeout_seconds must be a number") from exc
        if timeout <= 0:
            raise ConfigError("transport.timeout_seconds must be greater than zero")
        overrides["timeout_seconds"] = timeout
    if "headers" in data:
        headers = data["headers"]
        if not isinstance(headers, Mapping):
            raise ConfigError("transport.headers must be a table of strings")
        overrides["headers"] = {str(key): str(value) for key, value in headers.items()}
    if not overrides:
        return base
    return replace(base, **overrides)


def _parse_server(data: Mapping[str, Any], base: ServerConfig) -> ServerConfig:
    overrides: MutableMapping[str, Any] = {}
    if "host" in data:
        overrides["host"] = str(data["host"])
    if "port" in data:
        port = _positive_int(data["port"], "server.port")
        if port > 65535:
            raise ConfigError("server.port must be between 1 and 65535")
        overrides["port"] = port
    if "title" in data:
        overrides["title"] = str(data["title"])
    if not overrides:
        return base
    return replace(base, **overrides)


def _parse_logging(data: Mapping[str, Any], base: LoggingConfig) -> LoggingConfig:
    if "level" not in data:
        return base
    level = str(data["level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"logging.level {data['level']!r} is not a known level")
    return replace(base, level=level)


def _parse_datasets(data: object, *, root: Path) -> dict[str, DatasetConfig]:
    if not isinstance(data, Mapping):
        raise ConfigError("datasets must be a table of dataset definitions")
    datasets: dict[str, DatasetConfig] = {}
    for raw_action, raw_spec in data.items():
        action = str(raw_action).strip("/")
        context = f"datasets.{raw_action}"
        if not action:
            raise ConfigError(f"{context} must name an action")
        if action in datasets:
            raise ConfigError(f"{context} is defined more than once")
        if not isinstance(raw_spec, Mapping):
            raise ConfigError(f"{context} must be a table")
        sql = raw_spec.get("sql")
        csv_path = raw_spec.get("csv")
        if (sql is None) == (csv_path is None):
            raise ConfigError(f"{context} must define exactly one of 'sql' or 'csv'")
        labels = raw_spec.get("labels", {})
        if not isinstance(labels, Mapping):
            raise ConfigError(f"{context}.labels must be a table of strings")
        csv_value: Path | None = None
        if csv_path is not None:
            csv_value = Path(str(csv_path))
            if not csv_value.is_absolute():
                csv_value = root / csv_value
        datasets[action] = DatasetConfig(
            action=action,
            sql=str(sql) if sql is not None else None,
            csv=csv_value,
            data_key=str(raw_spec["data_key"]) if raw_spec.get("data_key") else None,
            labels={str(key): str(value) for key, value in labels.items()},
        )
    return datasets


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{name} must be an integer") from exc
    if number < 1:
        raise ConfigError(f"{name} must be >= 1")
    return number


__all__ = [
    "Config",
    "ConfigError",
    "DatasetConfig",
    "LoggingConfig",
    "ServerConfig",
    "TableConfig",
    "TransportConfig",
    "load_config",
]
