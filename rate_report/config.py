"""Configuration for the rate report.

Two sources:
- Connection settings come from the environment (DB_HOST, DB_USER, DB_PASS,
  DB_NAME, DB_PORT, RATES_DB_PATH). A .env file in the working directory is
  loaded first if present.
- Report layout comes from a YAML file (config/report.yaml by default):
  client id, output path, category orderings and column widths.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from rate_report.errors import ConfigError
from rate_report.export import DEFAULT_OUTPUT_PATH
from rate_report.ordering import LOCALE_ORDERING, SPEED_ORDERING
from rate_report.render import WEIGHT_COLUMN_WIDTH, ZONE_COLUMN_WIDTH

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/report.yaml")
DEFAULT_CLIENT_ID = 1240
DEFAULT_DB_PORT = 5432


@dataclass
class ConnectionSettings:
    """Where the rates table lives.

    When db_path is set the rates are read from a local SQLite file, otherwise
    from the PostgreSQL server described by the remaining fields.
    """
    host: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database: Optional[str] = None
    port: int = DEFAULT_DB_PORT
    db_path: Optional[Path] = None


@dataclass
class ReportLayout:
    client_id: int = DEFAULT_CLIENT_ID
    output_path: Path = DEFAULT_OUTPUT_PATH
    locale_ordering: list[str] = field(default_factory=lambda: list(LOCALE_ORDERING))
    speed_ordering: list[str] = field(default_factory=lambda: list(SPEED_ORDERING))
    weight_column_width: int = WEIGHT_COLUMN_WIDTH
    zone_column_width: int = ZONE_COLUMN_WIDTH


@dataclass
class Settings:
    connection: ConnectionSettings
    layout: ReportLayout


def _as_int(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def load_connection_settings(env_file: Optional[Path] = None) -> ConnectionSettings:
    """Read connection settings from the environment.

    Args:
        env_file: Optional .env file to load. Defaults to ./.env if it exists.
            Variables already set in the environment are not overridden.
    """
    load_dotenv(env_file)

    port = os.environ.get("DB_PORT")
    db_path = os.environ.get("RATES_DB_PATH")
    return ConnectionSettings(
        host=os.environ.get("DB_HOST"),
        user=os.environ.get("DB_USER"),
        password=os.environ.get("DB_PASS"),
        database=os.environ.get("DB_NAME"),
        port=_as_int(port, "DB_PORT") if port else DEFAULT_DB_PORT,
        db_path=Path(db_path) if db_path else None,
    )


def load_layout(config_path: Optional[Path] = None) -> ReportLayout:
    """Load the report layout from YAML.

    A missing default file falls back to built-in defaults; a missing file that
    was asked for explicitly is an error. Keys absent from the file keep their
    defaults.

    Raises:
        ConfigError: If the file is missing, not a mapping, or holds bad values.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.debug(f"No layout file at {config_path}, using defaults")
            return ReportLayout()
    elif not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    layout = ReportLayout()
    if "client_id" in data:
        layout.client_id = _as_int(data["client_id"], "client_id")
    if data.get("output_path"):
        layout.output_path = Path(data["output_path"])

    for key in ("locale_ordering", "speed_ordering"):
        if key in data:
            values = data[key]
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ConfigError(f"{key} must be a list of strings")
            setattr(layout, key, [v.lower() for v in values])

    widths = data.get("column_widths") or {}
    if not isinstance(widths, dict):
        raise ConfigError("column_widths must be a mapping")
    if "weight" in widths:
        layout.weight_column_width = _as_int(widths["weight"], "column_widths.weight")
    if "zone" in widths:
        layout.zone_column_width = _as_int(widths["zone"], "column_widths.zone")

    return layout


def load_settings(
    config_path: Optional[Path] = None,
    env_file: Optional[Path] = None,
) -> Settings:
    """Load connection settings and report layout once at startup."""
    return Settings(
        connection=load_connection_settings(env_file),
        layout=load_layout(config_path),
    )
