from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_EXPORT_DIRECTORY,
    DEFAULT_PROJECT_CLIENT,
    DatabaseConfig,
    ImportConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (default config/import.yml)
- Validate against the JSON schema shipped next to this module
- Apply defaults for optional keys

The same YAML + schema pattern is used for the offline reference snapshot
file (see db.reference.load_reference_file).
"""

SCHEMA_DIR = Path(__file__).parent
SCHEMA_PATH = SCHEMA_DIR / "config_schema.json"
REFERENCE_SCHEMA_PATH = SCHEMA_DIR / "reference_schema.json"

DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def validate_against_schema(data: Any, schema_path: Path, what: str = "config") -> None:
    """Validate parsed YAML data against a JSON schema file.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            data fails validation (missing keys, wrong types, extra keys).
    """
    if not schema_path.exists():
        raise ConfigError(f"{what} schema not found: {schema_path}")

    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"{what} validation failed: {e.message}") from e


def load_yaml(path: Path, what: str = "config") -> Any:
    if not path.exists():
        raise ConfigError(f"{what} file not found: {path}")
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    data = load_yaml(path)
    validate_against_schema(data, SCHEMA_PATH)

    db_raw = data.get("database") or {}
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    return ImportConfig(
        export_directory=data.get("export_directory", DEFAULT_EXPORT_DIRECTORY),
        auto_accept_creation_warnings=data.get("auto_accept_creation_warnings", True),
        default_project_client=data.get("default_project_client", DEFAULT_PROJECT_CLIENT),
        reference_file=data.get("reference_file"),
        database=db,
    )
