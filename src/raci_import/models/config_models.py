from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the RACI import tool.

These are produced by config.loader.load_config() after the YAML file has
passed JSON schema validation.
"""

DEFAULT_EXPORT_DIRECTORY = "./logs"
DEFAULT_PROJECT_CLIENT = "Internal"


@dataclass(frozen=True)
class DatabaseConfig:
    """Database connection configuration.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    export_directory: str = DEFAULT_EXPORT_DIRECTORY  # where error CSVs are written
    auto_accept_creation_warnings: bool = True  # employee import only
    default_project_client: str = DEFAULT_PROJECT_CLIENT
    reference_file: str | None = None  # YAML snapshot for offline runs
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
