"""Configuration management for tables-cli."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional

from .errors import ConfigurationError


# Supported database types mapped to their default ports
DB_DEFAULT_PORTS = {
    "pg": 5432,
    "mysql": 3306,
}

# c: CamelCase, o: original naming
SUPPORTED_OUTPUT_FORMATS = ("c", "o")


def _find_env_file(start: Optional[Path] = None) -> Optional[str]:
    """Locate the .env file holding TABLES_* defaults.

    The nearest .env in the working directory or one of its parents wins,
    then $XDG_CONFIG_HOME/tables-cli/.env (~/.config when unset).
    """
    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        env_file = candidate / ".env"
        if env_file.is_file():
            return str(env_file)

    config_home = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    user_env = config_home / "tables-cli" / ".env"
    if user_env.is_file():
        return str(user_env)

    return None


class Settings(BaseSettings):
    """Settings for one generation run.

    Values come from command line options, falling back to TABLES_*
    environment variables and the .env file. Call verify() before handing
    the settings to a database or tagger.
    """

    verbose: bool = Field(
        default=False,
        description="Print diagnostic details for failures"
    )

    # Database connection
    db_type: str = Field(
        default="pg",
        description="Type of database (pg, mysql)"
    )
    user: str = Field(
        default="postgres",
        description="Database user"
    )
    password: str = Field(
        default="",
        description="Database password"
    )
    db_name: str = Field(
        default="postgres",
        description="Database name"
    )
    db_schema: str = Field(
        default="public",
        description="Schema to introspect"
    )
    host: str = Field(
        default="127.0.0.1",
        description="Database host"
    )
    port: Optional[int] = Field(
        default=None,
        description="Database port (defaults to the standard port of the database type)"
    )

    # Output
    output_file_path: str = Field(
        default=".",
        description="Directory the generated files are written to"
    )
    output_format: str = Field(
        default="c",
        description="Struct and field names: c (CamelCase) or o (original)"
    )
    output_format_tag: str = Field(
        default="c",
        description="Names in tags: c (column name as-is) or o (snake_case)"
    )
    package_name: str = Field(
        default="dto",
        description="Package name of the generated files"
    )
    prefix: str = Field(
        default="",
        description="Prefix for struct names"
    )
    suffix: str = Field(
        default="",
        description="Suffix for struct names"
    )

    # Tags
    tags_no_db: bool = Field(
        default=False,
        description="Do not create db-tags"
    )
    tags_structable: bool = Field(
        default=False,
        description="Generate Masterminds/structable stbl-tags"
    )
    tags_structable_only: bool = Field(
        default=False,
        description="Generate Masterminds/structable stbl-tags only"
    )
    is_structable_recorder: bool = Field(
        default=False,
        description="Embed structable.Recorder in the generated structs"
    )
    tags_sql: bool = Field(
        default=False,
        description="Generate experimental sql-tags"
    )
    tags_sql_only: bool = Field(
        default=False,
        description="Generate experimental sql-tags only"
    )

    class Config:
        env_prefix = "TABLES_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"

    def verify(self) -> "Settings":
        """Validate the settings and fill in derived values.

        Raises:
            ConfigurationError: If a value is unsupported or the output
                path is unusable.

        Returns:
            The settings themselves, with port and output path resolved.
        """
        if self.db_type not in DB_DEFAULT_PORTS:
            raise ConfigurationError(
                f"type of database {self.db_type!r} not supported! Supported: {supported_db_types()}",
                details={"db_type": self.db_type},
            )

        if self.output_format not in SUPPORTED_OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output format {self.output_format!r} not supported",
                details={"output_format": self.output_format},
            )

        if self.output_format_tag not in SUPPORTED_OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output format of tags {self.output_format_tag!r} not supported",
                details={"output_format_tag": self.output_format_tag},
            )

        self._verify_output_path()
        self.output_file_path = str(Path(self.output_file_path).resolve())

        self.port = self.effective_port()

        if not self.package_name:
            raise ConfigurationError("name of package can not be empty")

        return self

    def effective_port(self) -> Optional[int]:
        """Configured port, or the default port of the database type."""
        if self.port is not None:
            return self.port
        return DB_DEFAULT_PORTS.get(self.db_type)

    def _verify_output_path(self):
        path = Path(self.output_file_path)

        if not path.exists():
            raise ConfigurationError(
                f"output file path {self.output_file_path!r} does not exist",
                details={"output_file_path": self.output_file_path},
            )

        if not path.is_dir():
            raise ConfigurationError(
                f"output file path {self.output_file_path!r} is not a directory",
                details={"output_file_path": self.output_file_path},
            )


def supported_db_types() -> str:
    """Names of the supported database types, e.g. for help texts."""
    return ", ".join(sorted(DB_DEFAULT_PORTS))
