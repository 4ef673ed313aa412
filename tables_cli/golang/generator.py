"""Go struct generator for introspected tables."""

import logging
from pathlib import Path
from typing import List

from ..config import Settings
from ..database import Database, Table
from ..naming import camel_case, snake_case
from .types import map_column_type

logger = logging.getLogger(__name__)

STRUCTABLE_PACKAGE = "github.com/Masterminds/structable"


class GoStructGenerator:
    """Generates one Go source file per table.

    Columns must already carry their tags; the generator only lays out
    the struct.
    """

    def __init__(self, settings: Settings, database: Database):
        self.settings = settings
        self.database = database

    def struct_name(self, table: Table) -> str:
        """Struct name with the configured prefix and suffix."""
        name = camel_case(table.name) if self.settings.output_format == "c" else table.name
        return f"{self.settings.prefix}{name}{self.settings.suffix}"

    def field_name(self, column_name: str) -> str:
        if self.settings.output_format == "c":
            return camel_case(column_name)
        return column_name

    def file_name(self, table: Table) -> str:
        return f"{snake_case(self.struct_name(table))}.go"

    def generate(self, table: Table) -> str:
        """Generate the Go source of a table's struct."""
        imports = set()
        fields = []

        for column in table.columns:
            go_type = map_column_type(self.database, column)
            if go_type.import_path:
                imports.add(go_type.import_path)
            tags = " ".join(column.tags)
            fields.append((self.field_name(column.name), go_type.name, f"`{tags}`" if tags else ""))

        if self.settings.is_structable_recorder:
            imports.add(STRUCTABLE_PACKAGE)

        lines = [f"package {self.settings.package_name}", ""]

        if len(imports) == 1:
            lines.append(f'import "{next(iter(imports))}"')
            lines.append("")
        elif imports:
            lines.append("import (")
            for path in sorted(imports):
                lines.append(f'\t"{path}"')
            lines.append(")")
            lines.append("")

        lines.append(f"type {self.struct_name(table)} struct {{")

        if self.settings.is_structable_recorder:
            lines.append("\tstructable.Recorder")
            if fields:
                lines.append("")

        # Align names and types like gofmt does
        name_width = max((len(name) for name, _, _ in fields), default=0)
        type_width = max((len(type_name) for _, type_name, _ in fields), default=0)
        for name, type_name, tags in fields:
            if tags:
                lines.append(f"\t{name.ljust(name_width)} {type_name.ljust(type_width)} {tags}")
            else:
                lines.append(f"\t{name.ljust(name_width)} {type_name}".rstrip())

        lines.append("}")
        return "\n".join(lines) + "\n"

    def write(self, tables: List[Table]) -> List[Path]:
        """Write one file per table into the output directory.

        Returns:
            Paths of the written files
        """
        output_dir = Path(self.settings.output_file_path)
        written = []

        for table in tables:
            path = output_dir / self.file_name(table)
            path.write_text(self.generate(table), encoding="utf-8")
            logger.info("Wrote %s", path)
            written.append(path)

        return written
