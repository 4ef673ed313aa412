"""Tag variants for the generated struct fields."""

from ..config import Settings
from ..database import Column, Database
from .base import Tagger


class DbTag(Tagger):
    """The standard "db" tag used by sqlx and database/sql mappers."""

    def generate_tag(self, database: Database, column: Column, settings: Settings) -> str:
        return f'db:"{self.tag_name(column, settings)}"'


class StblTag(Tagger):
    """The Masterminds/structable "stbl" tag.

    Marks primary key and auto increment columns so structable can build
    its insert and update statements.
    """

    def generate_tag(self, database: Database, column: Column, settings: Settings) -> str:
        tag = self.tag_name(column, settings)

        if database.is_primary_key(column):
            tag += ",PRIMARY_KEY"

        if database.is_auto_increment(column):
            tag += ",SERIAL,AUTO_INCREMENT"

        return f'stbl:"{tag}"'


class SQLTag(Tagger):
    """The experimental "sql" tag describing the column definition."""

    def generate_tag(self, database: Database, column: Column, settings: Settings) -> str:
        length = ""
        if database.is_string(column) and column.character_maximum_length is not None:
            length = f"({column.character_maximum_length})"

        tag = f"type:{column.data_type}{length};"

        if not database.is_nullable(column):
            tag += "not null;"

        # TODO size, unique and index markers
        if tag.endswith(";"):
            tag = tag[:-1]

        return f'sql:"{tag}"'
