"""Abstract base class for struct tag generation."""

from abc import ABC, abstractmethod

from ..config import Settings
from ..database import Column, Database
from ..naming import snake_case


class Tagger(ABC):
    """Generates one struct tag for a column.

    Implementations are stateless; the tag depends only on the database
    (for type and constraint classification), the column and the settings.
    """

    @abstractmethod
    def generate_tag(self, database: Database, column: Column, settings: Settings) -> str:
        """Generate the tag, e.g. db:"id"."""
        pass

    @staticmethod
    def tag_name(column: Column, settings: Settings) -> str:
        """Column name as written into the tag."""
        if settings.output_format_tag == "o":
            return snake_case(column.name)
        return column.name
