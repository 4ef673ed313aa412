"""Database data models for schema introspection."""

from typing import Optional, List, Sequence, Any
from dataclasses import dataclass, field


@dataclass
class Column:
    """Represents one column of a table as described by the catalog.

    Optional catalog values are None when the catalog reports SQL NULL,
    never an empty string or zero.
    """
    ordinal_position: int
    name: str
    data_type: str
    default_value: Optional[str] = None
    is_nullable: bool = True
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    constraint_name: Optional[str] = None
    constraint_type: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_catalog_row(cls, row: Sequence[Any]) -> "Column":
        """Build a column from a row of the column metadata query.

        The row holds, in order: ordinal position, column name, data type,
        default, is_nullable ("YES"/"NO"), character maximum length,
        numeric precision, constraint name and constraint type.
        """
        (
            ordinal_position,
            name,
            data_type,
            default_value,
            is_nullable,
            character_maximum_length,
            numeric_precision,
            constraint_name,
            constraint_type,
        ) = row

        return cls(
            ordinal_position=int(ordinal_position),
            name=name,
            data_type=data_type,
            default_value=default_value,
            is_nullable=str(is_nullable).upper() == "YES",
            character_maximum_length=_optional_int(character_maximum_length),
            numeric_precision=_optional_int(numeric_precision),
            constraint_name=constraint_name,
            constraint_type=constraint_type,
        )


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


@dataclass
class Table:
    """Represents a database table."""
    name: str
    columns: List[Column] = field(default_factory=list)
