"""Go code generation for tables-cli."""

from .types import GoType, map_column_type
from .generator import GoStructGenerator

__all__ = [
    "GoType",
    "map_column_type",
    "GoStructGenerator",
]
