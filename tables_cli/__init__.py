"""tables-cli - generate Go structs with tags from database schemas."""

__version__ = "0.1.0"
