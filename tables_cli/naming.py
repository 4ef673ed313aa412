"""Name conversions for struct, field and tag names."""

import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-.]+")


def snake_case(name: str) -> str:
    """Convert a name to snake_case.

    Examples:
        UserID -> user_id
        createdAt -> created_at
        HTTPServer -> http_server
    """
    name = _SEPARATORS.sub("_", name.strip())
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return re.sub(r"_+", "_", name).strip("_").lower()


def camel_case(name: str) -> str:
    """Convert a name to CamelCase (exported Go identifier).

    Splits on underscores and other separators and capitalizes the first
    letter of each part, keeping the rest of the part as it is.
    """
    parts = re.split(r"[_\s\-.]+", name)
    return "".join(part[:1].upper() + part[1:] for part in parts if part)
