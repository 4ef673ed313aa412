"""Struct tag generation for tables-cli.

Each tagger turns a column into one tag; the generated field carries the
tags of all effective taggers.
"""

from typing import List

from ..config import Settings
from .base import Tagger
from .tags import DbTag, StblTag, SQLTag


def effective_taggers(settings: Settings) -> List[Tagger]:
    """Select the taggers to run according to the tag settings.

    The *_only switches replace every other tag, sql last.
    """
    taggers: List[Tagger] = []

    if not settings.tags_no_db:
        taggers.append(DbTag())

    if settings.tags_structable:
        taggers.append(StblTag())

    if settings.tags_sql:
        taggers.append(SQLTag())

    if settings.tags_structable_only:
        taggers = [StblTag()]

    if settings.tags_sql_only:
        taggers = [SQLTag()]

    return taggers


__all__ = [
    "Tagger",
    "DbTag",
    "StblTag",
    "SQLTag",
    "effective_taggers",
]
