"""Decompose DDL file names into database, schema and table identifiers.

File names follow ``<database>_<...>_<schema>_<table>.txt``. The database part
may itself contain the delimiter, so the schema is located by walking the
delimiter-separated segments left to right until one matches the schema
whitelist.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ddl_cli.shared.exceptions import InvalidFilenameFormat

from .types import FileIdentity

_log = logging.getLogger(__name__)

DEFAULT_DELIMITER = "_"
DEFAULT_SCHEMAS: tuple[str, ...] = ("dbo", "rae", "subm")
DEFAULT_SUFFIX = ".txt"


def decompose(
    filename: str,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    schemas: Iterable[str] = DEFAULT_SCHEMAS,
    suffix: str = DEFAULT_SUFFIX,
) -> FileIdentity:
    """Split ``filename`` into a :class:`FileIdentity`.

    The first segment that case-insensitively matches a known schema wins.
    A name whose segments never match returns an identity with
    ``schema_resolved=False`` rather than raising.

    Raises:
        InvalidFilenameFormat: the delimiter or suffix is missing, no schema
            candidate segment exists, or the table name is empty.
    """

    if not delimiter or delimiter not in filename:
        raise InvalidFilenameFormat(filename, f"delimiter '{delimiter}' not found")
    if not filename.endswith(suffix):
        raise InvalidFilenameFormat(filename, f"name does not end with '{suffix}'")

    stem = filename[: len(filename) - len(suffix)] if suffix else filename
    known = {name.lower() for name in schemas}
    step = len(delimiter)

    start = stem.find(delimiter)
    if start == -1 or stem.find(delimiter, start + step) == -1:
        raise InvalidFilenameFormat(filename, "no schema segment between delimiters")

    while True:
        segment_start = start + step
        segment_end = stem.find(delimiter, segment_start)
        if segment_end == -1:
            _log.debug("No whitelisted schema segment in %s", filename)
            return FileIdentity(
                filename=filename,
                database=stem[:start],
                schema="",
                table_name="",
                schema_resolved=False,
            )
        segment = stem[segment_start:segment_end]
        if segment.lower() in known:
            table_start = segment_end + step
            # The table ends at the first suffix after the schema: A.txt.txt -> A.
            table_end = filename.find(suffix, table_start) if suffix else len(stem)
            table_name = filename[table_start:table_end]
            if not table_name:
                raise InvalidFilenameFormat(filename, "table name is empty")
            return FileIdentity(
                filename=filename,
                database=stem[:start],
                schema=segment,
                table_name=table_name,
                schema_resolved=True,
            )
        start = segment_end
