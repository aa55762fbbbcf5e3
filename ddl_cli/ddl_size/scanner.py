"""Line scanner locating the target ``CREATE TABLE`` statement in a DDL file."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from .columns import parse_column_line
from .record import TableRecord, summarize
from .types import ColumnDef, FileIdentity, ScanState

_log = logging.getLogger(__name__)

_CREATE_RE = re.compile(r"\bCREATE\b", re.IGNORECASE)
_VIEW_RE = re.compile(r"\bVIEW\b", re.IGNORECASE)


def read_lines(path: str | Path, *, encoding: str = "utf-8") -> Iterator[str]:
    """Lazily yield the lines of ``path`` without line terminators."""

    with Path(path).open("r", encoding=encoding, newline=None) as handle:
        for line in handle:
            yield line.rstrip("\r\n")


def table_statement_pattern(schema: str, table_name: str) -> re.Pattern[str]:
    """Return the pattern matching ``CREATE TABLE ... [schema].[table] ... (``."""

    return re.compile(
        r"^\s*CREATE\s+TABLE\b.*\["
        + re.escape(schema)
        + r"\]\.\["
        + re.escape(table_name)
        + r"\].*\(",
        re.IGNORECASE,
    )


def scan(identity: FileIdentity, lines: Iterable[str]) -> TableRecord:
    """Collect the columns of the table addressed by ``identity`` from ``lines``.

    The line sequence is consumed once. Views are flagged and never scanned
    for columns. When the schema was not resolved from the file name the body
    is not read at all.
    """

    if not identity.schema_resolved:
        return TableRecord(
            identity=identity,
            columns=(),
            record_size_bytes=0,
            warnings=(
                f"Unable to parse file [{identity.filename}]. Schema was not found "
                "and therefore the CREATE TABLE statement cannot be validated.",
            ),
        )

    statement = table_statement_pattern(identity.schema, identity.table_name)
    state = ScanState.SEEKING_STATEMENT
    columns: list[ColumnDef] = []
    warnings: list[str] = []
    is_view = False

    for line in lines:
        if state is ScanState.COLLECTING_COLUMNS:
            result = parse_column_line(line)
            if result.column is None:
                _log.debug("Column block of %s ended: %s", identity.filename, result.rejection)
                state = ScanState.SEEKING_STATEMENT
                continue
            if result.size_warning:
                warnings.append(result.size_warning)
            _log.debug(
                "Found column [%s] type [%s] size [%s]",
                result.column.name,
                result.column.data_type,
                result.column.size,
            )
            columns.append(result.column)
            continue

        if not _CREATE_RE.search(line):
            continue
        if _VIEW_RE.search(line):
            is_view = True
        elif statement.match(line):
            state = ScanState.COLLECTING_COLUMNS

    return summarize(identity, columns, is_view=is_view, warnings=warnings)
