"""Public exports for the ddl-size package."""

from .columns import parse_column_line
from .filename import DEFAULT_SCHEMAS, decompose
from .record import TableRecord, summarize
from .scanner import read_lines, scan
from .sizing import bytes_for
from .types import ColumnDef, ColumnLineResult, ColumnRejection, FileIdentity

__all__ = [
    "DEFAULT_SCHEMAS",
    "ColumnDef",
    "ColumnLineResult",
    "ColumnRejection",
    "FileIdentity",
    "TableRecord",
    "bytes_for",
    "decompose",
    "parse_column_line",
    "read_lines",
    "scan",
    "summarize",
]
