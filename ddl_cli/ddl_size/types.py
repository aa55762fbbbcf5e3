"""Dataclasses describing DDL files and the columns parsed from them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class FileIdentity:
    """Database, schema and table encoded in a DDL file name."""

    filename: str
    database: str
    schema: str
    table_name: str
    schema_resolved: bool


@dataclass(frozen=True, slots=True)
class ColumnDef:
    """One column definition line of a ``CREATE TABLE`` body."""

    name: str
    data_type: str
    size: int = 0


class ColumnRejection(str, Enum):
    """Why a line was not recognised as a column definition."""

    BLANK = "blank line"
    NO_LEADING_BRACKET = "line does not start with '['"
    UNTERMINATED_NAME = "column name bracket is not closed"
    MISSING_TYPE = "no data type bracket after the column name"
    UNTERMINATED_TYPE = "data type bracket is not closed"
    UNTERMINATED_SIZE = "size specifier parenthesis is not closed"


@dataclass(frozen=True, slots=True)
class ColumnLineResult:
    """Outcome of parsing a single DDL line.

    Exactly one of ``column`` and ``rejection`` is set. ``size_warning`` is
    only populated for recognised columns whose size could not be read.
    """

    column: ColumnDef | None = None
    rejection: ColumnRejection | None = None
    size_warning: str | None = None

    @property
    def is_column(self) -> bool:
        return self.column is not None


class ScanState(Enum):
    """States of the DDL body scanner."""

    SEEKING_STATEMENT = "seeking"
    COLLECTING_COLUMNS = "collecting"
