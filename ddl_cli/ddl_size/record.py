"""Per-file result object and record size aggregation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ddl_cli.shared.exceptions import SizeEstimationError

from .sizing import bytes_for
from .types import ColumnDef, FileIdentity

DATE_COLUMN_NAMES = frozenset({"createdon", "editedon"})
SOFT_DELETE_COLUMN_NAMES = frozenset({"active", "soft_delete_flag", "activeflag"})


@dataclass(frozen=True, slots=True)
class TableRecord:
    """Columns and estimated record size of the table a DDL file describes."""

    identity: FileIdentity
    columns: tuple[ColumnDef, ...]
    record_size_bytes: int | None
    is_view: bool = False
    size_error: SizeEstimationError | None = None
    warnings: tuple[str, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def size_is_reliable(self) -> bool:
        return self.record_size_bytes is not None

    @property
    def statement_found(self) -> bool:
        return bool(self.columns) or self.is_view

    @property
    def has_date_columns(self) -> bool:
        return _has_any_column(self.columns, DATE_COLUMN_NAMES)

    @property
    def is_soft_delete(self) -> bool:
        return _has_any_column(self.columns, SOFT_DELETE_COLUMN_NAMES)

    def summary_line(self) -> str:
        """Return ``database,schema,table,size,hasDateColumns,columnCount``."""
        size = "" if self.record_size_bytes is None else str(self.record_size_bytes)
        return ",".join(
            [
                self.identity.database,
                self.identity.schema,
                self.identity.table_name,
                size,
                "true" if self.has_date_columns else "false",
                str(self.column_count),
            ]
        )


def summarize(
    identity: FileIdentity,
    columns: Sequence[ColumnDef],
    *,
    is_view: bool = False,
    warnings: Iterable[str] = (),
) -> TableRecord:
    """Estimate the record size of ``columns`` and build the final record.

    A failed column estimate leaves ``record_size_bytes`` as None instead of a
    partial sum, and the failure is kept on the record.
    """

    collected_warnings = list(warnings)
    total = 0
    size_error: SizeEstimationError | None = None
    for column in columns:
        try:
            total += bytes_for(column.data_type, column.size, column=column.name)
        except SizeEstimationError as exc:
            size_error = exc
            collected_warnings.append(f"Record size for [{identity.filename}] is unreliable: {exc}")
            break

    record_size: int | None = None if size_error is not None else total
    if record_size == 0 and not is_view:
        if not columns:
            collected_warnings.append(
                f"No CREATE TABLE statement for [{identity.schema}].[{identity.table_name}] "
                f"found in [{identity.filename}]"
            )
        else:
            collected_warnings.append(
                f"Did not correctly determine record size for [{identity.filename}]!"
            )

    return TableRecord(
        identity=identity,
        columns=tuple(columns),
        record_size_bytes=record_size,
        is_view=is_view,
        size_error=size_error,
        warnings=tuple(collected_warnings),
    )


def _has_any_column(columns: Iterable[ColumnDef], names: frozenset[str]) -> bool:
    return any(column.name.lower() in names for column in columns)
