"""CSV report writing and console rendering for ddl-size results."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ddl_cli.shared.config import ReportSettings
from ddl_cli.shared.exceptions import SizeEstimationError

from .batch import BatchReport, BatchSummary, reportable_records
from .record import TableRecord
from .sizing import bytes_for

RECORD_COLUMNS = (
    "Database",
    "Schema",
    "Table",
    "Record Size",
    "Date Columns",
    "Soft Delete",
    "Columns",
)


@dataclass(frozen=True, slots=True)
class ReportPaths:
    """Locations of the CSV files written for a run."""

    sizes: Path
    no_dates: Path


def write_reports(report: BatchReport, output_dir: str | Path, settings: ReportSettings) -> ReportPaths:
    """Write the table size report and the no-date-columns report.

    Only records with a reliable size are written; failed files are reported
    through the logger by the caller.
    """

    target = Path(output_dir)
    target.mkdir(parents=True, exist_ok=True)
    records = reportable_records(report.outcomes)

    sizes_path = target / settings.sizes_file
    no_dates_path = target / settings.no_date_file
    _write_lines(sizes_path, (record.summary_line() for record in records))
    _write_lines(
        no_dates_path,
        (record.summary_line() for record in records if not record.has_date_columns),
    )
    return ReportPaths(sizes=sizes_path, no_dates=no_dates_path)


def format_summary(summary: BatchSummary) -> str:
    """Return the closing summary line for a run."""

    message = (
        f"Found [{summary.total}] Total SQL Files. "
        f"[{summary.with_dates} or {summary.pct_with_dates}%] with date fields, "
        f"[{summary.without_dates} or {summary.pct_without_dates}%] without date fields, "
        f"[{summary.large_or_wide} or {summary.pct_large_or_wide}%] with large row sizes "
        "or high column counts"
    )
    if summary.failed:
        message += f". [{summary.failed}] file(s) could not be sized"
    return message


def render_records_table(records: Sequence[TableRecord], *, stream: IO[str] | None = None) -> None:
    """Print one row per table to ``stream`` (stdout by default)."""

    table = Table(title="Table sizes", box=box.SIMPLE, show_header=True, header_style="bold")
    for column in RECORD_COLUMNS:
        table.add_column(column)
    for record in records:
        table.add_row(
            escape(record.identity.database),
            escape(record.identity.schema),
            escape(record.identity.table_name),
            "" if record.record_size_bytes is None else str(record.record_size_bytes),
            _yes_no(record.has_date_columns),
            _yes_no(record.is_soft_delete),
            str(record.column_count),
        )
    _console(stream).print(table)


def render_columns_table(record: TableRecord, *, stream: IO[str] | None = None) -> None:
    """Print a record's columns with their byte estimates."""

    identity = record.identity
    title = f"[{identity.schema}].[{identity.table_name}]"
    if record.is_view:
        title += " (view)"
    table = Table(title=escape(title), box=box.SIMPLE, show_header=True, header_style="bold")
    for column in ("Column", "Type", "Size", "Bytes"):
        table.add_column(column)
    for column in record.columns:
        try:
            width = str(bytes_for(column.data_type, column.size, column=column.name))
        except SizeEstimationError as exc:
            width = f"error: {exc.__class__.__name__}"
        table.add_row(escape(column.name), escape(column.data_type), str(column.size), width)
    _console(stream).print(table)


def _write_lines(path: Path, lines: Iterable[str]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        for line in lines:
            handle.write(line + "\n")


def _console(stream: IO[str] | None) -> Console:
    return Console(file=stream or sys.stdout, highlight=False, force_terminal=False, width=120)


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"
