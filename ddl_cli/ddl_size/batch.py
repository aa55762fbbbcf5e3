"""Directory-level processing of DDL files."""

from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_DOWN, Decimal
from pathlib import Path

from ddl_cli.shared.config import ParsingSettings
from ddl_cli.shared.exceptions import DdlSizeError

from .filename import decompose
from .record import TableRecord
from .scanner import read_lines, scan

_log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Result of processing one file: a record or the reason it failed."""

    path: Path
    record: TableRecord | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True, slots=True)
class BatchSummary:
    """Counts and percentages across every record of a run."""

    total: int
    with_dates: int
    without_dates: int
    large_or_wide: int
    failed: int

    @property
    def pct_with_dates(self) -> int:
        return percentage(self.with_dates, self.total)

    @property
    def pct_without_dates(self) -> int:
        return percentage(self.without_dates, self.total)

    @property
    def pct_large_or_wide(self) -> int:
        return percentage(self.large_or_wide, self.total)


@dataclass(frozen=True, slots=True)
class BatchReport:
    """Outcomes of a directory run, sorted by file name."""

    directory: Path
    outcomes: tuple[FileOutcome, ...]

    @property
    def records(self) -> list[TableRecord]:
        return [outcome.record for outcome in self.outcomes if outcome.record is not None]

    @property
    def failures(self) -> list[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


def iter_ddl_files(directory: str | Path) -> list[Path]:
    """Return the regular files directly inside ``directory``, sorted by name."""

    root = Path(directory)
    return sorted((path for path in root.iterdir() if path.is_file()), key=lambda p: p.name)


def process_file(path: str | Path, settings: ParsingSettings) -> FileOutcome:
    """Decompose and scan one DDL file, capturing failures on the outcome."""

    file_path = Path(path)
    try:
        identity = decompose(
            file_path.name,
            delimiter=settings.delimiter,
            schemas=settings.schemas,
            suffix=settings.suffix,
        )
        _log.debug(
            "File [%s] -> DB[%s] Schema[%s] Table[%s]",
            identity.filename,
            identity.database,
            identity.schema,
            identity.table_name,
        )
        # read_lines is lazy: the file is not opened when the schema is unresolved.
        record = scan(identity, read_lines(file_path, encoding=settings.encoding))
    except DdlSizeError as exc:
        return FileOutcome(path=file_path, error=str(exc))
    except (OSError, UnicodeDecodeError, LookupError) as exc:
        return FileOutcome(path=file_path, error=f"Unable to read file: {exc}")
    return FileOutcome(path=file_path, record=record)


def run_batch(
    directory: str | Path,
    settings: ParsingSettings,
    *,
    workers: int = 1,
) -> BatchReport:
    """Process every DDL file in ``directory``.

    Files are independent, so with ``workers > 1`` they are processed on a
    thread pool. Outcomes are always returned sorted by file name.
    """

    files = iter_ddl_files(directory)
    if workers <= 1 or len(files) <= 1:
        outcomes = [process_file(path, settings) for path in files]
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            outcomes = list(executor.map(lambda path: process_file(path, settings), files))
    outcomes.sort(key=lambda outcome: outcome.path.name)
    return BatchReport(directory=Path(directory), outcomes=tuple(outcomes))


def is_large_or_wide(record: TableRecord, *, large_row_size: int, high_column_count: int) -> bool:
    """True when the record exceeds the row size or column count threshold."""

    too_large = record.record_size_bytes is not None and record.record_size_bytes > large_row_size
    return too_large or record.column_count > high_column_count


def summarize_batch(
    outcomes: Sequence[FileOutcome],
    *,
    large_row_size: int,
    high_column_count: int,
) -> BatchSummary:
    """Reduce a run's outcomes to date-column and size counts."""

    records = _reportable(outcomes)
    without_dates = sum(1 for record in records if not record.has_date_columns)
    large_or_wide = sum(
        1
        for record in records
        if is_large_or_wide(record, large_row_size=large_row_size, high_column_count=high_column_count)
    )
    return BatchSummary(
        total=len(records),
        with_dates=len(records) - without_dates,
        without_dates=without_dates,
        large_or_wide=large_or_wide,
        failed=len(outcomes) - len(records),
    )


def reportable_records(outcomes: Iterable[FileOutcome]) -> list[TableRecord]:
    """Records with a reliable size; these are the ones written to reports."""

    return _reportable(outcomes)


def percentage(part: int, total: int) -> int:
    """Whole-number percentage, rounding the ratio half-down to two places first."""

    if total == 0:
        return 0
    ratio = (Decimal(part) / Decimal(total)).quantize(Decimal("0.01"), rounding=ROUND_HALF_DOWN)
    return int(ratio * 100)


def _reportable(outcomes: Iterable[FileOutcome]) -> list[TableRecord]:
    return [
        outcome.record
        for outcome in outcomes
        if outcome.record is not None and outcome.record.size_is_reliable
    ]
