"""ddl-size CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from ddl_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors
from ddl_cli.shared.logging import Logger

from .batch import BatchReport, run_batch, summarize_batch
from .filename import decompose
from .record import TableRecord
from .report import format_summary, render_columns_table, render_records_table, write_reports
from .scanner import read_lines, scan


@click.group(help="Estimate table record sizes from SQL DDL dump files.")
def main() -> None:
    """Command group for ddl-size."""


@main.command("scan", help="Size every DDL file in DIRECTORY and write CSV reports.")
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory receiving the CSV reports.",
)
@click.option("--workers", type=click.IntRange(min=1), help="Files processed in parallel.")
@click.option("--table", "show_table", is_flag=True, help="Also print a table of results to stdout.")
@common_cli_options
@handle_cli_errors
def scan_command(
    directory: Path,
    output_dir: Path,
    workers: int | None,
    show_table: bool,
    cli_ctx: CLIContext,
) -> None:
    config = cli_ctx.config.with_workers(workers) if workers else cli_ctx.config
    logger = cli_ctx.logger

    logger.info(f"Looking for DDL Files in [{directory}]")
    report = run_batch(directory, config.parsing, workers=config.report.workers)
    if not report.outcomes:
        logger.warning(f"No files found in [{directory}].")

    _log_outcomes(report, logger)
    paths = write_reports(report, output_dir, config.report)

    if show_table:
        render_records_table(report.records)

    summary = summarize_batch(
        report.outcomes,
        large_row_size=config.report.large_row_size,
        high_column_count=config.report.high_column_count,
    )
    logger.info(format_summary(summary))
    logger.success(f"Wrote {paths.sizes} and {paths.no_dates}")


@main.command("inspect", help="Show the parsed columns and record size of one DDL file.")
@click.argument(
    "ddl_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@common_cli_options
@handle_cli_errors
def inspect_command(ddl_file: Path, cli_ctx: CLIContext) -> None:
    parsing = cli_ctx.config.parsing
    identity = decompose(
        ddl_file.name,
        delimiter=parsing.delimiter,
        schemas=parsing.schemas,
        suffix=parsing.suffix,
    )
    cli_ctx.logger.debug(
        f"File [{identity.filename}] -> DB[{identity.database}] "
        f"Schema[{identity.schema}] Table[{identity.table_name}]"
    )
    record = scan(identity, read_lines(ddl_file, encoding=parsing.encoding))
    _log_warnings(record, cli_ctx.logger)
    if record.columns:
        render_columns_table(record)
    click.echo(record.summary_line())


def _log_outcomes(report: BatchReport, logger: Logger) -> None:
    for outcome in report.outcomes:
        if outcome.record is None:
            logger.error(f"Error parsing file [{outcome.path.name}] Details: {outcome.error}")
            continue
        _log_warnings(outcome.record, logger)
        logger.debug(outcome.record.summary_line())


def _log_warnings(record: TableRecord, logger: Logger) -> None:
    for warning in record.warnings:
        logger.warning(warning)


if __name__ == "__main__":  # pragma: no cover
    main()
