from __future__ import annotations

from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from ddl_cli.shared.cli import CLIContext, common_cli_options, handle_cli_errors
from ddl_cli.shared.exceptions import ConfigurationError, InvalidFilenameFormat


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_common_cli_options_builds_context_from_config_file(runner: CliRunner, tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("report:\n  high_column_count: 7\n", encoding="utf-8")

    @click.command()
    @common_cli_options
    def sample(cli_ctx: CLIContext) -> None:
        click.echo(f"verbose={cli_ctx.verbose} wide={cli_ctx.config.report.high_column_count}")

    result = runner.invoke(sample, ["--config", str(cfg_file), "--verbose"])

    assert result.exit_code == 0, result.output
    assert "verbose=True wide=7" in result.output


def test_common_cli_options_reports_configuration_errors(runner: CliRunner, tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("- not a mapping", encoding="utf-8")

    @click.command()
    @common_cli_options
    def sample(cli_ctx: CLIContext) -> None:  # pragma: no cover - never reached
        click.echo("ran")

    result = runner.invoke(sample, ["--config", str(cfg_file)])

    assert result.exit_code != 0
    assert "mapping root object" in result.output


def test_handle_cli_errors_converts_project_errors(runner: CliRunner) -> None:
    @click.command()
    @handle_cli_errors
    def sample() -> None:
        raise InvalidFilenameFormat("Customer.sql", "delimiter '_' not found")

    result = runner.invoke(sample, [])

    assert result.exit_code == 1
    assert "Customer.sql" in result.output


def test_handle_cli_errors_prefixes_configuration_errors(runner: CliRunner) -> None:
    @click.command()
    @handle_cli_errors
    def sample() -> None:
        raise ConfigurationError("bad value")

    result = runner.invoke(sample, [])

    assert result.exit_code == 1
    assert "Configuration error: bad value" in result.output
