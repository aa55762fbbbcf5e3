"""Fixtures shared by every test module."""

from __future__ import annotations

from pathlib import Path

import pytest

from ddl_cli.shared import paths


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config discovery at an empty temp dir so a user's config never leaks in."""

    config_dir = tmp_path / "ddlsize-config"
    monkeypatch.setenv(paths.CONFIG_DIR_ENV, str(config_dir))
    monkeypatch.delenv(paths.CONFIG_FILE_ENV, raising=False)
    for name in (
        "DDLSIZE_DELIMITER",
        "DDLSIZE_SCHEMAS",
        "DDLSIZE_SUFFIX",
        "DDLSIZE_ENCODING",
        "DDLSIZE_LARGE_ROW_SIZE",
        "DDLSIZE_HIGH_COLUMN_COUNT",
        "DDLSIZE_SIZES_FILE",
        "DDLSIZE_NO_DATE_FILE",
        "DDLSIZE_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture()
def ddl_dir(tmp_path: Path) -> Path:
    """Directory for DDL dump fixtures written by individual tests."""

    path = tmp_path / "ddl"
    path.mkdir()
    return path
