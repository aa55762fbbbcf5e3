"""Configuration loading utilities for the ddl-size tool."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from . import paths
from .exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class ParsingSettings:
    """File naming convention and decoding configuration."""

    delimiter: str
    schemas: tuple[str, ...]
    suffix: str
    encoding: str


@dataclass(frozen=True, slots=True)
class ReportSettings:
    """Batch report thresholds and output naming."""

    large_row_size: int
    high_column_count: int
    sizes_file: str
    no_date_file: str
    workers: int


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    parsing: ParsingSettings
    report: ReportSettings

    def with_workers(self, workers: int) -> AppConfig:
        """Return a copy with an updated worker count."""
        if workers < 1:
            raise ConfigurationError("Worker count must be at least 1.")
        return replace(self, report=replace(self.report, workers=workers))


def _default_config() -> dict[str, Any]:
    return {
        "parsing": {
            "delimiter": "_",
            "schemas": ["dbo", "rae", "subm"],
            "suffix": ".txt",
            "encoding": "utf-8",
        },
        "report": {
            "large_row_size": 8000,
            "high_column_count": 20,
            "sizes_file": "Table-sizes.csv",
            "no_date_file": "Table-With-No-Date-Fields.csv",
            "workers": 1,
        },
    }


ENV_OVERRIDE_SPEC: dict[str, tuple[str, type]] = {
    "parsing.delimiter": ("DDLSIZE_DELIMITER", str),
    "parsing.schemas": ("DDLSIZE_SCHEMAS", list),
    "parsing.suffix": ("DDLSIZE_SUFFIX", str),
    "parsing.encoding": ("DDLSIZE_ENCODING", str),
    "report.large_row_size": ("DDLSIZE_LARGE_ROW_SIZE", int),
    "report.high_column_count": ("DDLSIZE_HIGH_COLUMN_COUNT", int),
    "report.sizes_file": ("DDLSIZE_SIZES_FILE", str),
    "report.no_date_file": ("DDLSIZE_NO_DATE_FILE", str),
    "report.workers": ("DDLSIZE_WORKERS", int),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = dict(env or os.environ)
    resolved_config_path = _resolve_config_path(config_path, env)
    file_data = _load_yaml(resolved_config_path)
    merged: dict[str, Any] = _deep_merge(_default_config(), file_data)
    merged = _apply_env_overrides(merged, env)
    return _build_config(merged, resolved_config_path)


def _resolve_config_path(
    config_path: str | Path | None, env: Mapping[str, str]
) -> Path:
    if config_path:
        return paths.resolve_path(config_path)
    return paths.default_config_path(env=env)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, MutableMapping):
            raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
        return dict(data)


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides(config: dict[str, Any], env: Mapping[str, str]) -> dict[str, Any]:
    config_copy = _deep_merge(config, {})
    for dotted_key, (env_key, expected_type) in ENV_OVERRIDE_SPEC.items():
        if env_key not in env:
            continue
        raw_value = env[env_key]
        try:
            value = _coerce_env_value(raw_value, expected_type)
        except ValueError as exc:
            raise ConfigurationError(
                f"Environment override {env_key} has invalid value '{raw_value}': {exc}"
            ) from exc
        _assign_nested(config_copy, dotted_key.split("."), value)
    return config_copy


def _coerce_env_value(raw: str, expected_type: type) -> Any:
    if expected_type is str:
        # Delimiters and file names are taken verbatim.
        return raw
    cleaned = raw.strip()
    if expected_type is int:
        return int(cleaned)
    if expected_type is list:
        if not cleaned:
            return []
        return tuple(part.strip() for part in cleaned.split(",") if part.strip())
    return cleaned


def _assign_nested(target: MutableMapping[str, Any], keys: list[str], value: Any) -> None:
    current = target
    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], MutableMapping):
            current[key] = {}
        current = current[key]  # type: ignore[assignment]
    current[keys[-1]] = value


def _build_config(data: Mapping[str, Any], source_path: Path) -> AppConfig:
    try:
        parsing_cfg = data["parsing"]
        parsing = ParsingSettings(
            delimiter=str(parsing_cfg["delimiter"]),
            schemas=tuple(str(name).lower() for name in parsing_cfg["schemas"]),
            suffix=str(parsing_cfg["suffix"]),
            encoding=str(parsing_cfg["encoding"]),
        )
        report_cfg = data["report"]
        report = ReportSettings(
            large_row_size=int(report_cfg["large_row_size"]),
            high_column_count=int(report_cfg["high_column_count"]),
            sizes_file=str(report_cfg["sizes_file"]),
            no_date_file=str(report_cfg["no_date_file"]),
            workers=int(report_cfg["workers"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid configuration structure: {exc}") from exc

    if not parsing.delimiter:
        raise ConfigurationError("parsing.delimiter must not be empty.")
    if not parsing.schemas:
        raise ConfigurationError("parsing.schemas must list at least one schema name.")
    try:
        codecs.lookup(parsing.encoding)
    except LookupError as exc:
        raise ConfigurationError(f"parsing.encoding '{parsing.encoding}' is not a known encoding.") from exc
    if report.workers < 1:
        raise ConfigurationError("report.workers must be at least 1.")

    return AppConfig(source_path=source_path, parsing=parsing, report=report)
