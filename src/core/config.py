"""Utilities for loading mock provider settings from YAML configuration files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.provider.expectations import DEFAULT_PLACEHOLDER_PREFIX, DEFAULT_UNSPECIFIED_COLUMN


@dataclass(slots=True)
class ResultSettings:
    placeholder_column_prefix: str = DEFAULT_PLACEHOLDER_PREFIX
    unspecified_column: str = DEFAULT_UNSPECIFIED_COLUMN


@dataclass(slots=True)
class PathsSettings:
    provider_logs_dir: str | None = None
    scenarios_dir: str | None = None


@dataclass(slots=True)
class Settings:
    results: ResultSettings = field(default_factory=ResultSettings)
    paths: PathsSettings | None = None


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError("Settings file must contain a top-level mapping")
    return payload


def load_settings(path: str | Path) -> Settings:
    """Read configuration from *path* and return structured settings."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Settings file not found: {config_path}")
    raw = _load_yaml(config_path)

    results_raw = raw.get("results") or {}
    results = ResultSettings(
        placeholder_column_prefix=str(
            results_raw.get("placeholder_column_prefix", DEFAULT_PLACEHOLDER_PREFIX)
        ),
        unspecified_column=str(results_raw.get("unspecified_column", DEFAULT_UNSPECIFIED_COLUMN)),
    )

    paths_raw: dict[str, Any] | None = raw.get("paths")
    paths = None
    if paths_raw:
        logs_dir = paths_raw.get("provider_logs_dir")
        scenarios_dir = paths_raw.get("scenarios_dir")
        paths = PathsSettings(
            provider_logs_dir=str(logs_dir) if logs_dir else None,
            scenarios_dir=str(scenarios_dir) if scenarios_dir else None,
        )

    return Settings(
        results=results,
        paths=paths,
    )
