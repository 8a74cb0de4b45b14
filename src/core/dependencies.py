"""Factory helpers for constructing mock providers from settings."""

from __future__ import annotations

from pathlib import Path

from src.core.config import Settings
from src.core.observability import JSONLProviderLogger, ProviderObservationSink
from src.core.scenario import YamlScenarioLoader
from src.provider.mock_provider import MockContentProvider


def build_provider(settings: Settings, session_id: str = "mock-provider") -> MockContentProvider:
    """Create a provider wired with the result and logging options in *settings*."""

    return MockContentProvider(
        placeholder_prefix=settings.results.placeholder_column_prefix,
        unspecified_column=settings.results.unspecified_column,
        logger=_build_logger(settings),
        session_id=session_id,
    )


def build_scenario_loader(settings: Settings) -> YamlScenarioLoader:
    base = (
        settings.paths.scenarios_dir
        if settings.paths and settings.paths.scenarios_dir
        else "tests/scenarios"
    )
    return YamlScenarioLoader(base_dir=Path(base).expanduser())


def _build_logger(settings: Settings) -> ProviderObservationSink | None:
    if settings.paths is None or not settings.paths.provider_logs_dir:
        return None
    path = Path(settings.paths.provider_logs_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return JSONLProviderLogger(base_dir=path)
