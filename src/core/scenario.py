"""Load expectation scenarios for the mock provider from YAML files.

A scenario file lists the read requests and type lookups a test expects, in
call order:

    queries:
      - target: content://contacts/1
        projection: [id, name]
        selection: "id = ?"
        selection_args: ["1"]
        rows:
          - [1, Ada]
    type_queries:
      - target: content://contacts/1
        type: vnd.example.cursor.item/contact
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.provider.mock_provider import MockContentProvider


class QueryExpectationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target: str
    projection: list[str] | None = None
    any_projection: bool = False
    default_projection: list[str] | None = None
    selection: str | None = None
    selection_args: list[str] | None = None
    any_selection: bool = False
    sort_order: str | None = None
    any_sort_order: bool = False
    rows: list[list[Any]] = Field(default_factory=list)


class TypeQueryExpectationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target: str
    type: str


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    queries: list[QueryExpectationModel] = Field(default_factory=list)
    type_queries: list[TypeQueryExpectationModel] = Field(default_factory=list)


class ScenarioLoader(Protocol):
    """Provides expectation scenarios by profile name."""

    def load(self, profile: str) -> ScenarioModel:  # pragma: no cover - interface
        """Return the scenario registered under *profile*."""


@dataclass(slots=True)
class YamlScenarioLoader(ScenarioLoader):
    """Loads scenarios from YAML files located under a base directory."""

    base_dir: Path

    def load(self, profile: str) -> ScenarioModel:
        target = self.base_dir / f"{profile}.yaml"
        if not target.exists():
            raise FileNotFoundError(f"Scenario file not found: {target}")
        with target.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
        if not isinstance(payload, dict):
            raise ValueError("Scenario file must contain a top-level mapping")
        try:
            return ScenarioModel.model_validate(payload)
        except ValidationError as exc:
            raise ValueError(f"Invalid scenario '{profile}': {exc}") from exc


def register_scenario(provider: MockContentProvider, scenario: ScenarioModel) -> None:
    """Register every expectation in *scenario* on *provider*, in file order."""

    for entry in scenario.queries:
        expectation = provider.expect_query(entry.target)
        if entry.default_projection is not None:
            expectation.with_default_projection(*entry.default_projection)
        if entry.projection is not None:
            expectation.with_projection(*entry.projection)
        if entry.any_projection:
            expectation.with_any_projection()
        if entry.selection is not None or entry.selection_args:
            expectation.with_selection(entry.selection, *(entry.selection_args or []))
        if entry.any_selection:
            expectation.with_any_selection()
        if entry.sort_order is not None:
            expectation.with_sort_order(entry.sort_order)
        if entry.any_sort_order:
            expectation.with_any_sort_order()
        for row in entry.rows:
            expectation.return_row(*row)

    for entry in scenario.type_queries:
        provider.expect_type_query(entry.target, entry.type)
