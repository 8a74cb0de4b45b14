"""JSONL-backed observability helpers for mock provider sessions."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from src.core.logging_utils import resolve_log_path, utc_now_iso


class ProviderObservationSink(Protocol):
    """Records call events emitted by the mock content provider."""

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # pragma: no cover - interface
        ...


def _write_jsonl(base_dir: Path, session_id: str, payload: dict[str, Any]) -> None:
    target = resolve_log_path(
        base_dir=base_dir,
        session_id=session_id,
        timestamp=payload.get("timestamp") if isinstance(payload, dict) else None,
    )
    with target.open("a", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, default=str)
        handle.write("\n")


def _build_event(event: str, payload: dict[str, Any]) -> dict[str, Any]:
    enriched = {key: value for key, value in payload.items() if value is not None}
    enriched.setdefault("event", event)
    enriched.setdefault("timestamp", utc_now_iso())
    return enriched


@dataclass(slots=True)
class JSONLProviderLogger(ProviderObservationSink):
    """Persists provider call events under a dedicated logs directory."""

    base_dir: Path

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        _write_jsonl(self.base_dir, session_id, _build_event(event, payload))


@dataclass(slots=True)
class InMemoryProviderLogger(ProviderObservationSink):
    """Keeps provider call events in memory for inspection inside tests."""

    events: list[dict[str, Any]] = field(default_factory=list)

    def log_event(self, session_id: str, event: str, payload: dict[str, Any]) -> None:  # type: ignore[override]
        enriched = _build_event(event, payload)
        enriched.setdefault("session_id", session_id)
        self.events.append(enriched)

    def names(self) -> list[str]:
        return [entry["event"] for entry in self.events]
