"""Shared helpers for timestamped JSONL logging."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, Tuple


_FILENAME_CACHE: Dict[Tuple[str, str], Path] = {}


def make_timestamp_slug(raw: str | None = None) -> str:
    """Return a sortable timestamp slug (UTC) for an ISO-8601 *raw* value, or now."""

    if raw:
        parsed = datetime.fromisoformat(raw.removesuffix("Z"))
    else:
        parsed = datetime.now(UTC)
    return parsed.strftime("%Y%m%dT%H%M%S%f")[:-3]


def sanitize_session_id(session_id: str) -> str:
    """Sanitize *session_id* so it can be embedded in filenames."""

    cleaned = re.sub(r"[^A-Za-z0-9_-]+", "-", session_id.strip())
    return cleaned or "session"


def resolve_log_path(base_dir: Path, session_id: str, timestamp: str | None = None) -> Path:
    """Return a cached, timestamp-prefixed path for the given session."""

    normalized_base = str(base_dir.expanduser().resolve())
    key = (normalized_base, session_id)
    if key in _FILENAME_CACHE:
        return _FILENAME_CACHE[key]

    slug = make_timestamp_slug(timestamp)
    safe_session = sanitize_session_id(session_id)
    filename = f"{slug}-{safe_session}.jsonl"
    target = Path(normalized_base) / filename
    target.parent.mkdir(parents=True, exist_ok=True)
    _FILENAME_CACHE[key] = target
    return target


def utc_now_iso() -> str:
    """Return the current UTC time in ISO-8601 with millisecond precision."""

    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")

