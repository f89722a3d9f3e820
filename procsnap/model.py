"""
procsnap.model
AUTHOR: carter-vin

Snapshot envelope + deterministic serialization primitives.

Design goals:
- Versioned, stable envelope ("schemaVersion" = "1")
- Explicit structure (every record serializes through its own to_dict)
- Deterministic ordering (sorted keys, failures sorted by collector)
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from procsnap.collectors.base import CollectorOutcome

# Schema constants
SCHEMA_VERSION = "1"


@dataclass(frozen=True)
class Failure:
    """One collector that raised instead of returning a record."""

    collector: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "collector": self.collector,
            "errorType": self.error_type,
            "message": self.message,
        }


@dataclass(frozen=True)
class Meta:
    """
    Metadata for versioning & traceability
    - schema_version: envelope version -> consumers check compatibility
    - tool_version: procsnap version that produced it
    """

    schema_version: str
    tool_version: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "toolVersion": self.tool_version,
        }


@dataclass(frozen=True)
class HostSnapshot:
    """
    Top-level snapshot

    sections holds already-serialized payloads keyed by collector name
    """

    collected_at: str
    sections: dict[str, Any]
    failures: list[Failure]
    meta: Meta

    def to_dict(self) -> dict[str, Any]:
        return {
            "collectedAt": self.collected_at,
            "sections": dict(self.sections),
            "failures": [f.to_dict() for f in sorted(self.failures, key=lambda f: f.collector)],
            "meta": self.meta.to_dict(),
        }


def utc_now_iso() -> str:
    """
    Current time in ISO 8601 (UTC)
    """
    return datetime.now(timezone.utc).isoformat()


def to_payload(value: Any) -> Any:
    """
    Turn a collector result into JSON-ready data

    - records -> to_dict()
    - lists of records -> list of dicts
    - plain values (pid lists) pass through
    """
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [to_payload(v) for v in value]
    return value


def to_json(payload: Any, *, pretty: bool = False) -> str:
    """
    Serialize a payload

    Rules:
    - sort_keys=True ensures stable key order
    - compact separators unless pretty
    - allow_nan=False: NaN/Infinity never reach consumers as invalid JSON
    """
    if pretty:
        return json.dumps(payload, sort_keys=True, indent=2, ensure_ascii=False, allow_nan=False)
    return json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )


def snapshot_to_json(snapshot: HostSnapshot, *, pretty: bool = False) -> str:
    return to_json(snapshot.to_dict(), pretty=pretty)


def validate_snapshot(snapshot: HostSnapshot) -> None:
    """
    Validate envelope structure

    Raises ValueError on invalid
    """
    if not snapshot.collected_at:
        raise ValueError("collected_at is empty")

    if snapshot.meta.schema_version != SCHEMA_VERSION:
        raise ValueError(f"meta.schema_version must be: '{SCHEMA_VERSION}'")
    if not snapshot.meta.tool_version:
        raise ValueError("meta.tool_version must be non-empty")

    if not isinstance(snapshot.sections, dict):
        raise ValueError("sections must be a dict")

    # A section is either collected or failed, never both
    failed = {f.collector for f in snapshot.failures}
    overlap = failed & set(snapshot.sections)
    if overlap:
        raise ValueError(f"sections both present and failed: {sorted(overlap)}")


def build_snapshot(
    outcomes: Iterable[CollectorOutcome],
    *,
    collected_at: str,
    tool_version: str,
) -> HostSnapshot:
    """
    Assemble a HostSnapshot from collector outcomes
    """
    sections: dict[str, Any] = {}
    failures: list[Failure] = []

    for outcome in outcomes:
        if outcome.ok:
            sections[outcome.name] = to_payload(outcome.value)
        else:
            failures.append(
                Failure(
                    collector=outcome.name,
                    error_type=outcome.error_type or "",
                    message=outcome.error_message or "",
                )
            )

    snapshot = HostSnapshot(
        collected_at=collected_at,
        sections=sections,
        failures=failures,
        meta=Meta(schema_version=SCHEMA_VERSION, tool_version=tool_version),
    )

    # validate before returning
    validate_snapshot(snapshot)
    return snapshot
