"""
procsnap.logging
AUTHOR: carter-vin

JSON event lines on stderr; stdout is reserved for snapshot JSON

Each event type declares the fields it must carry, so a consumer can
key on (event_type, field) without guessing. Parsers never log; the CLI does.
"""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

from procsnap.collectors.base import CollectorOutcome
from procsnap.model import utc_now_iso

# event type -> fields the caller must supply
EVENT_FIELDS: dict[str, tuple[str, ...]] = {
    "snapshot_start": ("proc_root",),
    "collector_failed": ("collector", "source", "error_type", "message"),
    "snapshot_emitted": ("sections", "failures", "bytes"),
    "snapshot_shutdown": (),
}

MESSAGE_LIMIT = 200


def _truncate_message(value: str, *, limit: int = MESSAGE_LIMIT) -> str:
    if len(value) <= limit:
        return value
    return value[:limit] + f"...[truncated {len(value) - limit} chars]"


def emit_event(
    event_type: str,
    *,
    tool_version: str,
    stream: TextIO | None = None,
    **fields: Any,
) -> None:
    """
    Write one event line

    Raises ValueError for an unknown event type or a missing declared field.
    `event_type`, `utc_now` and `tool_version` are added to every line.
    """
    if event_type not in EVENT_FIELDS:
        raise ValueError(f"invalid event_type: {event_type}")

    missing = [name for name in EVENT_FIELDS[event_type] if name not in fields]
    if missing:
        raise ValueError(f"{event_type} missing fields: {missing}")

    if isinstance(fields.get("message"), str):
        fields["message"] = _truncate_message(fields["message"])

    line = json.dumps(
        {
            **fields,
            "event_type": event_type,
            "utc_now": utc_now_iso(),
            "tool_version": tool_version,
        },
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )
    print(line, file=stream if stream is not None else sys.stderr)


def emit_collector_failed(
    outcome: CollectorOutcome,
    *,
    tool_version: str,
    stream: TextIO | None = None,
) -> None:
    """
    collector_failed for a failed outcome

    `source` is the pseudo-file or syscall behind the error (e.g. "meminfo",
    "uname"), which can differ from the section name ("memInfo").
    """
    if outcome.ok:
        raise ValueError(f"collector {outcome.name!r} did not fail")

    emit_event(
        "collector_failed",
        tool_version=tool_version,
        stream=stream,
        collector=outcome.name,
        source=outcome.error_source,
        error_type=outcome.error_type,
        message=outcome.error_message,
    )
