"""Session transcript schema and JSONL logging utilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from time import time
from typing import Any, Iterable, Mapping

from .serialize import json_dumps, to_serializable

REDACTED = "***"
REDACTED_KEYS = frozenset({"password"})


class Direction(str, Enum):
    """Which way a message crossed the transport."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass(frozen=True)
class TranscriptEvent:
    """Single message exchanged with the authority."""

    direction: Direction
    name: str
    sequence: int
    timestamp_ms: int
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable event data."""
        return {
            "direction": self.direction.value,
            "name": self.name,
            "sequence": self.sequence,
            "timestamp_ms": self.timestamp_ms,
            "payload": to_serializable(self.payload),
        }


def redact(payload: Any) -> dict[str, Any]:
    """Copy a payload with credential fields masked."""
    if not isinstance(payload, Mapping):
        return {} if payload is None else {"value": payload}
    return {
        str(key): (REDACTED if key in REDACTED_KEYS and value else value)
        for key, value in payload.items()
    }


class TranscriptRecorder:
    """Append-only record of every message the session sent or received."""

    def __init__(self) -> None:
        self.events: list[TranscriptEvent] = []

    def record(self, direction: Direction, name: str, payload: Any) -> TranscriptEvent:
        event = TranscriptEvent(
            direction=direction,
            name=name,
            sequence=len(self.events),
            timestamp_ms=int(time() * 1000),
            payload=redact(payload),
        )
        self.events.append(event)
        return event

    def to_list(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.events]


def write_jsonl(path: str | Path, events: Iterable[TranscriptEvent]) -> None:
    """Persist events as JSONL to disk."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        for event in events:
            handle.write(json_dumps(event.to_dict()))
            handle.write("\n")
