"""Newest-first text feed for the server log."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .codenames_state import (
    DeclareClueEntry,
    EndTurnEntry,
    FlipTileEntry,
    LogEntry,
    LogEvent,
    SwitchTurnEntry,
    Team,
    TileType,
)


@dataclass(frozen=True)
class DisplayLine:
    """One rendered log line; `css_class` is `"{event} {team}"`."""

    text: str
    event: LogEvent
    team: Team

    @property
    def css_class(self) -> str:
        return f"{self.event.value} {self.team.value}"


def format_entry(entry: LogEntry) -> str:
    """Render a single entry with its fixed template."""
    team = entry.team.value
    if isinstance(entry, FlipTileEntry):
        if entry.type is TileType.DEATH:
            suffix = " ending the game"
        elif entry.ended_turn:
            suffix = " ending their turn"
        else:
            suffix = ""
        return f"{team} team flipped {entry.word} ({entry.type.value}){suffix}"
    if isinstance(entry, SwitchTurnEntry):
        return f"Switched to {team} team's turn"
    if isinstance(entry, DeclareClueEntry):
        return f'{team} team was given the clue "{entry.clue.word}" ({entry.clue.count_label})'
    if isinstance(entry, EndTurnEntry):
        return f"{team} team ended their turn"
    raise TypeError(f"Unsupported log entry: {type(entry).__name__}")


def render_log(log: Sequence[LogEntry]) -> tuple[DisplayLine, ...]:
    """Return display lines newest first; arrival order is otherwise kept."""
    return tuple(
        DisplayLine(text=format_entry(entry), event=entry.event, team=entry.team)
        for entry in reversed(log)
    )
