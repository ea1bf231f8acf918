"""Turn, score, clue, timer and button state derived from a snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from viewsync.serialize import to_serializable

from .codenames_state import Consensus, Difficulty, Mode, Pack, Role, Snapshot, Team

NO_CLUE_TEXT = "___"


@dataclass(frozen=True)
class ToggleGroup:
    """A pair of mutually exclusive buttons; the selected one is disabled."""

    options: tuple[str, ...]
    selected: str

    @classmethod
    def for_enum(cls, enum_cls: type[Enum], selected: Enum) -> "ToggleGroup":
        return cls(options=tuple(member.value for member in enum_cls), selected=selected.value)

    def disabled(self, option: str) -> bool:
        return option == self.selected

    def to_dict(self) -> dict[str, bool]:
        """Map each option to its `disabled` flag."""
        return {option: self.disabled(option) for option in self.options}


@dataclass(frozen=True)
class InfoPanelState:
    """Everything shown around the board for one viewer."""

    red_score: int
    blue_score: int
    turn_text: str
    turn_color: Team
    end_turn_enabled: bool
    clue_entry_visible: bool
    clue_text: str
    timer_minutes: float
    timer_label: str
    timer_visible: bool
    packs: dict[Pack, bool]
    word_pool_text: str
    role_toggle: ToggleGroup
    difficulty_toggle: ToggleGroup
    difficulty_toggle_visible: bool
    mode_toggle: ToggleGroup
    consensus_toggle: ToggleGroup

    def to_dict(self) -> dict[str, Any]:
        payload = to_serializable(self)
        for name in ("role_toggle", "difficulty_toggle", "mode_toggle", "consensus_toggle"):
            payload[name] = getattr(self, name).to_dict()
        return payload


def turn_message(snapshot: Snapshot) -> tuple[str, Team]:
    if snapshot.over and snapshot.winner is not None:
        return f"{snapshot.winner.value} wins!", snapshot.winner
    return f"{snapshot.turn.value}'s turn", snapshot.turn


def clue_text(snapshot: Snapshot) -> str:
    if snapshot.over or snapshot.clue is None:
        return NO_CLUE_TEXT
    return f"{snapshot.clue.word} ({snapshot.clue.count_label})"


def timer_minutes(timer_amount: float) -> float:
    return (timer_amount - 1) / 60


def _format_minutes(minutes: float) -> str:
    return str(int(minutes)) if float(minutes).is_integer() else f"{minutes:g}"


def reconcile(snapshot: Snapshot, viewer_team: Team, viewer_role: Role) -> InfoPanelState:
    """Derive the info panel for `viewer_team`/`viewer_role` from `snapshot`."""
    text, color = turn_message(snapshot)
    on_turn = viewer_team is snapshot.turn
    minutes = timer_minutes(snapshot.timer_amount)
    return InfoPanelState(
        red_score=snapshot.red,
        blue_score=snapshot.blue,
        turn_text=text,
        turn_color=color,
        end_turn_enabled=not snapshot.over and on_turn and viewer_role is not Role.SPYMASTER,
        clue_entry_visible=viewer_role is Role.SPYMASTER and snapshot.clue is None and on_turn,
        clue_text=clue_text(snapshot),
        timer_minutes=minutes,
        timer_label=f"Timer Length : {_format_minutes(minutes)}min",
        timer_visible=snapshot.mode is Mode.TIMED,
        packs={pack: snapshot.pack_enabled(pack) for pack in Pack},
        word_pool_text=f"Word Pool: {snapshot.words}",
        role_toggle=ToggleGroup.for_enum(Role, viewer_role),
        difficulty_toggle=ToggleGroup.for_enum(Difficulty, snapshot.difficulty),
        difficulty_toggle_visible=viewer_role is Role.SPYMASTER,
        mode_toggle=ToggleGroup.for_enum(Mode, snapshot.mode),
        consensus_toggle=ToggleGroup.for_enum(Consensus, snapshot.consensus),
    )
