"""Player list grouped by team."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .codenames_state import Player, Role, Team


@dataclass(frozen=True)
class RosterEntry:
    label: str
    proposal: str | None = None


@dataclass(frozen=True)
class RosterView:
    """Players in arrival order, split into the three team lists."""

    undecided: tuple[RosterEntry, ...] = field(default_factory=tuple)
    red: tuple[RosterEntry, ...] = field(default_factory=tuple)
    blue: tuple[RosterEntry, ...] = field(default_factory=tuple)


def roster_entry(player: Player) -> RosterEntry:
    # Spymasters are bracketed and never show a proposal.
    if player.role is Role.SPYMASTER:
        return RosterEntry(label=f"[{player.nickname}]")
    return RosterEntry(label=player.nickname, proposal=player.guess_proposal)


def render_roster(players: Iterable[Player]) -> RosterView:
    lists: dict[Team, list[RosterEntry]] = {team: [] for team in Team}
    for player in players:
        lists[player.team].append(roster_entry(player))
    return RosterView(
        undecided=tuple(lists[Team.UNDECIDED]),
        red=tuple(lists[Team.RED]),
        blue=tuple(lists[Team.BLUE]),
    )
