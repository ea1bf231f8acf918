"""Per-tile render descriptors built from the projected board."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .codenames_state import Difficulty, Player, Role
from .codenames_visibility import DisplayType, VisibleBoard


class TileMarker(str, Enum):
    """Display attributes, declared in precedence order."""

    BASE = "tile"
    RED = "r"
    BLUE = "b"
    NEUTRAL = "n"
    DEATH = "d"
    FLIPPED = "flipped"
    PROPOSED = "proposed"
    SPYMASTER = "s"
    HARD = "h"


COLOR_MARKERS: dict[DisplayType, TileMarker] = {
    DisplayType.RED: TileMarker.RED,
    DisplayType.BLUE: TileMarker.BLUE,
    DisplayType.NEUTRAL: TileMarker.NEUTRAL,
    DisplayType.DEATH: TileMarker.DEATH,
}


@dataclass(frozen=True)
class TileRenderDescriptor:
    """Everything the rendering collaborator needs to paint one tile."""

    row: int
    col: int
    word: str
    display_type: DisplayType
    markers: tuple[TileMarker, ...]

    @property
    def class_name(self) -> str:
        return " ".join(marker.value for marker in self.markers)

    def has(self, marker: TileMarker) -> bool:
        return marker in self.markers


RenderedBoard = tuple[tuple[TileRenderDescriptor, ...], ...]


def active_proposals(players: Iterable[Player]) -> frozenset[str]:
    """Words currently proposed by any player, derived fresh from the roster."""
    return frozenset(player.guess_proposal for player in players if player.guess_proposal is not None)


def tile_markers(
    display_type: DisplayType,
    *,
    flipped: bool,
    proposed: bool,
    viewer_role: Role,
    game_over: bool,
    difficulty: Difficulty,
) -> tuple[TileMarker, ...]:
    """Return ordered, de-duplicated markers for one tile."""
    markers = [TileMarker.BASE]
    if display_type is not DisplayType.UNKNOWN:
        markers.append(COLOR_MARKERS[display_type])
    if flipped:
        markers.append(TileMarker.FLIPPED)
    if proposed:
        markers.append(TileMarker.PROPOSED)
    if viewer_role is Role.SPYMASTER or game_over:
        markers.append(TileMarker.SPYMASTER)
    if difficulty is Difficulty.HARD:
        markers.append(TileMarker.HARD)
    return tuple(dict.fromkeys(markers))


def render_board(
    visible_board: VisibleBoard,
    proposals: frozenset[str],
    difficulty: Difficulty,
    viewer_role: Role,
    game_over: bool,
) -> RenderedBoard:
    """Render the whole grid.

    Always total: every descriptor is rebuilt from the current inputs, never
    patched from a previous render, so a role or difficulty change can never
    leave a stale marker behind.
    """
    return tuple(
        tuple(
            TileRenderDescriptor(
                row=i,
                col=j,
                word=tile.word,
                display_type=tile.display_type,
                markers=tile_markers(
                    tile.display_type,
                    flipped=tile.flipped,
                    proposed=tile.word in proposals,
                    viewer_role=viewer_role,
                    game_over=game_over,
                    difficulty=difficulty,
                ),
            )
            for j, tile in enumerate(row)
        )
        for i, row in enumerate(visible_board)
    )
