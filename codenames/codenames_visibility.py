"""Role-filtered projection of the board for the current viewer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .codenames_state import Board, Role, Tile, TileType


class DisplayType(str, Enum):
    """What the viewer is allowed to know about a tile."""

    RED = "red"
    BLUE = "blue"
    NEUTRAL = "neutral"
    DEATH = "death"
    UNKNOWN = "unknown"

    @classmethod
    def of(cls, tile_type: TileType) -> "DisplayType":
        return cls(tile_type.value)


@dataclass(frozen=True)
class VisibleTile:
    """Tile as the viewer may see it."""

    word: str
    display_type: DisplayType
    flipped: bool


VisibleBoard = tuple[tuple[VisibleTile, ...], ...]


def type_visible(tile: Tile, viewer_role: Role, game_over: bool) -> bool:
    """A tile's type shows iff it is flipped, the viewer is spymaster, or the game is over."""
    return tile.flipped or viewer_role is Role.SPYMASTER or game_over


def project_tile(tile: Tile, viewer_role: Role, game_over: bool) -> VisibleTile:
    display_type = DisplayType.of(tile.type) if type_visible(tile, viewer_role, game_over) else DisplayType.UNKNOWN
    return VisibleTile(word=tile.word, display_type=display_type, flipped=tile.flipped)


def project(board: Board, viewer_role: Role, game_over: bool) -> VisibleBoard:
    """Project every tile; pure, so identical inputs give identical output."""
    return tuple(
        tuple(project_tile(tile, viewer_role, game_over) for tile in row)
        for row in board
    )
