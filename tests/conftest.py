"""Shared wire-payload builders for the Codenames client tests."""

from __future__ import annotations

from typing import Any

import pytest

from codenames.codenames_state import BOARD_SIZE


def tile_type_for(index: int) -> str:
    """Fixed key: 9 red, 8 blue, 7 neutral, 1 death (last tile)."""
    if index < 9:
        return "red"
    if index < 17:
        return "blue"
    if index < 24:
        return "neutral"
    return "death"


def build_board(flipped: tuple[int, ...] = ()) -> list[list[dict[str, Any]]]:
    return [
        [
            {
                "word": f"WORD{i * BOARD_SIZE + j}",
                "type": tile_type_for(i * BOARD_SIZE + j),
                "flipped": (i * BOARD_SIZE + j) in flipped,
            }
            for j in range(BOARD_SIZE)
        ]
        for i in range(BOARD_SIZE)
    ]


def build_game_state(
    *,
    team: str = "red",
    turn: str = "red",
    over: bool = False,
    winner: str | None = None,
    red: int = 9,
    blue: int = 8,
    clue: dict[str, Any] | None = None,
    flipped: tuple[int, ...] = (),
    log: list[dict[str, Any]] | None = None,
    players: Any = None,
    mode: str = "casual",
    consensus: str = "single",
    difficulty: str = "normal",
    timer_amount: int = 61,
    words: Any = 400,
) -> dict[str, Any]:
    """Return a `gameState` payload shaped like the authority sends it."""
    game: dict[str, Any] = {
        "board": build_board(flipped),
        "turn": turn,
        "over": over,
        "winner": winner,
        "red": red,
        "blue": blue,
        "clue": clue,
        "timerAmount": timer_amount,
        "log": log or [],
        "base": True,
        "duet": False,
        "undercover": False,
        "custom": False,
        "nsfw": False,
        "words": words,
    }
    return {
        "room": "den",
        "game": game,
        "team": team,
        "mode": mode,
        "consensus": consensus,
        "difficulty": difficulty,
        "players": players if players is not None else [],
    }


@pytest.fixture
def game_state():
    """Factory fixture for `gameState` payloads."""
    return build_game_state
