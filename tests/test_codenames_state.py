"""Parsing tests for `gameState` snapshots."""

from __future__ import annotations

import pytest

from codenames.codenames_state import (
    UNLIMITED,
    DeclareClueEntry,
    Difficulty,
    FlipTileEntry,
    GameStateUpdate,
    Mode,
    Pack,
    Role,
    Snapshot,
    Team,
    TileType,
)
from viewsync.errors import MalformedSnapshotError


def test_snapshot_parses_board_scores_and_preferences(game_state) -> None:
    payload = game_state(flipped=(0, 24), difficulty="hard", mode="timed", red=8, blue=7)
    update = GameStateUpdate.from_payload(payload)
    snapshot = update.snapshot

    assert update.team is Team.RED
    assert snapshot.board[0][0].flipped is True
    assert snapshot.board[4][4].type is TileType.DEATH
    assert (snapshot.red, snapshot.blue) == (8, 7)
    assert snapshot.difficulty is Difficulty.HARD
    assert snapshot.mode is Mode.TIMED
    assert snapshot.packs == frozenset({Pack.BASE})
    assert snapshot.room == "den"


def test_players_accept_id_keyed_map_and_keep_order(game_state) -> None:
    players = {
        "s2": {"nickname": "bo", "team": "blue", "role": "spymaster"},
        "s1": {"nickname": "al", "team": "red", "role": "guesser", "guessProposal": "WORD3"},
    }
    snapshot = Snapshot.from_game_state(game_state(players=players))

    assert [player.nickname for player in snapshot.players] == ["bo", "al"]
    assert snapshot.players[0].role is Role.SPYMASTER
    assert snapshot.players[1].guess_proposal == "WORD3"


def test_word_pool_accepts_list_or_count(game_state) -> None:
    assert Snapshot.from_game_state(game_state(words=["a", "b", "c"])).words == 3
    assert Snapshot.from_game_state(game_state(words=42)).words == 42


def test_unlimited_clue_and_log_entries(game_state) -> None:
    log = [
        {"event": "declareClue", "team": "red", "clue": {"word": "OCEAN", "count": "unlimited"}},
        {"event": "flipTile", "team": "red", "word": "WORD1", "type": "red", "endedTurn": False},
    ]
    snapshot = Snapshot.from_game_state(
        game_state(clue={"word": "OCEAN", "count": "unlimited"}, log=log)
    )

    assert snapshot.clue is not None
    assert snapshot.clue.count == UNLIMITED
    assert snapshot.clue.count_label == "∞"
    assert isinstance(snapshot.log[0], DeclareClueEntry)
    assert isinstance(snapshot.log[1], FlipTileEntry)
    assert snapshot.log[1].ended_turn is False


def test_turn_must_be_a_playing_team(game_state) -> None:
    with pytest.raises(MalformedSnapshotError) as excinfo:
        Snapshot.from_game_state(game_state(turn="undecided"))
    assert excinfo.value.field == "turn"


def test_winner_ignored_until_game_is_over(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state(winner="blue"))
    assert snapshot.winner is None

    finished = Snapshot.from_game_state(game_state(over=True, winner="blue"))
    assert finished.winner is Team.BLUE


def test_board_must_be_five_by_five(game_state) -> None:
    payload = game_state()
    payload["game"]["board"] = payload["game"]["board"][:4]
    with pytest.raises(MalformedSnapshotError):
        Snapshot.from_game_state(payload)


def test_unknown_tile_type_is_rejected(game_state) -> None:
    payload = game_state()
    payload["game"]["board"][2][2]["type"] = "assassin"
    with pytest.raises(MalformedSnapshotError) as excinfo:
        Snapshot.from_game_state(payload)
    assert excinfo.value.to_dict()["field"] == "board.type"


def test_snapshot_digest_is_stable(game_state) -> None:
    first = Snapshot.from_game_state(game_state(flipped=(3,)))
    second = Snapshot.from_game_state(game_state(flipped=(3,)))
    other = Snapshot.from_game_state(game_state(flipped=(4,)))

    assert first.snapshot_digest() == second.snapshot_digest()
    assert first.snapshot_digest() != other.snapshot_digest()
