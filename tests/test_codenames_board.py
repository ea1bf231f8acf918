"""Visibility projection and tile descriptor tests."""

from __future__ import annotations

from codenames.codenames_board import TileMarker, active_proposals, render_board, tile_markers
from codenames.codenames_state import Difficulty, Player, Role, Snapshot, Team, Tile, TileType
from codenames.codenames_visibility import DisplayType, project, project_tile


def _render(snapshot: Snapshot, role: Role, difficulty: Difficulty = Difficulty.NORMAL):
    visible = project(snapshot.board, role, snapshot.over)
    return render_board(visible, active_proposals(snapshot.players), difficulty, role, snapshot.over)


def test_guesser_sees_unknown_for_every_unflipped_tile(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state(flipped=(0, 10)))
    visible = project(snapshot.board, Role.GUESSER, game_over=False)

    for row, visible_row in zip(snapshot.board, visible):
        for tile, seen in zip(row, visible_row):
            if not tile.flipped:
                assert seen.display_type is DisplayType.UNKNOWN
            else:
                assert seen.display_type is DisplayType.of(tile.type)


def test_spymaster_and_finished_game_reveal_everything(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state())
    spymaster = project(snapshot.board, Role.SPYMASTER, game_over=False)
    finished = project(snapshot.board, Role.GUESSER, game_over=True)

    assert all(tile.display_type is not DisplayType.UNKNOWN for row in spymaster for tile in row)
    assert finished[4][4].display_type is DisplayType.DEATH


def test_render_is_idempotent(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state(flipped=(1, 2, 3), difficulty="hard"))

    assert _render(snapshot, Role.GUESSER) == _render(snapshot, Role.GUESSER)


def test_role_switch_reveals_unflipped_death_tile(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state())
    as_guesser = _render(snapshot, Role.GUESSER)[4][4]
    as_spymaster = _render(snapshot, Role.SPYMASTER)[4][4]

    assert as_guesser.display_type is DisplayType.UNKNOWN
    assert as_guesser.class_name == "tile"
    assert as_spymaster.display_type is DisplayType.DEATH
    assert as_spymaster.has(TileMarker.DEATH)
    assert as_spymaster.has(TileMarker.SPYMASTER)


def test_flipped_death_tile_shows_for_guesser() -> None:
    seen = project_tile(Tile(word="CAT", type=TileType.DEATH, flipped=True), Role.GUESSER, False)
    markers = tile_markers(
        seen.display_type,
        flipped=seen.flipped,
        proposed=False,
        viewer_role=Role.GUESSER,
        game_over=False,
        difficulty=Difficulty.NORMAL,
    )

    assert markers == (TileMarker.BASE, TileMarker.DEATH, TileMarker.FLIPPED)


def test_markers_follow_precedence_order() -> None:
    markers = tile_markers(
        DisplayType.RED,
        flipped=True,
        proposed=True,
        viewer_role=Role.SPYMASTER,
        game_over=True,
        difficulty=Difficulty.HARD,
    )

    assert " ".join(marker.value for marker in markers) == "tile r flipped proposed s h"


def test_proposals_are_derived_from_players(game_state) -> None:
    players = [
        {"nickname": "al", "team": "red", "guessProposal": "WORD5"},
        {"nickname": "cy", "team": "red", "guessProposal": "WORD5"},
        {"nickname": "di", "team": "blue"},
    ]
    snapshot = Snapshot.from_game_state(game_state(players=players))
    board = _render(snapshot, Role.GUESSER)

    assert active_proposals(snapshot.players) == frozenset({"WORD5"})
    assert board[1][0].has(TileMarker.PROPOSED)
    assert not board[1][1].has(TileMarker.PROPOSED)

    cleared = Snapshot.from_game_state(game_state(players=[{"nickname": "al", "team": "red"}]))
    assert not _render(cleared, Role.GUESSER)[1][0].has(TileMarker.PROPOSED)


def test_hard_difficulty_marks_every_tile(game_state) -> None:
    snapshot = Snapshot.from_game_state(game_state(difficulty="hard"))
    board = _render(snapshot, Role.SPYMASTER, Difficulty.HARD)

    assert all(tile.has(TileMarker.HARD) for row in board for tile in row)
    assert board[0][0].row == 0 and board[2][3].col == 3


def test_active_proposals_ignores_players_without_one() -> None:
    players = [Player(nickname="al", team=Team.RED), Player(nickname="bo", team=Team.BLUE, guess_proposal="X")]
    assert active_proposals(players) == frozenset({"X"})
