"""Info panel reconciliation tests."""

from __future__ import annotations

from codenames.codenames_info import NO_CLUE_TEXT, reconcile
from codenames.codenames_state import Pack, Role, Snapshot, Team


def _snapshot(game_state, **kwargs) -> Snapshot:
    return Snapshot.from_game_state(game_state(**kwargs))


def test_guesser_on_turn_can_end_turn_without_clue(game_state) -> None:
    info = reconcile(_snapshot(game_state, red=8, blue=7), Team.RED, Role.GUESSER)

    assert info.end_turn_enabled is True
    assert info.clue_entry_visible is False
    assert (info.red_score, info.blue_score) == (8, 7)
    assert info.clue_text == NO_CLUE_TEXT


def test_spymaster_on_turn_gets_clue_entry_not_end_turn(game_state) -> None:
    info = reconcile(_snapshot(game_state, red=8, blue=7), Team.RED, Role.SPYMASTER)

    assert info.end_turn_enabled is False
    assert info.clue_entry_visible is True
    assert info.difficulty_toggle_visible is True


def test_off_turn_viewer_cannot_act(game_state) -> None:
    guesser = reconcile(_snapshot(game_state), Team.BLUE, Role.GUESSER)
    spymaster = reconcile(_snapshot(game_state), Team.BLUE, Role.SPYMASTER)

    assert guesser.end_turn_enabled is False
    assert spymaster.clue_entry_visible is False
    assert guesser.difficulty_toggle_visible is False


def test_clue_entry_hidden_once_clue_is_given(game_state) -> None:
    snapshot = _snapshot(game_state, clue={"word": "OCEAN", "count": 2})
    info = reconcile(snapshot, Team.RED, Role.SPYMASTER)

    assert info.clue_entry_visible is False
    assert info.clue_text == "OCEAN (2)"


def test_unlimited_clue_renders_infinity(game_state) -> None:
    snapshot = _snapshot(game_state, clue={"word": "OCEAN", "count": "unlimited"})

    assert reconcile(snapshot, Team.RED, Role.GUESSER).clue_text == "OCEAN (∞)"


def test_turn_and_winner_messages(game_state) -> None:
    playing = reconcile(_snapshot(game_state, turn="blue"), Team.RED, Role.GUESSER)
    finished = reconcile(
        _snapshot(game_state, over=True, winner="red", clue={"word": "X", "count": 1}),
        Team.RED,
        Role.GUESSER,
    )

    assert (playing.turn_text, playing.turn_color) == ("blue's turn", Team.BLUE)
    assert (finished.turn_text, finished.turn_color) == ("red wins!", Team.RED)
    assert finished.end_turn_enabled is False
    assert finished.clue_text == NO_CLUE_TEXT


def test_timer_slider_and_word_pool(game_state) -> None:
    info = reconcile(_snapshot(game_state, mode="timed", timer_amount=121, words=350), Team.RED, Role.GUESSER)

    assert info.timer_minutes == 2
    assert info.timer_label == "Timer Length : 2min"
    assert info.timer_visible is True
    assert info.word_pool_text == "Word Pool: 350"
    assert info.packs[Pack.BASE] is True
    assert info.packs[Pack.DUET] is False


def test_toggles_disable_the_current_option(game_state) -> None:
    info = reconcile(_snapshot(game_state, difficulty="hard", consensus="consensus"), Team.RED, Role.SPYMASTER)
    payload = info.to_dict()

    assert payload["role_toggle"] == {"guesser": False, "spymaster": True}
    assert payload["difficulty_toggle"] == {"normal": False, "hard": True}
    assert payload["mode_toggle"] == {"casual": True, "timed": False}
    assert payload["consensus_toggle"] == {"single": False, "consensus": True}
    assert payload["turn_color"] == "red"
