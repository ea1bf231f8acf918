"""Log feed and roster rendering tests."""

from __future__ import annotations

from codenames.codenames_log import render_log
from codenames.codenames_roster import render_roster
from codenames.codenames_state import Snapshot


def _lines(game_state, log: list[dict]) -> list[str]:
    snapshot = Snapshot.from_game_state(game_state(log=log))
    return [line.text for line in render_log(snapshot.log)]


def test_flip_tile_templates(game_state) -> None:
    lines = _lines(
        game_state,
        [
            {"event": "flipTile", "team": "red", "word": "APPLE", "type": "red", "endedTurn": False},
            {"event": "flipTile", "team": "blue", "word": "PEAR", "type": "neutral", "endedTurn": True},
            {"event": "flipTile", "team": "red", "word": "CAT", "type": "death", "endedTurn": True},
        ],
    )

    assert lines == [
        "red team flipped CAT (death) ending the game",
        "blue team flipped PEAR (neutral) ending their turn",
        "red team flipped APPLE (red)",
    ]


def test_clue_switch_and_end_turn_templates(game_state) -> None:
    lines = _lines(
        game_state,
        [
            {"event": "declareClue", "team": "blue", "clue": {"word": "OCEAN", "count": "unlimited"}},
            {"event": "declareClue", "team": "red", "clue": {"word": "FRUIT", "count": 3}},
            {"event": "switchTurn", "team": "blue"},
        ],
    )

    assert lines == [
        "Switched to blue team's turn",
        'red team was given the clue "FRUIT" (3)',
        'blue team was given the clue "OCEAN" (∞)',
    ]


def test_new_entry_is_prepended(game_state) -> None:
    earlier = [{"event": "switchTurn", "team": "red"}]
    later = earlier + [{"event": "endTurn", "team": "blue"}]

    assert _lines(game_state, earlier) == ["Switched to red team's turn"]
    assert _lines(game_state, later) == ["blue team ended their turn", "Switched to red team's turn"]


def test_log_is_rendered_newest_first(game_state) -> None:
    log = [{"event": "endTurn", "team": "red" if index % 2 else "blue"} for index in range(6)]
    snapshot = Snapshot.from_game_state(game_state(log=log))
    lines = render_log(snapshot.log)

    assert [line.team for line in lines] == [entry.team for entry in reversed(snapshot.log)]
    assert lines[0].css_class == "endTurn red"


def test_roster_groups_players_and_brackets_spymasters(game_state) -> None:
    players = [
        {"nickname": "al", "team": "red", "role": "guesser", "guessProposal": "WORD1"},
        {"nickname": "bo", "team": "red", "role": "spymaster", "guessProposal": "WORD2"},
        {"nickname": "cy", "team": "undecided"},
        {"nickname": "di", "team": "blue", "role": "spymaster"},
    ]
    roster = render_roster(Snapshot.from_game_state(game_state(players=players)).players)

    assert [(entry.label, entry.proposal) for entry in roster.red] == [("al", "WORD1"), ("[bo]", None)]
    assert [entry.label for entry in roster.undecided] == ["cy"]
    assert [entry.label for entry in roster.blue] == ["[di]"]
