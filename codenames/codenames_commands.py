"""Outbound commands and the emitter that turns viewer intent into messages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Mapping

from viewsync.command import Command
from viewsync.errors import InvalidCommandError, MalformedSnapshotError

from .codenames_state import (
    BOARD_SIZE,
    UNLIMITED,
    Consensus,
    Difficulty,
    Mode,
    Pack,
    Role,
    Team,
    parse_enum,
)


def _coerce_enum(enum_cls: Any, raw: Any, field: str) -> Any:
    try:
        return parse_enum(enum_cls, raw, field)
    except MalformedSnapshotError as exc:
        raise InvalidCommandError(exc.reason) from exc


@dataclass(frozen=True)
class JoinRoom(Command):
    """Join an existing room."""

    nickname: str
    room: str
    password: str
    command_name = "joinRoom"


@dataclass(frozen=True)
class CreateRoom(Command):
    """Create a room and join it."""

    nickname: str
    room: str
    password: str
    command_name = "createRoom"


@dataclass(frozen=True)
class LeaveRoom(Command):
    command_name = "leaveRoom"


@dataclass(frozen=True)
class JoinTeam(Command):
    team: Team
    command_name = "joinTeam"

    def __post_init__(self) -> None:
        team = _coerce_enum(Team, self.team, "team")
        if team is Team.UNDECIDED:
            raise InvalidCommandError("Only red or blue can be joined.")
        object.__setattr__(self, "team", team)


@dataclass(frozen=True)
class RandomizeTeams(Command):
    command_name = "randomizeTeams"


@dataclass(frozen=True)
class NewGame(Command):
    command_name = "newGame"


@dataclass(frozen=True)
class DeclareClue(Command):
    """Spymaster clue; `count` travels as text, as the clue form holds it."""

    word: str
    count: int | str = 1
    command_name = "declareClue"

    def __post_init__(self) -> None:
        word = str(self.word).strip()
        if not word:
            raise InvalidCommandError("Clue must be non-empty.")
        count = str(self.count).strip()
        if count.lower() == UNLIMITED:
            count = UNLIMITED
        elif not count.isdigit() or int(count) < 1:
            raise InvalidCommandError(f"Clue count must be a positive integer or {UNLIMITED!r}.")
        object.__setattr__(self, "word", word)
        object.__setattr__(self, "count", count)


@dataclass(frozen=True)
class SwitchRole(Command):
    role: Role
    command_name = "switchRole"

    def __post_init__(self) -> None:
        object.__setattr__(self, "role", _coerce_enum(Role, self.role, "role"))


@dataclass(frozen=True)
class SwitchDifficulty(Command):
    difficulty: Difficulty
    command_name = "switchDifficulty"

    def __post_init__(self) -> None:
        object.__setattr__(self, "difficulty", _coerce_enum(Difficulty, self.difficulty, "difficulty"))


@dataclass(frozen=True)
class SwitchMode(Command):
    mode: Mode
    command_name = "switchMode"

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", _coerce_enum(Mode, self.mode, "mode"))


@dataclass(frozen=True)
class SwitchConsensus(Command):
    consensus: Consensus
    command_name = "switchConsensus"

    def __post_init__(self) -> None:
        object.__setattr__(self, "consensus", _coerce_enum(Consensus, self.consensus, "consensus"))


@dataclass(frozen=True)
class EndTurn(Command):
    command_name = "endTurn"


@dataclass(frozen=True)
class ClickTile(Command):
    """Flip (or, in consensus mode, propose) the tile at row `i`, column `j`."""

    i: int
    j: int
    command_name = "clickTile"

    def __post_init__(self) -> None:
        for axis in ("i", "j"):
            value = getattr(self, axis)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < BOARD_SIZE:
                raise InvalidCommandError(f"Tile {axis} must be an integer in [0, {BOARD_SIZE}).")


@dataclass(frozen=True)
class ChangeCards(Command):
    pack: Pack
    command_name = "changeCards"

    def __post_init__(self) -> None:
        object.__setattr__(self, "pack", _coerce_enum(Pack, self.pack, "pack"))


@dataclass(frozen=True)
class TimerSlider(Command):
    """Timer length in minutes."""

    value: int
    command_name = "timerSlider"

    def __post_init__(self) -> None:
        try:
            value = int(self.value)
        except (TypeError, ValueError) as exc:
            raise InvalidCommandError(f"Timer value must be an integer; received {self.value!r}.") from exc
        if value < 1:
            raise InvalidCommandError("Timer value must be >= 1 minute.")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class Active(Command):
    """Tell the authority the viewer is not AFK."""

    command_name = "active"


COMMAND_TYPES: dict[str, type[Command]] = {
    command.command_name: command
    for command in (
        JoinRoom,
        CreateRoom,
        LeaveRoom,
        JoinTeam,
        RandomizeTeams,
        NewGame,
        DeclareClue,
        SwitchRole,
        SwitchDifficulty,
        SwitchMode,
        SwitchConsensus,
        EndTurn,
        ClickTile,
        ChangeCards,
        TimerSlider,
        Active,
    )
}


def command_from_dict(data: Mapping[str, Any]) -> Command:
    """Parse a tagged command payload (`{"type": "clickTile", "i": 0, "j": 3}`)."""
    command_type = data.get("type")
    if command_type not in COMMAND_TYPES:
        raise InvalidCommandError(f"Unknown command type: {command_type!r}")
    return COMMAND_TYPES[str(command_type)].from_dict(data)


Sender = Callable[[str, Mapping[str, Any]], None]


class CommandEmitter:
    """Stateless translation of viewer intents into outbound messages."""

    def __init__(self, send: Sender):
        self._send = send

    def emit(self, command: Command) -> Command:
        self._send(command.command_name, command.payload())
        return command

    def join_room(self, nickname: str, room: str, password: str) -> Command:
        return self.emit(JoinRoom(nickname=nickname, room=room, password=password))

    def create_room(self, nickname: str, room: str, password: str) -> Command:
        return self.emit(CreateRoom(nickname=nickname, room=room, password=password))

    def leave_room(self) -> Command:
        return self.emit(LeaveRoom())

    def join_team(self, team: Team | str) -> Command:
        return self.emit(JoinTeam(team=team))  # type: ignore[arg-type]

    def randomize_teams(self) -> Command:
        return self.emit(RandomizeTeams())

    def new_game(self) -> Command:
        return self.emit(NewGame())

    def declare_clue(self, word: str, count: int | str) -> Command:
        return self.emit(DeclareClue(word=word, count=count))

    def switch_role(self, role: Role | str) -> Command:
        return self.emit(SwitchRole(role=role))  # type: ignore[arg-type]

    def switch_difficulty(self, difficulty: Difficulty | str) -> Command:
        return self.emit(SwitchDifficulty(difficulty=difficulty))  # type: ignore[arg-type]

    def switch_mode(self, mode: Mode | str) -> Command:
        return self.emit(SwitchMode(mode=mode))  # type: ignore[arg-type]

    def switch_consensus(self, consensus: Consensus | str) -> Command:
        return self.emit(SwitchConsensus(consensus=consensus))  # type: ignore[arg-type]

    def end_turn(self) -> Command:
        return self.emit(EndTurn())

    def click_tile(self, i: int, j: int) -> Command:
        return self.emit(ClickTile(i=i, j=j))

    def change_cards(self, pack: Pack | str) -> Command:
        return self.emit(ChangeCards(pack=pack))  # type: ignore[arg-type]

    def timer_slider(self, value: int) -> Command:
        return self.emit(TimerSlider(value=value))

    def active(self) -> Command:
        return self.emit(Active())
