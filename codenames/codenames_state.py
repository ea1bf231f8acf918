"""Snapshot model and enums for the Codenames client."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, TypeVar

from viewsync.errors import MalformedSnapshotError
from viewsync.serialize import digest

BOARD_SIZE = 5
UNLIMITED = "unlimited"
INFINITY_SYMBOL = "∞"

ClueCount = int | str
EnumT = TypeVar("EnumT", bound=Enum)


class Team(str, Enum):
    """Team membership; `UNDECIDED` is only valid for players."""

    RED = "red"
    BLUE = "blue"
    UNDECIDED = "undecided"


PLAYING_TEAMS: tuple[Team, Team] = (Team.RED, Team.BLUE)


class TileType(str, Enum):
    """Ground-truth assignment of a board tile."""

    RED = "red"
    BLUE = "blue"
    NEUTRAL = "neutral"
    DEATH = "death"


class Role(str, Enum):
    """Viewer roles."""

    GUESSER = "guesser"
    SPYMASTER = "spymaster"


class Difficulty(str, Enum):
    NORMAL = "normal"
    HARD = "hard"


class Mode(str, Enum):
    CASUAL = "casual"
    TIMED = "timed"


class Consensus(str, Enum):
    SINGLE = "single"
    CONSENSUS = "consensus"


class Pack(str, Enum):
    """Word packs the room can draw from."""

    BASE = "base"
    DUET = "duet"
    UNDERCOVER = "undercover"
    CUSTOM = "custom"
    NSFW = "nsfw"


class LogEvent(str, Enum):
    """Log entry discriminators."""

    FLIP_TILE = "flipTile"
    SWITCH_TURN = "switchTurn"
    DECLARE_CLUE = "declareClue"
    END_TURN = "endTurn"


def parse_enum(enum_cls: type[EnumT], raw: Any, field: str) -> EnumT:
    """Parse a wire string into `enum_cls`, raising on unknown values."""
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(str(raw).lower())
    except ValueError as exc:
        allowed = [member.value for member in enum_cls]
        raise MalformedSnapshotError(field, f"expected one of {allowed}, received {raw!r}") from exc


def parse_clue_count(raw: Any) -> ClueCount:
    """Return a positive int, or `UNLIMITED`."""
    if isinstance(raw, str) and raw.strip().lower() == UNLIMITED:
        return UNLIMITED
    try:
        count = int(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedSnapshotError("clue.count", f"expected integer or {UNLIMITED!r}, received {raw!r}") from exc
    if count < 0:
        raise MalformedSnapshotError("clue.count", f"must be >= 0, received {count}")
    return count


def format_clue_count(count: ClueCount) -> str:
    return INFINITY_SYMBOL if count == UNLIMITED else str(count)


@dataclass(frozen=True)
class Clue:
    """Clue word plus how many tiles it points at."""

    word: str
    count: ClueCount

    @property
    def count_label(self) -> str:
        return format_clue_count(self.count)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Clue":
        return cls(word=str(data.get("word", "")), count=parse_clue_count(data.get("count")))


@dataclass(frozen=True)
class Tile:
    """One board cell as sent by the authority."""

    word: str
    type: TileType
    flipped: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tile":
        if not isinstance(data, Mapping) or "word" not in data:
            raise MalformedSnapshotError("board", f"tile must be an object with a word, received {data!r}")
        return cls(
            word=str(data["word"]),
            type=parse_enum(TileType, data.get("type"), "board.type"),
            flipped=bool(data.get("flipped", False)),
        )


@dataclass(frozen=True)
class Player:
    """Room member as listed in a snapshot."""

    nickname: str
    team: Team = Team.UNDECIDED
    role: Role = Role.GUESSER
    guess_proposal: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Player":
        proposal = data.get("guessProposal")
        return cls(
            nickname=str(data.get("nickname", "")),
            team=parse_enum(Team, data.get("team") or Team.UNDECIDED.value, "players.team"),
            role=parse_enum(Role, data.get("role") or Role.GUESSER.value, "players.role"),
            guess_proposal=None if proposal is None else str(proposal),
        )


@dataclass(frozen=True)
class LogEntry:
    """Base for the immutable entries of the server log."""

    event: ClassVar[LogEvent]
    team: Team


@dataclass(frozen=True)
class FlipTileEntry(LogEntry):
    event: ClassVar[LogEvent] = LogEvent.FLIP_TILE
    word: str = ""
    type: TileType = TileType.NEUTRAL
    ended_turn: bool = False


@dataclass(frozen=True)
class SwitchTurnEntry(LogEntry):
    event: ClassVar[LogEvent] = LogEvent.SWITCH_TURN


@dataclass(frozen=True)
class DeclareClueEntry(LogEntry):
    event: ClassVar[LogEvent] = LogEvent.DECLARE_CLUE
    clue: Clue = Clue(word="", count=0)


@dataclass(frozen=True)
class EndTurnEntry(LogEntry):
    event: ClassVar[LogEvent] = LogEvent.END_TURN


def parse_enum_exact(enum_cls: type[EnumT], raw: Any, field: str) -> EnumT:
    """Like `parse_enum` but case-sensitive, for camelCase tags."""
    try:
        return enum_cls(raw)
    except ValueError as exc:
        allowed = [member.value for member in enum_cls]
        raise MalformedSnapshotError(field, f"expected one of {allowed}, received {raw!r}") from exc


def log_entry_from_dict(data: Mapping[str, Any]) -> LogEntry:
    """Parse one tagged log entry."""
    event = parse_enum_exact(LogEvent, data.get("event"), "log.event")
    team = parse_enum(Team, data.get("team"), "log.team")
    if event is LogEvent.FLIP_TILE:
        return FlipTileEntry(
            team=team,
            word=str(data.get("word", "")),
            type=parse_enum(TileType, data.get("type"), "log.type"),
            ended_turn=bool(data.get("endedTurn", False)),
        )
    if event is LogEvent.SWITCH_TURN:
        return SwitchTurnEntry(team=team)
    if event is LogEvent.DECLARE_CLUE:
        clue = data.get("clue")
        if not isinstance(clue, Mapping):
            raise MalformedSnapshotError("log.clue", "declareClue entry without a clue")
        return DeclareClueEntry(team=team, clue=Clue.from_dict(clue))
    return EndTurnEntry(team=team)


Board = tuple[tuple[Tile, ...], ...]


def board_from_rows(rows: Any) -> Board:
    """Parse a 5x5 grid of tiles."""
    if not isinstance(rows, (list, tuple)) or len(rows) != BOARD_SIZE:
        raise MalformedSnapshotError("board", f"expected {BOARD_SIZE} rows")
    board: list[tuple[Tile, ...]] = []
    for row in rows:
        if not isinstance(row, (list, tuple)) or len(row) != BOARD_SIZE:
            raise MalformedSnapshotError("board", f"expected {BOARD_SIZE} tiles per row")
        board.append(tuple(Tile.from_dict(tile) for tile in row))
    return tuple(board)


def _players_from_wire(raw: Any) -> tuple[Player, ...]:
    if raw is None:
        return ()
    # The authority serializes players as an id-keyed map; insertion order is kept.
    items = raw.values() if isinstance(raw, Mapping) else raw
    return tuple(Player.from_dict(item) for item in items)


def _number(game: Mapping[str, Any], key: str, cast: Callable[[Any], Any] = int) -> Any:
    raw = game.get(key, 0)
    try:
        return cast(raw or 0)
    except (TypeError, ValueError) as exc:
        raise MalformedSnapshotError(key, f"expected a number, received {raw!r}") from exc


def _word_pool_size(game: Mapping[str, Any]) -> int:
    words = game.get("words", game.get("wordPool", 0))
    if isinstance(words, (list, tuple)):
        return len(words)
    try:
        return int(words or 0)
    except (TypeError, ValueError) as exc:
        raise MalformedSnapshotError("words", f"expected list or integer, received {words!r}") from exc


@dataclass(frozen=True)
class Snapshot:
    """Authoritative room state at one instant; replaces its predecessor whole."""

    board: Board
    turn: Team
    over: bool
    winner: Team | None
    red: int
    blue: int
    clue: Clue | None
    timer_amount: float
    players: tuple[Player, ...]
    log: tuple[LogEntry, ...]
    mode: Mode = Mode.CASUAL
    consensus: Consensus = Consensus.SINGLE
    difficulty: Difficulty = Difficulty.NORMAL
    packs: frozenset[Pack] = frozenset({Pack.BASE})
    words: int = 0
    room: str | None = None

    def __post_init__(self) -> None:
        if self.turn not in PLAYING_TEAMS:
            raise MalformedSnapshotError("turn", f"must be red or blue, received {self.turn.value!r}")
        if self.winner is not None and not self.over:
            raise MalformedSnapshotError("winner", "winner set on a game that is not over")

    def pack_enabled(self, pack: Pack) -> bool:
        return pack in self.packs

    def snapshot_digest(self) -> str:
        """Return a deterministic digest for transcripts and change detection."""
        return digest(self)

    @classmethod
    def from_game_state(cls, payload: Mapping[str, Any]) -> "Snapshot":
        """Build a snapshot from a `gameState` event payload."""
        game = payload.get("game")
        if not isinstance(game, Mapping):
            raise MalformedSnapshotError("game", "gameState payload without a game object")

        over = bool(game.get("over", False))
        raw_winner = game.get("winner")
        clue = game.get("clue")
        return cls(
            board=board_from_rows(game.get("board")),
            turn=parse_enum(Team, game.get("turn"), "turn"),
            over=over,
            winner=parse_enum(Team, raw_winner, "winner") if raw_winner and over else None,
            red=_number(game, "red"),
            blue=_number(game, "blue"),
            clue=Clue.from_dict(clue) if isinstance(clue, Mapping) else None,
            timer_amount=_number(game, "timerAmount", float),
            players=_players_from_wire(payload.get("players")),
            log=tuple(log_entry_from_dict(entry) for entry in game.get("log") or ()),
            mode=parse_enum(Mode, payload.get("mode", game.get("mode", Mode.CASUAL.value)), "mode"),
            consensus=parse_enum(
                Consensus, payload.get("consensus", game.get("consensus", Consensus.SINGLE.value)), "consensus"
            ),
            difficulty=parse_enum(
                Difficulty, payload.get("difficulty", game.get("difficulty", Difficulty.NORMAL.value)), "difficulty"
            ),
            packs=frozenset(pack for pack in Pack if bool(game.get(pack.value, False))),
            words=_word_pool_size(game),
            room=payload.get("room"),
        )


@dataclass(frozen=True)
class GameStateUpdate:
    """A parsed `gameState` event: the snapshot plus the viewer's team."""

    snapshot: Snapshot
    team: Team

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "GameStateUpdate":
        return cls(
            snapshot=Snapshot.from_game_state(payload),
            team=parse_enum(Team, payload.get("team") or Team.UNDECIDED.value, "team"),
        )


@dataclass(frozen=True)
class ViewerPreferences:
    """Local rendering preferences, changed only by confirmed server responses."""

    role: Role = Role.GUESSER
    difficulty: Difficulty = Difficulty.NORMAL
    mode: Mode = Mode.CASUAL
    consensus: Consensus = Consensus.SINGLE
