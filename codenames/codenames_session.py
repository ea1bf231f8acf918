"""Session controller: inbound event dispatch, snapshot store and render plans."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import partial
from typing import Any

from viewsync.command import Command
from viewsync.errors import CommandRejectedError, MalformedSnapshotError
from viewsync.events import Direction, TranscriptRecorder
from viewsync.fragment import build_fragment, extract_from_fragment
from viewsync.serialize import digest, to_serializable
from viewsync.transport import InboundMessage, Transport

from .codenames_board import RenderedBoard, active_proposals, render_board
from .codenames_commands import Active, CommandEmitter, CreateRoom, DeclareClue, JoinRoom
from .codenames_info import InfoPanelState, reconcile
from .codenames_log import DisplayLine, render_log
from .codenames_roster import RosterView, render_roster
from .codenames_state import GameStateUpdate, Mode, Role, Snapshot, Team, ViewerPreferences, parse_enum
from .codenames_visibility import project

logger = logging.getLogger(__name__)

KICKED_NOTICE = "You were kicked for being AFK"

INBOUND_EVENTS: tuple[str, ...] = (
    "serverStats",
    "joinResponse",
    "createResponse",
    "leaveResponse",
    "timerUpdate",
    "newGameResponse",
    "afkWarning",
    "afkKicked",
    "serverMessage",
    "switchRoleResponse",
    "gameState",
    "reset",
)


class SessionState(str, Enum):
    SIGNED_OUT = "signed_out"
    IN_ROOM = "in_room"


class Overlay(str, Enum):
    """Blocking windows layered over the game view."""

    NONE = "none"
    AFK_WARNING = "afk_warning"
    NOTICE = "notice"


@dataclass(frozen=True)
class RenderPlan:
    """Total, deterministic view of one snapshot for one viewer."""

    board: RenderedBoard
    info: InfoPanelState | None
    log: tuple[DisplayLine, ...]
    roster: RosterView
    full_reset: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "board": [
                [
                    {
                        "row": tile.row,
                        "col": tile.col,
                        "word": tile.word,
                        "display_type": tile.display_type.value,
                        "class_name": tile.class_name,
                    }
                    for tile in row
                ]
                for row in self.board
            ],
            "info": self.info.to_dict() if self.info is not None else None,
            "log": [{"text": line.text, "class_name": line.css_class} for line in self.log],
            "roster": to_serializable(self.roster),
            "full_reset": self.full_reset,
        }

    def plan_digest(self) -> str:
        return digest(self.to_dict())


EMPTY_PLAN = RenderPlan(board=(), info=None, log=(), roster=RosterView(), full_reset=True)


def apply_snapshot(
    snapshot: Snapshot,
    viewer_team: Team,
    preferences: ViewerPreferences,
    *,
    full_reset: bool = False,
) -> RenderPlan:
    """Derive everything the viewer sees from one snapshot.

    Pure: the same snapshot, team and preferences always give the same plan.
    """
    visible = project(snapshot.board, preferences.role, snapshot.over)
    return RenderPlan(
        board=render_board(
            visible,
            active_proposals(snapshot.players),
            preferences.difficulty,
            preferences.role,
            snapshot.over,
        ),
        info=reconcile(snapshot, viewer_team, preferences.role),
        log=render_log(snapshot.log),
        roster=render_roster(snapshot.players),
        full_reset=full_reset,
    )


class SnapshotStore:
    """Latest authoritative snapshot plus the viewer's local preferences."""

    def __init__(self, preferences: ViewerPreferences | None = None):
        self.snapshot: Snapshot | None = None
        self.viewer_team: Team = Team.UNDECIDED
        self.preferences = preferences or ViewerPreferences()

    def replace(self, update: GameStateUpdate) -> bool:
        """Swap in a new snapshot; return True when its difficulty changed."""
        snapshot = update.snapshot
        difficulty_changed = snapshot.difficulty is not self.preferences.difficulty
        self.snapshot = snapshot
        self.viewer_team = update.team
        self.preferences = replace(
            self.preferences,
            difficulty=snapshot.difficulty,
            mode=snapshot.mode,
            consensus=snapshot.consensus,
        )
        return difficulty_changed

    def set_role(self, role: Role) -> bool:
        """Store a confirmed role; return True when it changed."""
        changed = role is not self.preferences.role
        self.preferences = replace(self.preferences, role=role)
        return changed

    def clear(self) -> None:
        """Forget the room and reset preferences; a returning player starts as a guesser."""
        self.snapshot = None
        self.viewer_team = Team.UNDECIDED
        self.preferences = ViewerPreferences()

    def plan(self, *, full_reset: bool = False) -> RenderPlan:
        if self.snapshot is None:
            return EMPTY_PLAN
        return apply_snapshot(self.snapshot, self.viewer_team, self.preferences, full_reset=full_reset)


@dataclass(frozen=True)
class SessionView:
    """What the UI shows right now: session chrome around the render plan."""

    state: SessionState
    plan: RenderPlan
    overlay: Overlay = Overlay.NONE
    notice: str = ""
    error: str = ""
    timer_text: str = ""
    stats_text: str = ""
    fragment: str = ""
    join_room: str = ""
    join_password: str = ""
    clue_form: dict[str, Any] = field(default_factory=lambda: {"word": "", "count": 1})

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "plan": self.plan.to_dict(),
            "plan_digest": self.plan.plan_digest(),
            "overlay": self.overlay.value,
            "notice": self.notice,
            "error": self.error,
            "timer_text": self.timer_text,
            "stats_text": self.stats_text,
            "fragment": self.fragment,
            "join_form": {"room": self.join_room, "password": self.join_password},
            "clue_form": dict(self.clue_form),
        }


def _response_message(payload: Mapping[str, Any], default: str) -> str:
    message = payload.get("msg") or payload.get("message")
    return str(message) if message else default


class SessionController:
    """Owns the transport and maps each inbound event to a state transition.

    Every handler finishes its full re-render before returning; nothing is
    predicted locally, so preferences change only on confirmed responses.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        fragment: str = "",
        recorder: TranscriptRecorder | None = None,
    ):
        self.transport = transport
        self.recorder = recorder
        self.store = SnapshotStore()
        self.emitter = CommandEmitter(self._send)
        self.state = SessionState.SIGNED_OUT
        self.overlay = Overlay.NONE
        self.notice = ""
        self.error = ""
        self.timer_text = ""
        self.stats_text = ""
        self.session_id: str | None = None
        self.fragment = fragment
        self.join_room_value = extract_from_fragment(fragment, "room")
        self.join_password_value = extract_from_fragment(fragment, "password")
        self.clue_form: dict[str, Any] = {"word": "", "count": 1}
        self.plan: RenderPlan = EMPTY_PLAN
        self._handlers: dict[str, Callable[[Mapping[str, Any]], None]] = {
            "serverStats": self._on_server_stats,
            "joinResponse": partial(self._on_room_response, "joinResponse", "unable to join room"),
            "createResponse": partial(self._on_room_response, "createResponse", "unable to create room"),
            "leaveResponse": self._on_leave_response,
            "timerUpdate": self._on_timer_update,
            "newGameResponse": self._on_new_game_response,
            "afkWarning": self._on_afk_warning,
            "afkKicked": self._on_afk_kicked,
            "serverMessage": self._on_server_message,
            "switchRoleResponse": self._on_switch_role_response,
            "gameState": self._on_game_state,
            "reset": self._on_reset,
        }

    # Outbound -----------------------------------------------------------

    def _send(self, name: str, payload: Mapping[str, Any]) -> None:
        if self.recorder is not None:
            self.recorder.record(Direction.OUTBOUND, name, payload)
        logger.debug("-> %s", name)
        self.transport.emit(name, payload)

    def join_room(self, nickname: str, room: str, password: str) -> Command:
        return self.submit(JoinRoom(nickname=nickname, room=room, password=password))

    def create_room(self, nickname: str, room: str, password: str) -> Command:
        return self.submit(CreateRoom(nickname=nickname, room=room, password=password))

    def declare_clue(self, word: str, count: int | str) -> Command:
        return self.submit(DeclareClue(word=word, count=count))

    def submit(self, command: Command) -> Command:
        """Emit an already-built command, applying its local form side effects."""
        if isinstance(command, (JoinRoom, CreateRoom)):
            self._remember_join_form(command.room, command.password)
        self.emitter.emit(command)
        if isinstance(command, DeclareClue):
            self.clue_form = {"word": "", "count": 1}
        elif isinstance(command, Active) and self.overlay is Overlay.AFK_WARNING:
            self.overlay = Overlay.NONE
        return command

    def confirm_active(self) -> Command:
        """User dismissed the AFK warning."""
        return self.submit(Active())

    def acknowledge_notice(self) -> None:
        if self.overlay is Overlay.NOTICE:
            self.overlay = Overlay.NONE
            self.notice = ""

    def _remember_join_form(self, room: str, password: str) -> None:
        self.join_room_value = room
        self.join_password_value = password

    # Inbound ------------------------------------------------------------

    def pump(self) -> SessionView:
        """Process every queued inbound message in arrival order."""
        for message in self.transport.drain():
            self.dispatch(message)
        return self.view()

    def dispatch(self, message: InboundMessage) -> SessionView:
        return self.handle(message.name, message.payload)

    def handle(self, name: str, payload: Any = None) -> SessionView:
        """Apply one inbound event and return the resulting view."""
        data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
        if self.recorder is not None:
            self.recorder.record(Direction.INBOUND, name, data)
        handler = self._handlers.get(name)
        if handler is None:
            logger.warning("Ignoring unknown inbound event %r", name)
            return self.view()
        logger.debug("<- %s", name)
        handler(data)
        return self.view()

    def view(self) -> SessionView:
        return SessionView(
            state=self.state,
            plan=self.plan,
            overlay=self.overlay,
            notice=self.notice,
            error=self.error,
            timer_text=self.timer_text,
            stats_text=self.stats_text,
            fragment=self.fragment,
            join_room=self.join_room_value,
            join_password=self.join_password_value,
            clue_form=dict(self.clue_form),
        )

    def _rerender(self, *, full_reset: bool = False) -> None:
        self.plan = self.store.plan(full_reset=full_reset)

    def _reject(self, name: str, payload: Mapping[str, Any], default: str) -> None:
        error = CommandRejectedError(name, _response_message(payload, default))
        logger.info("%s rejected: %s", name, error)
        self.error = str(error)

    def _sign_out(self) -> None:
        self.state = SessionState.SIGNED_OUT
        self.store.clear()
        self.timer_text = ""
        self._rerender(full_reset=True)

    def _on_server_stats(self, payload: Mapping[str, Any]) -> None:
        self.stats_text = f"Players: {payload.get('players', 0)} | Rooms: {payload.get('rooms', 0)}"
        session_id = payload.get("sessionId")
        if session_id:
            self.session_id = str(session_id)
            self.transport.remember_session(self.session_id)

    def _on_room_response(self, name: str, default_error: str, payload: Mapping[str, Any]) -> None:
        if not payload.get("success"):
            self._reject(name, payload, default_error)
            return
        self.state = SessionState.IN_ROOM
        self.error = ""
        if self.overlay is Overlay.AFK_WARNING:
            self.overlay = Overlay.NONE
        self.fragment = build_fragment(self.join_room_value, self.join_password_value)

    def _on_leave_response(self, payload: Mapping[str, Any]) -> None:
        if not payload.get("success"):
            self._reject("leaveResponse", payload, "unable to leave room")
            return
        self._sign_out()

    def _on_timer_update(self, payload: Mapping[str, Any]) -> None:
        self.timer_text = f"[{payload.get('timer', '')}]"

    def _on_new_game_response(self, payload: Mapping[str, Any]) -> None:
        if not payload.get("success"):
            self._reject("newGameResponse", payload, "unable to start a new game")
            return
        self._rerender(full_reset=True)

    def _on_afk_warning(self, payload: Mapping[str, Any]) -> None:
        if self.overlay is not Overlay.NOTICE:
            self.overlay = Overlay.AFK_WARNING

    def _on_afk_kicked(self, payload: Mapping[str, Any]) -> None:
        self.overlay = Overlay.NOTICE
        self.notice = KICKED_NOTICE
        self._sign_out()

    def _on_server_message(self, payload: Mapping[str, Any]) -> None:
        self.overlay = Overlay.NOTICE
        self.notice = str(payload.get("msg") or payload.get("message") or "")

    def _on_switch_role_response(self, payload: Mapping[str, Any]) -> None:
        if not payload.get("success"):
            self._reject("switchRoleResponse", payload, "unable to switch role")
            return
        try:
            role = parse_enum(Role, payload.get("role"), "role")
        except MalformedSnapshotError as exc:
            logger.error("switchRoleResponse carried an unknown role: %r", payload.get("role"))
            self.error = str(exc)
            return
        self.store.set_role(role)
        self.error = ""
        self._rerender(full_reset=True)

    def _on_game_state(self, payload: Mapping[str, Any]) -> None:
        if self.state is SessionState.SIGNED_OUT:
            logger.debug("Dropping gameState received while signed out")
            return
        try:
            update = GameStateUpdate.from_payload(payload)
        except MalformedSnapshotError as exc:
            logger.exception("Rejected malformed gameState; keeping the previous snapshot")
            self.error = str(exc)
            return
        logger.debug("gameState snapshot %s", update.snapshot.snapshot_digest()[:12])
        difficulty_changed = self.store.replace(update)
        if update.snapshot.mode is Mode.CASUAL:
            self.timer_text = ""
        self._rerender(full_reset=difficulty_changed)

    def _on_reset(self, payload: Mapping[str, Any]) -> None:
        logger.info("Authority reset the session")
        self._sign_out()
