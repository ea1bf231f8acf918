"""Process-wide viewer session used by the bridge routes."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any

from codenames.codenames_session import INBOUND_EVENTS, SessionController, SessionView
from viewsync.command import Command
from viewsync.config import ClientConfig
from viewsync.errors import TransportError
from viewsync.events import TranscriptRecorder, write_jsonl
from viewsync.transport import SocketIOTransport, Transport

logger = logging.getLogger(__name__)


def build_transport(config: ClientConfig) -> Transport:
    return SocketIOTransport(config.server_url, INBOUND_EVENTS, socketio_path=config.socketio_path)


class ClientRuntime:
    """One controller plus its transcript, guarded by a lock.

    HTTP handlers run on a thread pool; the lock keeps inbound processing and
    outbound commands strictly sequential.
    """

    def __init__(self, config: ClientConfig, transport: Transport | None = None):
        self.config = config
        self.transport = transport or build_transport(config)
        self.recorder = TranscriptRecorder()
        self.controller = SessionController(self.transport, fragment=config.fragment, recorder=self.recorder)
        self._lock = threading.Lock()

    def start(self) -> bool:
        """Connect to the authority; on failure log it and keep the bridge serving."""
        logger.info("Connecting to %s", self.config.server_url)
        try:
            self.transport.connect()
        except TransportError as exc:
            logger.error("Authority unavailable, continuing offline: %s", exc)
            return False
        return True

    def pump(self) -> SessionView:
        with self._lock:
            return self.controller.pump()

    def join(self, nickname: str, room: str, password: str) -> SessionView:
        with self._lock:
            self.controller.join_room(nickname, room, password)
            return self.controller.pump()

    def create(self, nickname: str, room: str, password: str) -> SessionView:
        with self._lock:
            self.controller.create_room(nickname, room, password)
            return self.controller.pump()

    def submit(self, command: Command) -> SessionView:
        with self._lock:
            self.controller.submit(command)
            return self.controller.pump()

    def confirm_active(self) -> SessionView:
        with self._lock:
            self.controller.confirm_active()
            return self.controller.pump()

    def acknowledge_notice(self) -> SessionView:
        with self._lock:
            self.controller.acknowledge_notice()
            return self.controller.view()

    def transcript(self) -> list[dict[str, Any]]:
        with self._lock:
            return self.recorder.to_list()

    def close(self) -> None:
        """Close the transport and persist the transcript when configured."""
        with self._lock:
            self.transport.close()
            if self.config.transcript_path:
                write_jsonl(Path(self.config.transcript_path), self.recorder.events)
                logger.info("Wrote %d transcript events to %s", len(self.recorder.events), self.config.transcript_path)
