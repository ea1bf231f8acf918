"""Message channel adapters between the session and the authority."""

from __future__ import annotations

import logging
import queue
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError

from .errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InboundMessage:
    """One named event delivered by the authority."""

    name: str
    payload: Any = None


class Transport(ABC):
    """Bidirectional channel with named events.

    Inbound events are queued and handed out by `drain()` in arrival order,
    so whoever owns the transport processes them on a single thread.
    """

    @abstractmethod
    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        """Send a named command; fire-and-forget."""

    @abstractmethod
    def drain(self) -> list[InboundMessage]:
        """Return and clear every inbound message received so far."""

    def connect(self) -> None:
        """Open the underlying connection, if there is one."""

    def remember_session(self, session_id: str) -> None:
        """Keep the authority-issued session id for the next connect."""

    def close(self) -> None:
        """Release the underlying connection."""


class LoopbackTransport(Transport):
    """In-memory channel: records emitted commands, replays queued events."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []
        self._inbox: list[InboundMessage] = []
        self.closed = False

    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        if self.closed:
            raise TransportError("Transport is closed.")
        self.sent.append((name, dict(payload)))

    def deliver(self, name: str, payload: Any = None) -> None:
        """Queue an inbound event as if the authority had pushed it."""
        self._inbox.append(InboundMessage(name=name, payload=payload))

    def drain(self) -> list[InboundMessage]:
        pending, self._inbox = self._inbox, []
        return pending

    def close(self) -> None:
        self.closed = True


class SocketIOTransport(Transport):
    """socket.io client connection to the game authority."""

    def __init__(
        self,
        url: str,
        inbound_events: Iterable[str],
        *,
        socketio_path: str = "socket.io",
        session_id: str | None = None,
        client: socketio.Client | None = None,
    ):
        self.url = url
        self.socketio_path = socketio_path
        self.session_id = session_id
        self._client = client or socketio.Client(reconnection=True)
        self._inbox: queue.SimpleQueue[InboundMessage] = queue.SimpleQueue()
        for name in inbound_events:
            self._client.on(name, self._make_handler(name))

    def _make_handler(self, name: str):
        def _handler(*args: Any) -> None:
            # socket.io may run handlers on worker threads; only enqueue here.
            self._inbox.put(InboundMessage(name=name, payload=args[0] if args else None))

        return _handler

    def connect(self) -> None:
        """Open the connection, reusing the session id when one is known."""
        url = self.url
        if self.session_id:
            url = f"{url}?{urlencode({'sessionId': self.session_id})}"
        try:
            self._client.connect(url, socketio_path=self.socketio_path)
        except SocketIOConnectionError as exc:
            raise TransportError(f"Unable to connect to {self.url}: {exc}") from exc
        logger.info("Connected to %s", self.url)

    def remember_session(self, session_id: str) -> None:
        self.session_id = session_id

    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        if not self._client.connected:
            raise TransportError(f"Cannot emit {name!r}: not connected.")
        self._client.emit(name, dict(payload))

    def drain(self) -> list[InboundMessage]:
        pending: list[InboundMessage] = []
        while True:
            try:
                pending.append(self._inbox.get_nowait())
            except queue.Empty:
                return pending

    def close(self) -> None:
        if self._client.connected:
            self._client.disconnect()
            logger.info("Disconnected from %s", self.url)
