"""Client sync layer exports: commands, transports, transcripts and config."""

from .command import Command
from .config import ClientConfig
from .errors import CommandRejectedError, InvalidCommandError, MalformedSnapshotError, TransportError, ViewSyncError
from .events import Direction, TranscriptEvent, TranscriptRecorder
from .transport import InboundMessage, LoopbackTransport, SocketIOTransport, Transport

__all__ = [
    "ClientConfig",
    "Command",
    "CommandRejectedError",
    "Direction",
    "InboundMessage",
    "InvalidCommandError",
    "LoopbackTransport",
    "MalformedSnapshotError",
    "SocketIOTransport",
    "TranscriptEvent",
    "TranscriptRecorder",
    "Transport",
    "TransportError",
    "ViewSyncError",
]
