"""Client configuration and environment loading helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DOTENV_LOADED = False


def load_dotenv(path: str | Path = ".env") -> None:
    """Load environment variables from a .env file without overriding existing values."""
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return

    dotenv_path = Path(path)
    if not dotenv_path.exists():
        _DOTENV_LOADED = True
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        if line.startswith("export "):
            line = line[7:].strip()
        key, value = (part.strip() for part in line.split("=", 1))
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        os.environ.setdefault(key, value)

    _DOTENV_LOADED = True


def getenv_any(*names: str, default: str | None = None) -> str | None:
    """Return first defined env var from a list of candidate names."""
    load_dotenv()
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return default


@dataclass(frozen=True)
class ClientConfig:
    """Runtime configuration for one viewer session."""

    server_url: str = "http://localhost:8080"
    socketio_path: str = "socket.io"
    fragment: str = ""
    transcript_path: str | Path | None = None
    log_level: str = "INFO"
    bridge_host: str = "127.0.0.1"
    bridge_port: int = 8000

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from `CODENAMES_*` environment variables."""
        defaults = cls()
        port = getenv_any("CODENAMES_BRIDGE_PORT")
        try:
            bridge_port = int(port) if port is not None else defaults.bridge_port
        except ValueError as exc:
            raise ValueError(f"CODENAMES_BRIDGE_PORT must be an integer; received {port!r}.") from exc
        return cls(
            server_url=getenv_any("CODENAMES_SERVER_URL", default=defaults.server_url) or defaults.server_url,
            socketio_path=getenv_any("CODENAMES_SOCKETIO_PATH", default=defaults.socketio_path) or defaults.socketio_path,
            fragment=getenv_any("CODENAMES_FRAGMENT", default="") or "",
            transcript_path=getenv_any("CODENAMES_TRANSCRIPT_PATH"),
            log_level=(getenv_any("CODENAMES_LOG_LEVEL", default=defaults.log_level) or defaults.log_level).upper(),
            bridge_host=getenv_any("CODENAMES_BRIDGE_HOST", default=defaults.bridge_host) or defaults.bridge_host,
            bridge_port=bridge_port,
        )
