"""FastAPI bridge exposing the viewer session to a local browser UI."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from bridge.runtime import ClientRuntime
from bridge.schemas import CommandRequest, RoomRequest
from codenames.codenames_commands import command_from_dict
from viewsync.config import ClientConfig
from viewsync.errors import InvalidCommandError, TransportError
from viewsync.serialize import json_dumps

config = ClientConfig.from_env()
logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

runtime = ClientRuntime(config)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    runtime.start()
    try:
        yield
    finally:
        runtime.close()


app = FastAPI(title="Codenames Viewer Bridge", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""
    return {"status": "ok"}


@app.get("/api/view")
def get_view() -> dict[str, Any]:
    """Process pending inbound events and return the current view."""
    return runtime.pump().to_dict()


def _run(action, *args: Any) -> dict[str, Any]:
    try:
        return action(*args).to_dict()
    except InvalidCommandError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    except TransportError as exc:
        logger.error("Transport failure: %s", exc)
        raise HTTPException(status_code=503, detail=exc.to_dict()) from exc


@app.post("/api/session/join")
def join_room(request: RoomRequest) -> dict[str, Any]:
    """Ask the authority to join an existing room."""
    return _run(runtime.join, request.nickname, request.room, request.password)


@app.post("/api/session/create")
def create_room(request: RoomRequest) -> dict[str, Any]:
    """Ask the authority to create a room and join it."""
    return _run(runtime.create, request.nickname, request.room, request.password)


@app.post("/api/command")
def submit_command(request: CommandRequest) -> dict[str, Any]:
    """Emit one typed command, e.g. `{"type": "clickTile", "i": 1, "j": 2}`."""
    try:
        command = command_from_dict(request.to_command_dict())
    except InvalidCommandError as exc:
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc
    return _run(runtime.submit, command)


@app.post("/api/overlay/active")
def confirm_active() -> dict[str, Any]:
    """Dismiss the AFK warning and tell the authority the viewer is back."""
    return _run(runtime.confirm_active)


@app.post("/api/overlay/acknowledge")
def acknowledge_notice() -> dict[str, Any]:
    """Dismiss the notice overlay."""
    return runtime.acknowledge_notice().to_dict()


@app.get("/api/transcript", response_model=None)
def get_transcript(format: str = Query(default="array")) -> Any:
    """Return the session transcript as array (default) or JSONL text."""
    events = runtime.transcript()
    if format == "jsonl":
        text = "\n".join(json_dumps(event) for event in events)
        return PlainTextResponse(content=text, media_type="application/jsonl")
    if format != "array":
        raise HTTPException(status_code=400, detail=f"Unsupported format: {format!r}")
    return events


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bridge.main:app", host=config.bridge_host, port=config.bridge_port, reload=True)
