"""Pydantic request schemas for the local bridge API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class RoomRequest(BaseModel):
    """Request body for joining or creating a room."""

    nickname: str
    room: str
    password: str = ""


class CommandRequest(BaseModel):
    """Tagged command body, e.g. `{"type": "clickTile", "i": 0, "j": 3}`."""

    model_config = ConfigDict(extra="allow")

    type: str

    def to_command_dict(self) -> dict[str, Any]:
        return {"type": self.type, **(self.model_extra or {})}
