"""Codenames package exports."""

from .codenames_board import TileMarker, TileRenderDescriptor, render_board
from .codenames_commands import CommandEmitter, command_from_dict
from .codenames_info import InfoPanelState, reconcile
from .codenames_log import DisplayLine, render_log
from .codenames_session import RenderPlan, SessionController, SessionState, SessionView, apply_snapshot
from .codenames_state import Difficulty, Role, Snapshot, Team, TileType
from .codenames_visibility import DisplayType, project

__all__ = [
    "CommandEmitter",
    "Difficulty",
    "DisplayLine",
    "DisplayType",
    "InfoPanelState",
    "RenderPlan",
    "Role",
    "SessionController",
    "SessionState",
    "SessionView",
    "Snapshot",
    "Team",
    "TileMarker",
    "TileRenderDescriptor",
    "TileType",
    "apply_snapshot",
    "command_from_dict",
    "project",
    "reconcile",
    "render_board",
    "render_log",
]
