"""Base abstraction for outbound commands sent to the authority."""

from __future__ import annotations

from abc import ABC
from dataclasses import asdict, is_dataclass
from typing import Any, ClassVar, Mapping, Self

from .errors import InvalidCommandError
from .serialize import to_serializable


class Command(ABC):
    """A named message carrying one discrete viewer intent."""

    command_name: ClassVar[str] = "command"

    def payload(self) -> dict[str, Any]:
        """Return the wire payload (without the command name)."""
        if is_dataclass(self):
            return {key: to_serializable(value) for key, value in asdict(self).items()}
        return {}

    def to_dict(self) -> dict[str, Any]:
        """Return the payload tagged with its command name."""
        data = self.payload()
        data["type"] = self.command_name
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build the command from a tagged or untagged payload."""
        kwargs = {key: value for key, value in data.items() if key != "type"}
        try:
            return cls(**kwargs)  # type: ignore[call-arg]
        except TypeError as exc:
            raise InvalidCommandError(f"Bad payload for {cls.command_name}: {exc}") from exc
