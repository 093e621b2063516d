"""Connection status model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConnectionStatus(Enum):
    """Health of the switcher connection, as shown to the user."""

    UNKNOWN = "unknown"
    WARNING = "warning"  # connecting, or dropped and waiting to reconnect
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class StatusReport:
    """A status value plus an optional human-readable message."""

    status: ConnectionStatus
    message: str | None = None

    def to_dict(self) -> dict:
        return {"status": self.status.value, "message": self.message}
