"""Switcher connection settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from .transport.tcp_connection import CONNECT_TIMEOUT, DEFAULT_PORT, RECONNECT_INTERVAL

ENV_HOST = "KRAMER_HOST"
ENV_PORT = "KRAMER_PORT"
ENV_RECONNECT_INTERVAL = "KRAMER_RECONNECT_INTERVAL"


@dataclass
class SwitcherConfig:
    """Where the switcher lives and how hard to try reaching it."""

    host: str = ""
    port: int = DEFAULT_PORT
    reconnect_interval: float = RECONNECT_INTERVAL
    connect_timeout: float = CONNECT_TIMEOUT

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SwitcherConfig:
        """Build a config from a host config payload such as ``{"host": "10.0.0.5"}``."""
        return cls(
            host=str(data.get("host") or "").strip(),
            port=int(data.get("port", DEFAULT_PORT)),
            reconnect_interval=float(data.get("reconnect_interval", RECONNECT_INTERVAL)),
            connect_timeout=float(data.get("connect_timeout", CONNECT_TIMEOUT)),
        )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> SwitcherConfig:
        env = os.environ if environ is None else environ
        return cls(
            host=env.get(ENV_HOST, "").strip(),
            port=int(env.get(ENV_PORT, DEFAULT_PORT)),
            reconnect_interval=float(env.get(ENV_RECONNECT_INTERVAL, RECONNECT_INTERVAL)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "host": self.host,
            "port": self.port,
            "reconnect_interval": self.reconnect_interval,
            "connect_timeout": self.connect_timeout,
        }
