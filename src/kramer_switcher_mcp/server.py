"""MCP server entry point for Kramer Protocol 2000 video switchers.

Exposes tools and resources via the Model Context Protocol using the
official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .config import SwitcherConfig
from .instance import SwitcherInstance
from .models.actions import ACTIONS, FrontPanel, SwitchVideo

logger = logging.getLogger(__name__)

CONNECT_WAIT_SECONDS = 3.0

mcp = FastMCP(
    "kramer-switcher",
    instructions="Controls a Kramer Protocol 2000 video switcher over TCP.",
)

# Global switcher state
_instance: SwitcherInstance | None = None


def _get_instance() -> SwitcherInstance:
    """Get the switcher instance, creating an unconfigured one if needed."""
    global _instance
    if _instance is None:
        _instance = SwitcherInstance(SwitcherConfig.from_env())
        _instance.init()
    return _instance


def _send(action_name: str, options: dict[str, Any]) -> dict[str, Any]:
    instance = _get_instance()
    try:
        sent = instance.action(action_name, options)
    except ValueError as e:
        return {"error": str(e)}

    result: dict[str, Any] = {"sent": sent}
    if not sent:
        result["status"] = instance.status.to_dict()
    return result


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def configure(host: str) -> dict[str, Any]:
    """Point the driver at a switcher and connect on TCP port 5000.

    Reconnects only if the host changed or the switcher is not connected.
    Waits briefly for the first connection before reporting status.

    Args:
        host: IPv4 address or hostname of the switcher.
    """
    instance = _get_instance()
    config = SwitcherConfig(
        host=host.strip(),
        port=instance.config.port,
        reconnect_interval=instance.config.reconnect_interval,
        connect_timeout=instance.config.connect_timeout,
    )
    instance.update_config(config)
    if config.host:
        instance.manager.wait_connected(CONNECT_WAIT_SECONDS)

    return {
        "host": config.host,
        "connected": instance.manager.is_connected(),
        **instance.status.to_dict(),
    }


@mcp.tool()
def get_status() -> dict[str, Any]:
    """Report the connection status (unknown, warning, ok, error)."""
    instance = _get_instance()
    return {
        "host": instance.config.host,
        "connected": instance.manager.is_connected(),
        **instance.status.to_dict(),
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the switcher and stop reconnecting."""
    global _instance
    if _instance is None:
        return {"disconnected": True}
    _instance.destroy()
    _instance = None
    return {"disconnected": True}


# ─── SWITCHER TOOLS ──────────────────────────────────────────────────

@mcp.tool()
def switch_video(input: int) -> dict[str, Any]:
    """Route a video input to the output.

    Args:
        input: Input number 1-4, or 0 to mute the output.
    """
    return _send(SwitchVideo.NAME, {"input": input})


@mcp.tool()
def front_panel(locked: bool) -> dict[str, Any]:
    """Lock or unlock the switcher's front panel buttons.

    Args:
        locked: True to lock the panel, False to unlock it.
    """
    return _send(FrontPanel.NAME, {"status": int(locked)})


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("kramer://status")
def resource_status() -> str:
    """Current connection status."""
    return json.dumps(get_status())


@mcp.resource("kramer://actions")
def resource_actions() -> str:
    """Available actions and their option choices."""
    return json.dumps(ACTIONS)


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    _get_instance()
    try:
        mcp.run(transport="stdio")
    finally:
        if _instance is not None:
            _instance.destroy()


if __name__ == "__main__":
    main()
