"""Tests for the MCP tool functions."""

from __future__ import annotations

import json
import sys
from unittest.mock import MagicMock, patch

import pytest

from kramer_switcher_mcp.config import SwitcherConfig
from kramer_switcher_mcp.instance import SwitcherInstance


def _get_server_module():
    """Import server module with FastMCP mocked to avoid init issues."""
    mock_fastmcp_cls = MagicMock()
    mock_fastmcp_instance = MagicMock()
    # Make the @mcp.tool() decorator a no-op that returns the function unchanged
    mock_fastmcp_instance.tool.return_value = lambda fn: fn
    mock_fastmcp_instance.resource.return_value = lambda fn: fn
    mock_fastmcp_cls.return_value = mock_fastmcp_instance

    with patch.dict(sys.modules, {}):
        with patch("mcp.server.fastmcp.FastMCP", mock_fastmcp_cls):
            # Remove cached server module so it re-imports with our mock
            sys.modules.pop("kramer_switcher_mcp.server", None)
            import kramer_switcher_mcp.server as server_mod

    return server_mod


@pytest.fixture
def server(transport_factory):
    server_mod = _get_server_module()
    server_mod._instance = SwitcherInstance(
        SwitcherConfig(host="10.0.0.5"),
        transport_factory=transport_factory,
    )
    server_mod._instance.init()
    with patch.object(server_mod, "CONNECT_WAIT_SECONDS", 0):
        yield server_mod
    if server_mod._instance is not None:
        server_mod._instance.destroy()


def test_switch_video_sends_frame(server, transports):
    transports[0].fire_connect()
    result = server.switch_video(3)
    assert result == {"sent": True}
    assert transports[0].written == [bytes([1, 131, 128, 129, 10])]


def test_front_panel_sends_frame(server, transports):
    transports[0].fire_connect()
    assert server.front_panel(True) == {"sent": True}
    assert server.front_panel(False) == {"sent": True}
    assert transports[0].written == [
        bytes([30, 129, 128, 129, 10]),
        bytes([30, 128, 128, 129, 10]),
    ]


def test_switch_video_while_disconnected(server, transports):
    result = server.switch_video(1)
    assert result["sent"] is False
    assert result["status"] == {"status": "warning", "message": "Connecting"}


def test_switch_video_out_of_range(server, transports):
    transports[0].fire_connect()
    result = server.switch_video(7)
    assert "error" in result
    assert transports[0].written == []


def test_configure_same_host_connected(server, transports):
    transports[0].fire_connect()
    result = server.configure("10.0.0.5")
    assert result["connected"] is True
    assert result["status"] == "ok"
    assert len(transports) == 1


def test_configure_new_host(server, transports):
    transports[0].fire_connect()
    result = server.configure("10.0.0.8")
    assert result["host"] == "10.0.0.8"
    assert result["connected"] is False
    assert result["status"] == "warning"
    assert transports[0].destroyed
    assert transports[1].host == "10.0.0.8"


def test_get_status_after_error(server, transports):
    transports[0].fire_error(ConnectionRefusedError("Connection refused"))
    status = server.get_status()
    assert status == {
        "host": "10.0.0.5",
        "connected": False,
        "status": "error",
        "message": "Connection refused",
    }


def test_status_resource_is_json(server, transports):
    transports[0].fire_connect()
    data = json.loads(server.resource_status())
    assert data["status"] == "ok"


def test_actions_resource_lists_choices(server):
    data = json.loads(server.resource_actions())
    assert set(data) == {"switch_video", "front_panel"}
    assert len(data["switch_video"]["options"][0]["choices"]) == 5


def test_disconnect(server, transports):
    assert server.disconnect() == {"disconnected": True}
    assert transports[0].destroyed
    assert server._instance is None
    assert server.disconnect() == {"disconnected": True}
