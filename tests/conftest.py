"""Shared fixtures: a scriptable stand-in for TCPConnection."""

from __future__ import annotations

from collections import defaultdict

import pytest


class FakeTransport:
    """Records writes and lets tests fire lifecycle events by hand."""

    def __init__(self, host, port, reconnect_interval=None, connect_timeout=None):
        self.host = host
        self.port = port
        self.reconnect_interval = reconnect_interval
        self.connected = False
        self.started = False
        self.destroyed = False
        self.written: list[bytes] = []
        self._listeners = defaultdict(list)

    def on(self, event, callback):
        self._listeners[event].append(callback)

    def connect(self):
        self.started = True

    def send(self, data):
        self.written.append(data)
        return True

    def destroy(self):
        self.destroyed = True
        self.connected = False

    # Event triggers

    def fire_connect(self):
        self.connected = True
        for cb in self._listeners["connect"]:
            cb()

    def fire_error(self, err):
        self.connected = False
        for cb in self._listeners["error"]:
            cb(err)

    def fire_status_change(self, status, message=None):
        for cb in self._listeners["status_change"]:
            cb(status, message)


@pytest.fixture
def transports():
    """List of every FakeTransport created, in creation order."""
    return []


@pytest.fixture
def transport_factory(transports):
    def factory(*args, **kwargs):
        transport = FakeTransport(*args, **kwargs)
        transports.append(transport)
        return transport
    return factory
