"""Reconnecting TCP connection to the switcher.

The connection runs on a background daemon thread which connects, drains
whatever the device sends back, and reconnects on a fixed interval after a
failure. Lifecycle changes are reported through subscribed callbacks, all
invoked from the worker thread:

- ``connect()``: the socket is up
- ``error(exc)``: a connect attempt or an established socket failed
- ``status_change(status, message)``: any other lifecycle signal
- ``data(bytes)``: bytes received from the device
"""

from __future__ import annotations

import logging
import select
import socket
import threading
from collections import defaultdict
from typing import Callable

from ..models.status import ConnectionStatus

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5000
RECONNECT_INTERVAL = 5.0
CONNECT_TIMEOUT = 3.0
POLL_INTERVAL = 0.2
RECV_SIZE = 1024

EVENTS = ("connect", "error", "status_change", "data")


class TCPConnection:
    """Manages a single TCP socket with interval-based reconnection.

    Usage::

        conn = TCPConnection("192.168.1.39")
        conn.on("connect", lambda: print("up"))
        conn.connect()
        conn.send(frame_bytes)
        conn.destroy()
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        reconnect_interval: float = RECONNECT_INTERVAL,
        connect_timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self._host = host
        self._port = port
        self._reconnect_interval = reconnect_interval
        self._connect_timeout = connect_timeout
        self._sock: socket.socket | None = None
        self._connected = False
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._listeners: dict[str, list[Callable]] = defaultdict(list)

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def destroyed(self) -> bool:
        return self._stop.is_set()

    def on(self, event: str, callback: Callable) -> None:
        """Subscribe ``callback`` to a lifecycle event."""
        if event not in EVENTS:
            raise ValueError(f"Unknown event '{event}'. Valid: {list(EVENTS)}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            try:
                callback(*args)
            except Exception:
                logger.exception("Error in %s listener", event)

    def connect(self) -> None:
        """Start the background worker. Calling it again is a no-op."""
        if self._thread is not None or self._stop.is_set():
            return
        self._thread = threading.Thread(
            target=self._run,
            name=f"tcp-{self._host}:{self._port}",
            daemon=True,
        )
        self._thread.start()

    def send(self, data: bytes) -> bool:
        """Write ``data`` without blocking.

        Returns:
            True if every byte was handed to the kernel, False if the socket
            is down or its send buffer is full.
        """
        with self._lock:
            sock = self._sock
            if sock is None or not self._connected:
                return False
            try:
                sent = sock.send(data)
            except (BlockingIOError, InterruptedError):
                return False
            except OSError as e:
                logger.debug("Send to %s failed: %s", self._host, e)
                return False
        return sent == len(data)

    def destroy(self) -> None:
        """Stop reconnecting and close the socket. Safe to call repeatedly."""
        self._stop.set()
        self._close_socket()

    def _close_socket(self) -> None:
        with self._lock:
            sock, self._sock = self._sock, None
            self._connected = False
        if sock is not None:
            try:
                sock.close()
            except OSError as e:
                logger.debug("Error closing socket: %s", e)

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                sock = socket.create_connection(
                    (self._host, self._port), timeout=self._connect_timeout
                )
            except OSError as e:
                if not self._stop.is_set():
                    self._emit("error", e)
                self._stop.wait(self._reconnect_interval)
                continue

            sock.setblocking(False)
            with self._lock:
                if self._stop.is_set():
                    sock.close()
                    return
                self._sock = sock
                self._connected = True

            logger.debug("Connected to %s:%d", self._host, self._port)
            self._emit("connect")
            self._drain(sock)
            self._close_socket()

            if not self._stop.is_set():
                self._stop.wait(self._reconnect_interval)

    def _drain(self, sock: socket.socket) -> None:
        """Read from ``sock`` until it closes, fails, or we are destroyed."""
        while not self._stop.is_set():
            try:
                readable, _, _ = select.select([sock], [], [], POLL_INTERVAL)
                if not readable:
                    continue
                data = sock.recv(RECV_SIZE)
            except (BlockingIOError, InterruptedError):
                continue
            except (OSError, ValueError) as e:
                # ValueError: the socket was closed underneath select()
                if not self._stop.is_set():
                    self._emit("error", e if isinstance(e, OSError) else OSError(str(e)))
                return

            if not data:
                if not self._stop.is_set():
                    self._emit("status_change", ConnectionStatus.WARNING, "Disconnected")
                return
            self._emit("data", data)
