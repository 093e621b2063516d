"""Connection manager for the switcher.

Owns at most one live :class:`TCPConnection`, mirrors its lifecycle events
into a :class:`ConnectionStatus`, and relays outbound frames.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..models.status import ConnectionStatus, StatusReport
from .tcp_connection import DEFAULT_PORT, RECONNECT_INTERVAL, CONNECT_TIMEOUT, TCPConnection

StatusCallback = Callable[[StatusReport], None]
TransportFactory = Callable[..., TCPConnection]


class ConnectionManager:
    """Keeps a single TCP connection to the switcher alive.

    Reconnection is left to the transport; the manager only reacts to the
    events it emits. Status and the socket handle are guarded by one lock,
    since actions and socket events arrive on different threads.

    Args:
        logger: Diagnostics sink. Defaults to this module's logger.
        on_status: Called with a :class:`StatusReport` on every status change.
        transport_factory: Creates the transport; called with
            ``(host, port, reconnect_interval=..., connect_timeout=...)``.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        on_status: StatusCallback | None = None,
        transport_factory: TransportFactory = TCPConnection,
        port: int = DEFAULT_PORT,
        reconnect_interval: float = RECONNECT_INTERVAL,
        connect_timeout: float = CONNECT_TIMEOUT,
    ) -> None:
        self._log = logger or logging.getLogger(__name__)
        self._on_status = on_status
        self._transport_factory = transport_factory
        self._port = port
        self._reconnect_interval = reconnect_interval
        self._connect_timeout = connect_timeout

        self._lock = threading.RLock()
        self._host = ""
        self._socket: TCPConnection | None = None
        self._status = StatusReport(ConnectionStatus.UNKNOWN)
        self._connected_event = threading.Event()

    @property
    def host(self) -> str:
        return self._host

    @property
    def status(self) -> ConnectionStatus:
        return self._status.status

    @property
    def message(self) -> str | None:
        return self._status.message

    @property
    def report(self) -> StatusReport:
        return self._status

    def configure(self, host: str | None) -> None:
        """Point the manager at ``host``, reconnecting only if needed."""
        host = (host or "").strip()
        with self._lock:
            if host == self._host and self.is_connected():
                return
            self._host = host
            self._connect()

    def _connect(self) -> None:
        self._teardown()
        self._connected_event = threading.Event()

        if not self._host:
            self._set_status(ConnectionStatus.UNKNOWN)
            return

        self._set_status(ConnectionStatus.WARNING, "Connecting")

        sock = self._transport_factory(
            self._host,
            self._port,
            reconnect_interval=self._reconnect_interval,
            connect_timeout=self._connect_timeout,
        )
        connected_event = self._connected_event
        sock.on("connect", lambda: self._handle_connect(sock, connected_event))
        sock.on("error", lambda err: self._handle_error(sock, err))
        sock.on(
            "status_change",
            lambda status, message=None: self._handle_status_change(sock, status, message),
        )
        self._socket = sock
        sock.connect()

    def _handle_connect(self, sock: TCPConnection, connected_event: threading.Event) -> None:
        with self._lock:
            if sock is not self._socket:
                return
            self._set_status(ConnectionStatus.OK)
        self._log.debug("Connected")
        connected_event.set()

    def _handle_error(self, sock: TCPConnection, err: BaseException) -> None:
        with self._lock:
            if sock is not self._socket:
                return
            # Only log on entering ERROR, so repeated reconnect failures stay quiet
            if self._status.status is not ConnectionStatus.ERROR:
                self._log.error("Network error: %s", err)
                self._set_status(ConnectionStatus.ERROR, str(err))

    def _handle_status_change(
        self, sock: TCPConnection, status: ConnectionStatus, message: str | None
    ) -> None:
        with self._lock:
            if sock is not self._socket:
                return
            self._set_status(status, message)

    def _set_status(self, status: ConnectionStatus, message: str | None = None) -> None:
        report = StatusReport(status, message)
        if report == self._status:
            return
        self._status = report
        if self._on_status is not None:
            try:
                self._on_status(report)
            except Exception:
                self._log.exception("Status callback failed")

    def send(self, frame: bytes) -> bool:
        """Send ``frame`` if connected.

        Returns:
            True if the frame was written, False otherwise. Never raises.
        """
        with self._lock:
            if not self.is_connected():
                self._log.debug("Socket not connected")
                return False
            self._log.debug("sending %s to %s", frame.hex(" "), self._host)
            try:
                return bool(self._socket.send(frame))
            except Exception as e:
                self._log.debug("Send failed: %s", e)
                return False

    def is_connected(self) -> bool:
        sock = self._socket
        return sock is not None and sock.connected

    def wait_connected(self, timeout: float | None = None) -> bool:
        """Block until the current connection attempt first succeeds.

        Returns:
            True once connected, False if ``timeout`` elapsed first.
        """
        return self._connected_event.wait(timeout)

    def shutdown(self) -> None:
        """Destroy the socket, if any. Safe to call repeatedly."""
        with self._lock:
            self._teardown()

    def _teardown(self) -> None:
        sock, self._socket = self._socket, None
        if sock is not None:
            sock.destroy()
