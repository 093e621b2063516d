"""Host lifecycle adapter for the switcher.

Maps the host's callbacks (init, config update, destroy, action) onto the
connection manager and the command encoder.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import SwitcherConfig
from .models.actions import decode_action
from .models.status import StatusReport
from .transport.connection_manager import ConnectionManager, StatusCallback, TransportFactory
from .transport.tcp_connection import TCPConnection

logger = logging.getLogger(__name__)


class SwitcherInstance:
    """One configured switcher, as seen by the host."""

    def __init__(
        self,
        config: SwitcherConfig | None = None,
        on_status: StatusCallback | None = None,
        transport_factory: TransportFactory = TCPConnection,
    ) -> None:
        self.config = config or SwitcherConfig()
        self._on_status = on_status
        self.manager = ConnectionManager(
            logger=logger,
            on_status=self._report_status,
            transport_factory=transport_factory,
            port=self.config.port,
            reconnect_interval=self.config.reconnect_interval,
            connect_timeout=self.config.connect_timeout,
        )

    def _report_status(self, report: StatusReport) -> None:
        logger.info(
            "Status: %s%s",
            report.status.value,
            f" ({report.message})" if report.message else "",
        )
        if self._on_status is not None:
            self._on_status(report)

    def init(self) -> None:
        self.manager.configure(self.config.host)

    def update_config(self, config: SwitcherConfig) -> None:
        """Apply new settings, reconnecting if the host changed or we are down."""
        if self.config.host != config.host or not self.manager.is_connected():
            self.manager.configure(config.host)
        self.config = config

    def destroy(self) -> None:
        logger.debug("destroy %s", self.config.host or "(unconfigured)")
        self.manager.shutdown()

    def action(self, name: str, options: dict[str, Any] | None = None) -> bool:
        """Run a host action.

        Returns:
            True if the command frame was written to the switcher.

        Raises:
            ValueError: If the action is unknown or its options are out of range.
        """
        action = decode_action(name, options)
        return self.manager.send(action.to_frame())

    @property
    def status(self) -> StatusReport:
        return self.manager.report
