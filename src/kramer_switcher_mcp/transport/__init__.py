"""Transport layer: reconnecting TCP socket and the connection manager."""

from .tcp_connection import TCPConnection
from .connection_manager import ConnectionManager
