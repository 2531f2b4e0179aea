"""Transport layer: TCP link to the board-control process."""

from .tcp import LOOPBACK, TcpTransport

__all__ = ["LOOPBACK", "TcpTransport"]
