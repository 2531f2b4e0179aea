"""Blocking TCP transport to the board-control process.

The board answers every command with exactly one byte, so the only read
primitive offered here is `read_status()`. Nothing is buffered: a command
is written with `sendall` and the caller blocks on a one-byte `recv`.
"""

import logging
import socket
from typing import Optional

from ledapplet.exceptions import TransportError, wrap_socket_error

logger = logging.getLogger(__name__)

LOOPBACK = "127.0.0.1"


class TcpTransport:
    """
    One TCP stream to the board.

    Not thread-safe. Callers must not interleave `send`/`read_status` pairs
    from several threads.

    Usage::

        transport = TcpTransport(port=27072)
        transport.open()
        transport.send(command.encode())
        code = transport.read_status()
        transport.close()
    """

    def __init__(self, port: int, host: str = LOOPBACK, timeout: Optional[float] = None):
        """
        Initialize the transport (no connection is made yet).

        Args:
            port: Board-control process port
            host: Board-control process host
            timeout: Socket timeout in seconds, None to block indefinitely
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: Optional[socket.socket] = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def open(self) -> None:
        """
        Connect to the board.

        Raises:
            BoardUnreachableError: If the TCP connect fails
        """
        if self._sock is not None:
            logger.warning(f"Transport to {self.host}:{self.port} already open")
            return

        try:
            self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as e:
            logger.error(f"Connect to {self.host}:{self.port} failed: {e}")
            raise wrap_socket_error(e, "connect", self.host, self.port) from e

        logger.info(f"Connected to board at {self.host}:{self.port}")

    def close(self) -> None:
        """Close the stream. Safe to call more than once."""
        if self._sock is None:
            return

        try:
            self._sock.close()
        except OSError as e:
            logger.warning(f"Error closing socket: {e}")
        finally:
            self._sock = None
            logger.info(f"Disconnected from {self.host}:{self.port}")

    def send(self, data: bytes) -> None:
        """
        Write one encoded command.

        Raises:
            TransportError: If the socket is closed or the write fails
        """
        if self._sock is None:
            raise TransportError("send", "not connected", host=self.host, port=self.port)

        try:
            self._sock.sendall(data)
        except OSError as e:
            raise wrap_socket_error(e, "send", self.host, self.port) from e

    def read_status(self) -> int:
        """
        Block until exactly one status byte arrives.

        Returns:
            The byte value (0-255)

        Raises:
            TransportError: If the peer closed the stream, the read failed or timed out
        """
        if self._sock is None:
            raise TransportError("read status", "not connected", host=self.host, port=self.port)

        try:
            data = self._sock.recv(1)
        except OSError as e:
            raise wrap_socket_error(e, "read status", self.host, self.port) from e

        if not data:
            raise TransportError(
                "read status", "connection closed by board", host=self.host, port=self.port
            )
        return data[0]

    def exchange(self, data: bytes) -> int:
        """Send one command and return its status byte."""
        self.send(data)
        return self.read_status()

    def __enter__(self) -> "TcpTransport":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
