"""Applet session: one TCP connection bound to one applet number.

Session Lifecycle
=================

::

    AppletSession.create(port, app_num, separator)
          │
          │  validate app_num           (no I/O on failure)
          │  connect                    BoardUnreachableError
          │  send CreateApplet
          │  read 1 status byte         non-zero -> HandshakeRefusedError
          ↓
      ┌────────┐  set_grid / set_point / set_bar      (local only)
      │Created │  write_grid / write_bar              (1 command, 1 status byte)
      └────────┘  recoverable StatusError             (still Created)
          │
          │  close(), TransportError or fatal StatusError
          ↓
       ┌──────┐
       │ Dead │   no reconnection; create a new session
       └──────┘

The grid and bar are local mirrors. They are never read back from the
board, and nothing reaches the board until `write_grid()` / `write_bar()`
is called. Each write retransmits the full mirror.

Threading
---------

A session is not thread-safe and holds no lock. Within one session each
write blocks until its status byte has arrived, so the board always sees
command N complete before command N+1 is sent. Calling into the same
session from several threads at once is undefined.
"""

import logging
from typing import Optional

import numpy as np
import numpy.typing as npt

from ledapplet.exceptions import (
    ErrorContext,
    HandshakeRefusedError,
    InvalidAppletNumberError,
    SeparatorNotVariableError,
    TransportError,
    raise_for_status,
)
from ledapplet.models.config import ClientConfig
from ledapplet.models.grid import Grid, SeparatorBar
from ledapplet.protocol.command import (
    Command,
    build_create_applet,
    build_update_bar,
    build_update_grid,
)
from ledapplet.protocol.taxonomy import ProtocolRevision, SeparatorKind, StatusCode, get_revision
from ledapplet.transport.tcp import LOOPBACK, TcpTransport

logger = logging.getLogger(__name__)


class AppletSession:
    """
    Client-side handle for one applet on the LED matrix.

    Use `AppletSession.create()` (or `from_config()`) rather than the
    constructor; the constructor expects a transport whose handshake has
    already succeeded.

    Example:
        ```python
        with AppletSession.create(27072, 1, SeparatorKind.SOLID) as applet:
            applet.set_point(0, 0, 255)
            applet.write_grid()
        ```
    """

    def __init__(
        self,
        transport: TcpTransport,
        app_num: int,
        separator: SeparatorKind,
        revision: ProtocolRevision,
    ):
        self._transport = transport
        self.app_num = app_num
        self.separator = SeparatorKind(separator)
        self.revision = revision
        self._grid = Grid(revision.rows, revision.columns)
        self._bar = SeparatorBar(revision.columns)

    # =================================================================
    # Creation
    # =================================================================

    @classmethod
    def create(
        cls,
        port: int,
        app_num: int,
        separator: SeparatorKind,
        *,
        host: str = LOOPBACK,
        revision: ProtocolRevision | str | None = None,
        timeout: Optional[float] = None,
    ) -> "AppletSession":
        """
        Connect to the board and claim an applet.

        Args:
            port: Board-control process port
            app_num: Applet to claim (0 = status row, 1..max = panels)
            separator: Separator rendering, fixed for the session's lifetime
            host: Board-control process host
            revision: Protocol revision name or object (default revision if None)
            timeout: Optional socket timeout in seconds

        Returns:
            A session with zeroed grid and bar mirrors

        Raises:
            InvalidAppletNumberError: app_num outside the revision's range (no connection made)
            BoardUnreachableError: The TCP connect failed
            HandshakeRefusedError: The board answered CreateApplet with a non-zero status
            TransportError: The connection failed during the handshake
        """
        revision = get_revision(revision)
        separator = SeparatorKind(separator)

        if not revision.is_valid_app_num(app_num):
            raise InvalidAppletNumberError(app_num, revision.max_app_num)

        transport = TcpTransport(port, host=host, timeout=timeout)

        with ErrorContext(f"create applet {app_num}", logger):
            transport.open()
            try:
                command = build_create_applet(app_num, separator)
                code = transport.exchange(command.encode())
            except BaseException:
                transport.close()
                raise

            status = revision.decode_status(code)
            if status is not StatusCode.SUCCESS:
                transport.close()
                raise HandshakeRefusedError(app_num, code, status, host=host, port=port)

        logger.info(
            f"Created applet {app_num} (separator={separator.name}, revision={revision.name})"
        )
        return cls(transport, app_num, separator, revision)

    @classmethod
    def from_config(
        cls, config: ClientConfig, app_num: int, separator: SeparatorKind
    ) -> "AppletSession":
        """Create a session using the endpoint, revision and timeout from a ClientConfig."""
        return cls.create(
            config.port,
            app_num,
            separator,
            host=config.host,
            revision=config.revision,
            timeout=config.timeout,
        )

    # =================================================================
    # Local mirror
    # =================================================================

    @property
    def rows(self) -> int:
        return self._grid.rows

    @property
    def columns(self) -> int:
        return self._grid.columns

    def set_grid(self, values) -> None:
        """
        Replace the whole grid mirror. No network I/O.

        Args:
            values: rows x columns nested sequence or array of 0-255 integers
        """
        self._grid.set_all(values)

    def set_point(self, row: int, col: int, value: int) -> None:
        """
        Set one grid pixel. No network I/O.

        Raises:
            InvalidRowError: row outside [0, rows)
            InvalidColumnError: col outside [0, columns)
        """
        self._grid.set_point(row, col, value)

    def get_grid(self) -> npt.NDArray[np.uint8]:
        """Copy of the grid mirror, shape (rows, columns)."""
        return self._grid.to_array()

    def set_bar(self, values) -> None:
        """
        Replace the separator mirror. No network I/O.

        The separator kind is not checked here; `write_bar()` checks it.
        """
        self._bar.set_all(values)

    def get_bar(self) -> npt.NDArray[np.uint8]:
        """Copy of the separator mirror, length columns."""
        return self._bar.to_array()

    # =================================================================
    # Board writes
    # =================================================================

    def write_grid(self) -> None:
        """
        Send the full grid mirror and wait for its status byte.

        Raises:
            StatusError: Subclass matching a non-zero status byte
            TransportError: The connection failed
        """
        self._send(build_update_grid(self.app_num, self._grid.to_array()))

    def write_bar(self) -> None:
        """
        Send the separator mirror and wait for its status byte.

        Raises:
            SeparatorNotVariableError: The separator is board-rendered (no I/O)
            StatusError: Subclass matching a non-zero status byte
            TransportError: The connection failed
        """
        if self.separator is not SeparatorKind.VARIABLE:
            raise SeparatorNotVariableError(self.separator)

        self._send(build_update_bar(self.app_num, self._bar.to_array()))

    def _send(self, command: Command) -> None:
        try:
            code = self._transport.exchange(command.encode())
        except TransportError:
            self._transport.close()
            raise


        logger.debug(f"{command!r} -> status {code}")
        raise_for_status(
            code, self.revision, app_num=self.app_num, opcode=command.opcode.value
        )

    # =================================================================
    # Teardown
    # =================================================================

    @property
    def closed(self) -> bool:
        return not self._transport.connected

    def close(self) -> None:
        """Close the connection. The session is dead afterwards."""
        self._transport.close()

    def __enter__(self) -> "AppletSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"AppletSession(app_num={self.app_num}, separator={self.separator.name}, "
            f"revision={self.revision.name}, {state})"
        )
