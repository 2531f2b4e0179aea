"""Connection-level exceptions.

This module defines exceptions for the TCP link to the board process:
- BoardConnectionError: Base class for connection errors
- BoardUnreachableError: The TCP connect itself failed
- HandshakeRefusedError: The board answered CreateApplet with a non-zero status
- TransportError: The socket failed mid-exchange (closed, partial read, timeout)
"""

from typing import Optional

from ledapplet.protocol.taxonomy import StatusCode

from .base import LedAppletError


class BoardConnectionError(LedAppletError):
    """Connection to the board process failed or was lost."""

    def __init__(
        self,
        user_message: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        **kwargs
    ):
        super().__init__(user_message, **kwargs)
        self.host = host
        self.port = port


class BoardUnreachableError(BoardConnectionError):
    """Nothing accepted the TCP connection."""

    def __init__(self, host: str, port: int, original_error: Optional[str] = None):
        """
        Initialize board-unreachable error.

        Args:
            host: Host the client tried to reach
            port: Port the client tried to reach
            original_error: The socket error message
        """
        user_msg = f"Could not connect to the board process at {host}:{port}"
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            host=host,
            port=port,
            recoverable=True,
            recovery_hint=(
                "Make sure the board-control process is running and listening on this port. "
                "Run 'ledapplet config show' to check the configured port."
            ),
        )


class HandshakeRefusedError(BoardConnectionError):
    """The board refused the CreateApplet handshake."""

    def __init__(self, app_num: int, code: int, status, host=None, port=None):
        """
        Initialize handshake-refused error.

        Args:
            app_num: The applet number the client tried to create
            code: Raw status byte sent by the board
            status: Decoded StatusCode for that byte
        """
        user_msg = f"Board refused to create applet {app_num}: {status.description}"
        if status is StatusCode.APPLET_EXISTS:
            recovery = (
                f"Applet {app_num} is already owned by another session. "
                "Close that session or pick another applet number."
            )
        elif status is StatusCode.INVALID_SEPARATOR:
            recovery = "Check that the board firmware supports this separator kind"
        else:
            recovery = "Check that the client protocol revision matches the board firmware"

        super().__init__(
            user_message=user_msg,
            technical_message=f"CreateApplet for app {app_num} answered with status {code} ({status.name})",
            host=host,
            port=port,
            recoverable=False,
            recovery_hint=recovery,
        )
        self.app_num = app_num
        self.code = code
        self.status = status


class TransportError(BoardConnectionError):
    """The socket failed while sending a command or reading its status byte."""

    def __init__(self, operation: str, original_error: Optional[str] = None, **kwargs):
        """
        Initialize transport error.

        Args:
            operation: What the client was doing ("send", "read status")
            original_error: The underlying socket error, if any
        """
        user_msg = f"Connection to the board failed during {operation}"
        tech_msg = user_msg
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=False,
            recovery_hint="The session is no longer usable. Create a new session to reconnect.",
            **kwargs
        )
        self.operation = operation
        self.original_error = original_error
