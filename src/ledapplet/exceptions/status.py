"""Board status-byte exceptions.

Each non-zero status byte returned for an UpdateGrid/UpdateBar command is
surfaced as a StatusError subclass. The byte itself is decoded through the
session's protocol revision first, so these classes key on StatusCode and
never on raw numbers.
"""

from typing import Optional

from ledapplet.protocol.taxonomy import StatusCode

from .base import LedAppletError


class StatusError(LedAppletError):
    """The board answered a command with a non-success status byte."""

    status: StatusCode = StatusCode.UNKNOWN
    default_recoverable: bool = False
    default_hint: Optional[str] = None

    def __init__(self, code: int, status: Optional[StatusCode] = None, app_num: Optional[int] = None,
                 opcode: Optional[str] = None):
        """
        Initialize a status error.

        Args:
            code: Raw status byte from the board
            status: Decoded StatusCode (defaults to the class's status)
            app_num: Applet the command targeted
            opcode: Wire name of the command that failed
        """
        status = status or self.status
        target = f" for applet {app_num}" if app_num is not None else ""
        super().__init__(
            user_message=f"Board rejected {opcode or 'command'}{target}: {status.description}",
            technical_message=(
                f"{opcode or 'command'} app_num={app_num} -> status {code} "
                f"({status.name}, {status.category})"
            ),
            recoverable=self.default_recoverable,
            recovery_hint=self.default_hint,
        )
        self.code = code
        self.status = status
        self.app_num = app_num
        self.opcode = opcode


class BoardReadError(StatusError):
    """Board failed to read the command from its stream."""

    status = StatusCode.READ_FAILED
    default_recoverable = True
    default_hint = "This is usually transient; the write may be retried"


class MalformedRequestError(StatusError):
    """
    Board could not parse the command as UTF-8 JSON.

    Raised for both 20 (invalid UTF-8) and 21 (invalid JSON); `status` tells
    them apart.
    """

    status = StatusCode.INVALID_JSON
    default_hint = "Check that the client and board use the same protocol revision"


class AppletNumberRejectedError(StatusError):
    """Board considers the applet number out of range."""

    status = StatusCode.APP_NUM_OUT_OF_RANGE
    default_hint = "The board supports fewer applets than the configured protocol revision"


class AppletNotOwnedError(StatusError):
    """Command targets an applet this connection did not create."""

    status = StatusCode.APPLET_NOT_OWNED


class CommandRejectedError(StatusError):
    """
    Board refused the command for this applet.

    Raised for 32 under either revision: COMMAND_FAILED on v1,
    PRIVILEGED_APPLET on v2. `status` holds the decoded meaning.
    """

    status = StatusCode.PRIVILEGED_APPLET
    default_recoverable = True
    default_hint = "The status row (applet 0) may not accept grid writes on this firmware"


class AppletExistsError(StatusError):
    """Applet number already has an owner on the board."""

    status = StatusCode.APPLET_EXISTS


class InvalidSeparatorError(StatusError):
    """Board rejected the separator value."""

    status = StatusCode.INVALID_SEPARATOR


class UnknownStatusError(StatusError):
    """Board sent a status byte that is not in the revision's table."""

    status = StatusCode.UNKNOWN
    default_hint = "Check that the client protocol revision matches the board firmware"


STATUS_ERRORS: dict[StatusCode, type[StatusError]] = {
    StatusCode.READ_FAILED: BoardReadError,
    StatusCode.INVALID_UTF8: MalformedRequestError,
    StatusCode.INVALID_JSON: MalformedRequestError,
    StatusCode.APP_NUM_OUT_OF_RANGE: AppletNumberRejectedError,
    StatusCode.APPLET_NOT_OWNED: AppletNotOwnedError,
    StatusCode.COMMAND_FAILED: CommandRejectedError,
    StatusCode.PRIVILEGED_APPLET: CommandRejectedError,
    StatusCode.APPLET_EXISTS: AppletExistsError,
    StatusCode.INVALID_SEPARATOR: InvalidSeparatorError,
    StatusCode.UNKNOWN: UnknownStatusError,
}


def status_error(code: int, status: StatusCode, app_num: Optional[int] = None,
                 opcode: Optional[str] = None) -> StatusError:
    """Build the StatusError subclass matching a decoded status."""
    error_cls = STATUS_ERRORS.get(status, UnknownStatusError)
    return error_cls(code, status=status, app_num=app_num, opcode=opcode)
