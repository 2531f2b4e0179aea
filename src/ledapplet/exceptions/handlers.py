"""
Centralized error handling utilities.

Errors are translated one layer at a time:

```
┌─────────────────────────────────────────┐
│  CALLER (CLI, application code)         │
│  - Formats error.user_message           │
│  - Shows error.recovery_hint            │
└─────────────────────────────────────────┘
                  ↑
                  │ LedAppletError
                  │
┌─────────────────────────────────────────┐
│  SESSION (AppletSession)                │
│  - Validates input before any I/O       │
│  - Maps status bytes to StatusError     │
└─────────────────────────────────────────┘
                  ↑
                  │ OSError, socket.timeout, status byte
                  │
┌─────────────────────────────────────────┐
│  TRANSPORT (TcpTransport)               │
│  - Raw socket calls                     │
└─────────────────────────────────────────┘
```

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Socket call failed | `raise wrap_socket_error(e, "send") from e` |
| Status byte received | `raise_for_status(code, revision, app_num=1, opcode="UpdateGrid")` |
| Config file failed validation | `raise wrap_pydantic_error(e, str(path)) from e` |
| Report a failed CLI operation and return a fallback | `@handle_errors(operation_name="probe applet", re_raise=False)` |
| Log failures of a block of board I/O | `with ErrorContext("create applet 1", logger): ...` |
"""

import logging
import socket
from functools import wraps
from typing import Callable, Optional, TypeVar

from ledapplet.protocol.taxonomy import ProtocolRevision, StatusCode, get_revision

from .base import LedAppletError
from .config import ConfigFileInvalidError, ConfigValidationError
from .connection import BoardUnreachableError, TransportError
from .status import status_error


logger = logging.getLogger(__name__)


T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
) -> Callable:
    """
    Decorator that logs failures of a board operation and optionally swallows them.

    ledapplet errors are logged with their technical message and reported
    to `user_notification` with their recovery hint. Anything else is logged
    with a traceback.

    Example:
        ```python
        @handle_errors(operation_name="probe applet", user_notification=click.echo,
                       fallback_value=False, re_raise=False)
        def run_handshake(cfg, app_num, kind):
            with AppletSession.from_config(cfg, app_num, kind):
                return True
        ```
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if isinstance(e, LedAppletError):
                    logger.error(f"Failed to {operation_name}: {e.technical_message}")
                    message = e.get_full_message()
                else:
                    logger.error(f"Unexpected error during {operation_name}: {e}", exc_info=True)
                    message = f"Error: {e}"

                if user_notification:
                    user_notification(message)
                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Log the outcome of a block of board I/O, then let any exception propagate.

    Recoverable ledapplet errors are logged as warnings, everything else as
    errors. The exception is kept on `error` for callers that inspect it
    after the block.

    Example:
        ```python
        with ErrorContext(f"create applet {app_num}", logger):
            transport.open()
            code = transport.exchange(command.encode())
        ```
    """

    def __init__(self, operation: str, logger_instance: Optional[logging.Logger] = None):
        self.operation = operation
        self.logger = logger_instance or logger
        self.error: Optional[BaseException] = None

    def __enter__(self) -> "ErrorContext":
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val
        if isinstance(exc_val, LedAppletError):
            level = logging.WARNING if exc_val.recoverable else logging.ERROR
            self.logger.log(level, f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return False


def raise_for_status(
    code: int,
    revision: ProtocolRevision | str | None = None,
    *,
    app_num: Optional[int] = None,
    opcode: Optional[str] = None,
) -> StatusCode:
    """
    Decode a status byte and raise the matching StatusError unless it is success.

    Args:
        code: Raw status byte
        revision: Protocol revision whose table decodes the byte
        app_num: Applet the command targeted (for messages)
        opcode: Wire name of the command (for messages)

    Returns:
        StatusCode.SUCCESS

    Raises:
        StatusError: Subclass matching the decoded status
    """
    status = get_revision(revision).decode_status(code)
    if status is StatusCode.SUCCESS:
        return status
    raise status_error(code, status, app_num=app_num, opcode=opcode)


def wrap_socket_error(
    error: Exception,
    operation: str,
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> LedAppletError:
    """
    Convert a low-level socket error to a ledapplet exception.

    Args:
        error: The original exception from the socket layer
        operation: "connect", "send" or "read status"
        host: Board host, if known
        port: Board port, if known

    Returns:
        BoardUnreachableError for connect failures, TransportError otherwise
    """
    if isinstance(error, LedAppletError):
        return error

    if operation == "connect":
        return BoardUnreachableError(host, port, original_error=str(error))

    if isinstance(error, socket.timeout):
        return TransportError(operation, original_error="timed out", host=host, port=port)

    return TransportError(operation, original_error=str(error), host=host, port=port)


def wrap_pydantic_error(error: Exception, file_path: str) -> LedAppletError:
    """
    Convert Pydantic validation errors to ledapplet exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LedAppletError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
