"""
Custom exception hierarchy for ledapplet.

## Exception Hierarchy

```
LedAppletError (base)
├── InvalidInputError            raised locally, before any I/O
│   ├── InvalidAppletNumberError
│   ├── InvalidRowError
│   ├── InvalidColumnError
│   ├── InvalidGridShapeError
│   ├── InvalidBrightnessError
│   └── SeparatorNotVariableError
├── BoardConnectionError
│   ├── BoardUnreachableError
│   ├── HandshakeRefusedError
│   └── TransportError
├── StatusError                  non-zero status byte on a write
│   ├── BoardReadError
│   ├── MalformedRequestError
│   ├── AppletNumberRejectedError
│   ├── AppletNotOwnedError
│   ├── CommandRejectedError
│   ├── AppletExistsError
│   ├── InvalidSeparatorError
│   └── UnknownStatusError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

## Usage

```python
from ledapplet.exceptions import CommandRejectedError, LedAppletError

try:
    session.write_grid()
except CommandRejectedError as e:
    logger.warning(e.technical_message)
except LedAppletError as e:
    print(e.get_full_message())
```

See `ledapplet.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import LedAppletError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .connection import (
    BoardConnectionError,
    BoardUnreachableError,
    HandshakeRefusedError,
    TransportError,
)
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    raise_for_status,
    wrap_pydantic_error,
    wrap_socket_error,
)
from .status import (
    STATUS_ERRORS,
    AppletExistsError,
    AppletNotOwnedError,
    AppletNumberRejectedError,
    BoardReadError,
    CommandRejectedError,
    InvalidSeparatorError,
    MalformedRequestError,
    StatusError,
    UnknownStatusError,
    status_error,
)
from .validation import (
    InvalidAppletNumberError,
    InvalidBrightnessError,
    InvalidColumnError,
    InvalidGridShapeError,
    InvalidInputError,
    InvalidRowError,
    SeparatorNotVariableError,
)

__all__ = [
    # Base
    "LedAppletError",
    # Validation
    "InvalidAppletNumberError",
    "InvalidBrightnessError",
    "InvalidColumnError",
    "InvalidGridShapeError",
    "InvalidInputError",
    "InvalidRowError",
    "SeparatorNotVariableError",
    # Connection
    "BoardConnectionError",
    "BoardUnreachableError",
    "HandshakeRefusedError",
    "TransportError",
    # Status
    "STATUS_ERRORS",
    "AppletExistsError",
    "AppletNotOwnedError",
    "AppletNumberRejectedError",
    "BoardReadError",
    "CommandRejectedError",
    "InvalidSeparatorError",
    "MalformedRequestError",
    "StatusError",
    "UnknownStatusError",
    "status_error",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "handle_errors",
    "raise_for_status",
    "wrap_pydantic_error",
    "wrap_socket_error",
]
