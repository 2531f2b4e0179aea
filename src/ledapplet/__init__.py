"""ledapplet: client for LED matrix applets served by a local board-control process."""

__version__ = "0.1.0"

from .models import ClientConfig
from .protocol import Opcode, SeparatorKind, StatusCode
from .session import AppletSession

__all__ = [
    "AppletSession",
    "ClientConfig",
    "Opcode",
    "SeparatorKind",
    "StatusCode",
]
