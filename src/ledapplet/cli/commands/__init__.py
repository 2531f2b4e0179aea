"""CLI commands for ledapplet."""

from .codes import codes
from .config import config
from .probe import probe

__all__ = ["codes", "config", "probe"]
