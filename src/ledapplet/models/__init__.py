"""Data models for ledapplet."""

from .config import DEFAULT_CONFIG_PATH, ClientConfig
from .grid import Grid, SeparatorBar

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ClientConfig",
    "Grid",
    "SeparatorBar",
]
