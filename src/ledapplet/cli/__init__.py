"""Command-line interface for ledapplet."""

from .main import cli

__all__ = ["cli"]
