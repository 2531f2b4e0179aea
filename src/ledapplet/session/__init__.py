"""Applet sessions."""

from .applet import AppletSession

__all__ = ["AppletSession"]
