"""Root of the ledapplet exception tree.

Every error carries two messages: `user_message` is what the CLI prints,
`technical_message` is what goes to the log (status bytes, hosts, raw socket
errors). `recoverable` says whether the session that raised it can keep
being used; `recovery_hint` is an optional next step for the user.
"""

from typing import Optional


class LedAppletError(Exception):
    """Base class for all errors raised by ledapplet."""

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, if there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"
