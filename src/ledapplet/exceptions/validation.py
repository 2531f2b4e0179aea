"""Input validation exceptions.

These are raised before any network I/O takes place:
- InvalidInputError: Base class for local validation failures
- InvalidAppletNumberError: Applet number outside the revision's range
- InvalidRowError / InvalidColumnError: Grid coordinates out of bounds
- InvalidGridShapeError: Mirror data with the wrong dimensions
- InvalidBrightnessError: Pixel value outside 0-255
- SeparatorNotVariableError: Bar write on a board-rendered separator
"""

from .base import LedAppletError


class InvalidInputError(LedAppletError, ValueError):
    """A caller-supplied value was rejected locally."""

    def __init__(self, user_message: str, **kwargs):
        kwargs.setdefault("recoverable", True)
        super().__init__(user_message, **kwargs)


class InvalidAppletNumberError(InvalidInputError):
    """Applet number is outside the valid range for the protocol revision."""

    def __init__(self, app_num: int, max_app_num: int):
        """
        Initialize invalid applet number error.

        Args:
            app_num: The rejected applet number
            max_app_num: Highest applet number the revision accepts
        """
        super().__init__(
            f"app_num maximum is {max_app_num}",
            technical_message=f"Applet number {app_num} outside 0..{max_app_num}",
            recovery_hint=(
                f"Use 0 for the status row or 1..{max_app_num} for a panel applet"
            ),
        )
        self.app_num = app_num
        self.max_app_num = max_app_num


class InvalidRowError(InvalidInputError):
    """Row index outside the grid."""

    def __init__(self, row: int, rows: int):
        super().__init__(
            "Invalid row index",
            technical_message=f"Row {row} outside 0..{rows - 1}",
        )
        self.row = row


class InvalidColumnError(InvalidInputError):
    """Column index outside the grid."""

    def __init__(self, col: int, columns: int):
        super().__init__(
            "Invalid column index",
            technical_message=f"Column {col} outside 0..{columns - 1}",
        )
        self.col = col


class InvalidGridShapeError(InvalidInputError):
    """Mirror data does not match the fixed container size."""

    def __init__(self, expected: tuple[int, ...], actual: tuple[int, ...]):
        super().__init__(
            f"Expected shape {expected}, got {actual}",
            recovery_hint="Grid and bar sizes are fixed by the protocol revision",
        )
        self.expected = expected
        self.actual = actual


class InvalidBrightnessError(InvalidInputError):
    """Pixel value outside the unsigned byte range."""

    def __init__(self, value):
        super().__init__(
            f"Brightness must be 0-255, got {value}",
        )
        self.value = value


class SeparatorNotVariableError(InvalidInputError):
    """The session's separator is rendered by the board, not the client."""

    def __init__(self, separator_kind):
        super().__init__(
            "separator not variable",
            technical_message=f"Bar write refused for separator kind {separator_kind.name}",
            recovery_hint="Create the applet with SeparatorKind.VARIABLE to write bar pixels",
        )
        self.separator_kind = separator_kind
