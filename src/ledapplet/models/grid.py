"""Fixed-size pixel containers mirroring an applet's board state.

Both containers own a numpy uint8 array whose shape is set at construction
and never changes. Element writes are bounds-checked; bulk writes must match
the shape exactly.
"""

import numpy as np
import numpy.typing as npt

from ledapplet.exceptions import (
    InvalidBrightnessError,
    InvalidColumnError,
    InvalidGridShapeError,
    InvalidRowError,
)


def to_brightness_array(values, shape: tuple[int, ...]) -> npt.NDArray[np.uint8]:
    """
    Validate caller data and convert it to a uint8 array of the given shape.

    Args:
        values: Nested sequence or array of integers
        shape: Required shape

    Returns:
        New uint8 array (never a view of the caller's data)

    Raises:
        InvalidGridShapeError: If the data has a different shape
        InvalidBrightnessError: If any value is not an integer in 0-255
    """
    try:
        array = np.array(values)
    except ValueError:
        # Ragged nested sequences
        raise InvalidGridShapeError(shape, ()) from None

    if array.shape != shape:
        raise InvalidGridShapeError(shape, array.shape)

    if array.size and not np.issubdtype(array.dtype, np.integer):
        raise InvalidBrightnessError(array.dtype)

    if array.size and (array.min() < 0 or array.max() > 255):
        bad = array[(array < 0) | (array > 255)].flat[0]
        raise InvalidBrightnessError(int(bad))

    return array.astype(np.uint8)


def check_brightness(value) -> int:
    """Validate a single pixel value."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidBrightnessError(value)
    if not 0 <= value <= 255:
        raise InvalidBrightnessError(value)
    return int(value)


class Grid:
    """Row-major rows x columns brightness matrix."""

    def __init__(self, rows: int, columns: int):
        self.rows = rows
        self.columns = columns
        self._pixels = np.zeros((rows, columns), dtype=np.uint8)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.rows, self.columns)

    def set_all(self, values) -> None:
        """Replace every pixel. `values` must be exactly rows x columns."""
        self._pixels = to_brightness_array(values, self.shape)

    def set_point(self, row: int, col: int, value: int) -> None:
        """
        Set one pixel.

        Raises:
            InvalidRowError: If row is outside [0, rows)
            InvalidColumnError: If col is outside [0, columns)
            InvalidBrightnessError: If value is outside 0-255
        """
        if not 0 <= row < self.rows:
            raise InvalidRowError(row, self.rows)
        if not 0 <= col < self.columns:
            raise InvalidColumnError(col, self.columns)
        self._pixels[row, col] = check_brightness(value)

    def get_point(self, row: int, col: int) -> int:
        if not 0 <= row < self.rows:
            raise InvalidRowError(row, self.rows)
        if not 0 <= col < self.columns:
            raise InvalidColumnError(col, self.columns)
        return int(self._pixels[row, col])

    def to_array(self) -> npt.NDArray[np.uint8]:
        """Copy of the pixels."""
        return self._pixels.copy()

    def to_bytes(self) -> bytes:
        """Pixels in row-major wire order."""
        return self._pixels.tobytes(order="C")

    def clear(self) -> None:
        self._pixels.fill(0)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self._pixels, other._pixels)

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, columns={self.columns})"


class SeparatorBar:
    """One row of separator brightness values, `columns` long."""

    def __init__(self, columns: int):
        self.columns = columns
        self._pixels = np.zeros(columns, dtype=np.uint8)

    def set_all(self, values) -> None:
        self._pixels = to_brightness_array(values, (self.columns,))

    def to_array(self) -> npt.NDArray[np.uint8]:
        return self._pixels.copy()

    def to_bytes(self) -> bytes:
        return self._pixels.tobytes()

    def clear(self) -> None:
        self._pixels.fill(0)

    def __repr__(self) -> str:
        return f"SeparatorBar(columns={self.columns})"
