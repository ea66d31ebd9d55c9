# cavemap/world/grid.py
"""Flat buffers shared by the cave, mosaic and treasure stages.

Both containers keep one C-order NumPy array of shape ``(height, width)``
(plus a channel axis for colors), so ``index = x + y * width`` addresses
the flattened buffer directly.
"""
from typing import Final, Iterable, NamedTuple, Optional, Sequence, Tuple

import numpy as np
import structlog

from cavemap.errors import InvalidConfig
from cavemap.validation import require_positive_int

log = structlog.get_logger(__name__)

Color = Tuple[float, float, float, float]

BLACK: Final[Color] = (0.0, 0.0, 0.0, 1.0)
WHITE: Final[Color] = (1.0, 1.0, 1.0, 1.0)
RED: Final[Color] = (1.0, 0.0, 0.0, 1.0)
TRANSPARENT: Final[Color] = (0.0, 0.0, 0.0, 0.0)

WALL_CHAR: Final[str] = "#"
FLOOR_CHAR: Final[str] = "."


class Point(NamedTuple):
    """An integer grid coordinate."""
    x: int
    y: int


class BinaryGrid:
    """Wall/floor map. ``True`` is a wall (alive cell), ``False`` is floor."""

    def __init__(self, width: int, height: int, cells: Optional[np.ndarray] = None):
        self._width = require_positive_int("width", width)
        self._height = require_positive_int("height", height)
        if cells is None:
            self.cells: np.ndarray = np.zeros((self._height, self._width), dtype=bool)
            return
        cells = np.ascontiguousarray(cells, dtype=bool)
        if cells.shape != (self._height, self._width):
            log.error(
                "Cell buffer does not match grid dimensions",
                expected=(self._height, self._width),
                actual=cells.shape,
            )
            raise InvalidConfig(
                f"cells must have shape {(self._height, self._width)}, got {cells.shape}"
            )
        self.cells = cells

    @classmethod
    def from_strings(cls, rows: Sequence[str]) -> "BinaryGrid":
        """Build a grid from text rows, ``#`` for walls and ``.`` for floor."""
        if not rows or not rows[0]:
            raise InvalidConfig("at least one non-empty row is required")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidConfig("all rows must have the same length")
        cells = np.array([[char == WALL_CHAR for char in row] for row in rows], dtype=bool)
        return cls(width, len(rows), cells)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def flat(self) -> np.ndarray:
        """1D view of the cells, indexed by ``x + y * width``."""
        return self.cells.reshape(-1)

    def index(self, x: int, y: int) -> int:
        return x + y * self._width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def is_alive(self, x: int, y: int) -> bool:
        """Cell value at ``(x, y)``; anything outside the grid is solid."""
        if not self.in_bounds(x, y):
            return True
        return bool(self.cells[y, x])

    def alive_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def copy(self) -> "BinaryGrid":
        return BinaryGrid(self._width, self._height, self.cells.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BinaryGrid):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self.cells, other.cells)
        )

    def __repr__(self) -> str:
        return (
            f"BinaryGrid(width={self._width}, height={self._height}, "
            f"alive={self.alive_count()})"
        )


def _as_color(color: Iterable[float]) -> np.ndarray:
    values = tuple(color)
    rgba = np.asarray(values, dtype=np.float32)
    if rgba.shape != (4,):
        raise InvalidConfig(f"color must have 4 components, got {values!r}")
    return rgba


class ColorImage:
    """RGBA float image, each component normalized to [0, 1]."""

    def __init__(self, width: int, height: int, pixels: Optional[np.ndarray] = None):
        self._width = require_positive_int("width", width)
        self._height = require_positive_int("height", height)
        shape = (self._height, self._width, 4)
        if pixels is None:
            self.pixels: np.ndarray = np.zeros(shape, dtype=np.float32)
            return
        pixels = np.asarray(pixels, dtype=np.float32)
        if pixels.shape == (self._width * self._height, 4):
            pixels = pixels.reshape(shape)
        if pixels.shape != shape:
            log.error("Pixel buffer does not match image dimensions",
                      expected=shape, actual=pixels.shape)
            raise InvalidConfig(f"pixels must have shape {shape}, got {pixels.shape}")
        self.pixels = np.ascontiguousarray(pixels)

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "ColorImage":
        image = cls(width, height)
        image.pixels[:, :] = _as_color(color)
        return image

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def flat(self) -> np.ndarray:
        """``(width * height, 4)`` view, row ``x + y * width``."""
        return self.pixels.reshape(-1, 4)

    def index(self, x: int, y: int) -> int:
        return x + y * self._width

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b, a = (float(c) for c in self.pixels[y, x])
        return r, g, b, a

    def set_pixel(self, x: int, y: int, color: Color) -> bool:
        """Write one pixel. Out-of-bounds writes are dropped and return False."""
        if not self.in_bounds(x, y):
            return False
        self.pixels[y, x] = _as_color(color)
        return True

    def copy(self) -> "ColorImage":
        return ColorImage(self._width, self._height, self.pixels.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorImage):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"ColorImage(width={self._width}, height={self._height})"


__all__ = [
    "Color",
    "BLACK",
    "WHITE",
    "RED",
    "TRANSPARENT",
    "Point",
    "BinaryGrid",
    "ColorImage",
]
