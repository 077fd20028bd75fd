"""Fixed-shape 2D integer field with (i, j) indexing.

Storage is a flat list of ``width * height`` ints, row-major by the first
axis: cell ``(i, j)`` lives at ``i * height + j``. ``get``/``set`` expect
in-range indices; callers that need toroidal neighbors wrap with ``wrap``.
"""

from __future__ import annotations

from random import Random

import numpy as np

from dunescape.config.types import validate_shape


class Grid:
    """Row-major integer field of shape ``(width, height)``."""

    __slots__ = ("width", "height", "values")

    def __init__(self, width: int, height: int) -> None:
        validate_shape(width, height)
        self.width = width
        self.height = height
        self.values: list[int] = [0] * (width * height)

    @classmethod
    def from_array(cls, array: np.ndarray) -> Grid:
        """Build a grid from a ``(width, height)`` integer array."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError("array must be 2-D with shape (width, height)")
        grid = cls(int(arr.shape[0]), int(arr.shape[1]))
        grid.load_array(arr)
        return grid

    @property
    def shape(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"

    def index(self, i: int, j: int) -> int:
        return i * self.height + j

    def get(self, i: int, j: int) -> int:
        return self.values[i * self.height + j]

    def set(self, i: int, j: int, value: int) -> None:
        self.values[i * self.height + j] = value

    def wrap(self, i: int, j: int) -> tuple[int, int]:
        """Map any (i, j) onto the torus."""
        return i % self.width, j % self.height

    def reshape(self, width: int, height: int) -> None:
        """Reallocate storage for a new shape; prior contents are discarded."""
        validate_shape(width, height)
        self.width = width
        self.height = height
        self.values = [0] * (width * height)

    def fill(self, value: int) -> None:
        self.values = [value] * (self.width * self.height)

    def fill_random(self, low: int, high: int, seed: int) -> None:
        """Fill every cell i.i.d. from a uniform integer distribution over [low, high]."""
        if low > high:
            raise ValueError("low must be <= high")
        rng = Random(seed)
        self.values = [rng.randint(low, high) for _ in range(self.width * self.height)]

    def max(self) -> int:
        return max(self.values)

    def min(self) -> int:
        return min(self.values)

    def total(self) -> int:
        return sum(self.values)

    def copy(self) -> Grid:
        other = Grid(self.width, self.height)
        other.values = list(self.values)
        return other

    def as_array(self) -> np.ndarray:
        """Return a ``(width, height)`` int64 copy of the field."""
        return np.array(self.values, dtype=np.int64).reshape(self.width, self.height)

    def load_array(self, array: np.ndarray) -> None:
        """Overwrite the contents from an array of identical shape."""
        arr = np.asarray(array)
        if arr.shape != self.shape:
            raise ValueError(f"array shape {arr.shape} does not match grid shape {self.shape}")
        self.values = [int(v) for v in arr.ravel()]
