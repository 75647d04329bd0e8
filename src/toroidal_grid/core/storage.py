"""Fixed-capacity row-major matrix storage.

A flat, read-only numpy buffer of rows x cols elements. Cell (r, c) lives at
flat index ``r * cols + c``. Elements default to numpy ``object`` dtype so any
Python value (lists, tuples, custom objects) can be stored unchanged.
"""

import numpy as np
from typing import Any, Callable, Iterator, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


def _cells_equal(a: Any, b: Any) -> bool:
    """Compare two cells like list equality does, with numpy array cells compared by value."""
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    return bool(a == b)


class MatrixStorage:
    """Row-major, immutable backing store for a toroidal grid.

    Attributes:
        rows: Number of rows
        cols: Number of columns
    """

    __slots__ = ("rows", "cols", "_data")

    def __init__(self, rows: int, cols: int, data: np.ndarray):
        """Wrap an already-filled flat buffer.

        Prefer ``MatrixStorage.construct``; this takes ownership of ``data``
        and marks it read-only.

        Raises:
            ValueError: If data is not flat or its length isn't rows * cols
        """
        if data.ndim != 1 or data.shape[0] != rows * cols:
            raise ValueError(f"Buffer shape {data.shape} doesn't match {rows}x{cols} storage")

        self.rows = rows
        self.cols = cols
        data.flags.writeable = False
        self._data = data

    @classmethod
    def construct(cls, rows: int, cols: int, generator: Callable[[int, int], Any],
                  dtype: Optional[np.dtype] = None) -> 'MatrixStorage':
        """Build storage by calling ``generator(row, col)`` once per cell.

        Cells are generated in row-major order: all columns of row 0, then
        row 1, and so on.

        Args:
            rows: Number of rows (assumed already validated)
            cols: Number of columns (assumed already validated)
            generator: Function producing the element for (row, col)
            dtype: numpy dtype of the buffer (default ``object``)

        Returns:
            MatrixStorage: New read-only storage
        """
        data = np.empty(rows * cols, dtype=object if dtype is None else dtype)

        index = 0
        for row in range(rows):
            for col in range(cols):
                # Scalar assignment so sequence elements are stored as-is
                data[index] = generator(row, col)
                index += 1

        return cls(rows, cols, data)

    def read(self, row: int, col: int) -> Any:
        """Read element at (row, col). No bounds checking beyond numpy's."""
        return self._data[row * self.cols + col]

    def dimensions(self) -> Tuple[int, int]:
        """Get (rows, cols)."""
        return (self.rows, self.cols)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat view of the buffer."""
        return self._data

    def to_array(self) -> np.ndarray:
        """Get a writable (rows, cols) copy of the buffer."""
        return self._data.reshape(self.rows, self.cols).copy()

    def __len__(self) -> int:
        return self._data.shape[0]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MatrixStorage):
            return NotImplemented
        if self.dimensions() != other.dimensions():
            return False
        return all(_cells_equal(a, b) for a, b in zip(self._data.tolist(), other._data.tolist()))

    def __repr__(self) -> str:
        return f"MatrixStorage({self.rows}x{self.cols}, dtype={self._data.dtype})"
