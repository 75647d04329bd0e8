"""Immutable two-dimensional toroidal grid.

The grid is the spatial substrate for neighborhood-driven algorithms such as
cellular evolutionary algorithms. Edges wrap around, so no cell is a true
edge or corner. Cells are stored row-major in a read-only numpy buffer and
every transformation returns a new grid.
"""

import numpy as np
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple
import logging

from .. import config as grid_config
from ..errors import IndexOutOfRangeError, InvalidDimensionError
from .neighborhood import Neighborhood, neighbor_coordinates, resolve_neighborhood
from .storage import MatrixStorage
from . import transform

logger = logging.getLogger(__name__)


def _check_dimension(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionError(f"Grid {name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidDimensionError(f"Grid dimensions must be positive, got {name}={value}")
    return int(value)


def _is_index(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class ToroidalGrid:
    """Fixed-size 2D grid whose opposite edges are joined.

    Attributes:
        rows: Number of rows (R >= 1)
        cols: Number of columns (C >= 1)
    """

    __slots__ = ("_rows", "_cols", "_storage", "_config")

    def __init__(self, rows: int, cols: int, generator: Callable[[int, int], Any],
                 dtype: Optional[np.dtype] = None,
                 config: Optional[grid_config.GridConfig] = None):
        """Build a grid by calling ``generator(row, col)`` for every cell.

        The generator runs exactly once per cell in row-major order. Any
        exception it raises propagates and no grid is produced.

        Args:
            rows: Number of rows
            cols: Number of columns
            generator: Function producing the element at (row, col)
            dtype: Optional numpy dtype for homogeneous grids (default object)
            config: Limits to enforce (default ``get_default_config()``)

        Raises:
            InvalidDimensionError: If rows or cols is not a positive integer,
                or rows * cols exceeds the configured max_cells
        """
        rows = _check_dimension("rows", rows)
        cols = _check_dimension("cols", cols)

        if config is None:
            config = grid_config.get_default_config()
        if not config.allows(rows, cols):
            raise InvalidDimensionError(
                f"Grid {rows}x{cols} exceeds configured limit of {config.max_cells} cells")

        self._rows = rows
        self._cols = cols
        self._config = config
        self._storage = MatrixStorage.construct(rows, cols, generator, dtype=dtype)

        logger.debug(f"Created toroidal grid {rows}x{cols}")

    @classmethod
    def new(cls, rows: int, cols: int, generator: Callable[[int, int], Any],
            **kwargs) -> 'ToroidalGrid':
        """Alias for the constructor."""
        return cls(rows, cols, generator, **kwargs)

    @classmethod
    def from_values(cls, rows: int, cols: int, values: Sequence[Any],
                    **kwargs) -> 'ToroidalGrid':
        """Create grid from a flat row-major sequence of values.

        Raises:
            InvalidDimensionError: If len(values) != rows * cols
        """
        rows = _check_dimension("rows", rows)
        cols = _check_dimension("cols", cols)
        values = list(values)
        if len(values) != rows * cols:
            raise InvalidDimensionError(
                f"Got {len(values)} values for a {rows}x{cols} grid ({rows * cols} expected)")

        return cls(rows, cols, lambda row, col: values[row * cols + col], **kwargs)

    @classmethod
    def from_array(cls, array: np.ndarray, **kwargs) -> 'ToroidalGrid':
        """Create grid from a 2D numpy array, keeping its dtype.

        Raises:
            InvalidDimensionError: If the array is not 2D or has an empty axis
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidDimensionError(f"Expected a 2D array, got ndim={array.ndim}")

        rows, cols = array.shape
        kwargs.setdefault("dtype", array.dtype)
        return cls(rows, cols, lambda row, col: array[row, col], **kwargs)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> Tuple[int, int]:
        """Grid dimensions as (rows, cols)."""
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        """Total number of cells."""
        return len(self._storage)

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def config(self) -> grid_config.GridConfig:
        return self._config

    def _check_coordinates(self, row: Any, col: Any) -> None:
        if not (_is_index(row) and _is_index(col)):
            raise IndexOutOfRangeError(f"Coordinates must be integers, got ({row!r}, {col!r})")
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexOutOfRangeError(
                f"Coordinates ({row}, {col}) out of bounds for {self._rows}x{self._cols} grid")

    def at(self, row: int, col: int) -> Any:
        """Get element at coordinates. No wraparound at this layer.

        Args:
            row: Row index, 0 <= row < rows
            col: Column index, 0 <= col < cols

        Returns:
            The stored element

        Raises:
            IndexOutOfRangeError: If coordinates are out of bounds or not integers
        """
        self._check_coordinates(row, col)
        return self._storage.read(row, col)

    def neighborhood(self, row: int, col: int) -> Neighborhood:
        """Get the wrapped L5 neighborhood (center, north, east, south, west)."""
        return resolve_neighborhood(self, row, col)

    def neighbor_coordinates(self, row: int, col: int) -> Tuple[Tuple[int, int], ...]:
        """Get wrapped L5 coordinates in neighborhood order.

        Raises:
            IndexOutOfRangeError: If coordinates are out of bounds or not integers
        """
        self._check_coordinates(row, col)
        return neighbor_coordinates(self._rows, self._cols, row, col)

    def map(self, fun: Callable[[Any], Any], dtype: Optional[np.dtype] = None) -> 'ToroidalGrid':
        """New grid with ``fun`` applied to every element."""
        return transform.map_grid(self, fun, dtype=dtype)

    def map_neighborhoods(self, fun: Callable[[Any, Neighborhood], Any],
                          dtype: Optional[np.dtype] = None) -> 'ToroidalGrid':
        """New grid with ``fun(current, neighborhood)`` at every cell."""
        return transform.map_neighborhoods(self, fun, dtype=dtype)

    def reduce(self, fun: Callable[[Any, Any], Any], *initial: Any) -> Any:
        """Fold elements in row-major order with ``fun(accumulator, element)``.

        The first element seeds the accumulator unless an initial value is
        given, so ``fun`` runs rows * cols - 1 times.
        """
        if len(initial) > 1:
            raise TypeError(f"reduce expected at most 2 arguments, got {len(initial) + 1}")
        return transform.reduce_grid(self, fun, *initial)

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """Yield every (row, col) in row-major order."""
        for row in range(self._rows):
            for col in range(self._cols):
                yield (row, col)

    def to_list(self) -> List[List[Any]]:
        """Get elements as nested row lists."""
        return [[self._storage.read(row, col) for col in range(self._cols)]
                for row in range(self._rows)]

    def to_array(self) -> np.ndarray:
        """Get grid as a writable (rows, cols) numpy array copy."""
        return self._storage.to_array()

    def __getitem__(self, key: Tuple[int, int]) -> Any:
        """Access element using grid[row, col] syntax."""
        row, col = key
        return self.at(row, col)

    def __iter__(self) -> Iterator[Any]:
        """Iterate elements in row-major order."""
        return iter(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def __eq__(self, other: object) -> bool:
        """Check equality of shape and elements with another grid."""
        if not isinstance(other, ToroidalGrid):
            return False
        return self._storage == other._storage

    def __str__(self) -> str:
        """Rows of space-separated values, truncated past 10x10."""
        lines = []
        for row in range(min(10, self._rows)):  # Show first 10 rows
            cells = [str(self._storage.read(row, col)) for col in range(min(10, self._cols))]
            line = ' '.join(cells)
            if self._cols > 10:
                line += ' ...'
            lines.append(line)

        if self._rows > 10:
            lines.append('...')

        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"ToroidalGrid({self._rows}x{self._cols}, dtype={self.dtype})"
