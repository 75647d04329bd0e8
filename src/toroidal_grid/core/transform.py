"""Grid transformations: element-wise map, neighborhood map and fold.

All transforms are pure. They read from the source grid only and build a
fresh grid (or a scalar for reduce); the source is never modified. Neighborhood
maps are therefore synchronous: no cell sees another cell's new value within
the same pass.
"""

import functools
import logging
from typing import Any, Callable, Optional, TYPE_CHECKING

import numpy as np

from ..errors import EmptyReductionError
from .neighborhood import Neighborhood

if TYPE_CHECKING:
    from .grid import ToroidalGrid

logger = logging.getLogger(__name__)

# Sentinel so that None can be a legitimate initial accumulator
_MISSING = object()


def map_grid(grid: 'ToroidalGrid', fun: Callable[[Any], Any],
             dtype: Optional[np.dtype] = None) -> 'ToroidalGrid':
    """Apply ``fun`` to every element independently.

    Args:
        grid: Source grid
        fun: Function of one element
        dtype: Optional numpy dtype for the result storage

    Returns:
        ToroidalGrid: New grid with the same shape, ``fun(grid[r, c])`` at (r, c)
    """
    logger.debug(f"Mapping {grid.rows}x{grid.cols} grid element-wise")
    return grid.__class__(grid.rows, grid.cols,
                          lambda row, col: fun(grid.at(row, col)),
                          dtype=dtype, config=grid.config)


def map_neighborhoods(grid: 'ToroidalGrid',
                      transform: Callable[[Any, Neighborhood], Any],
                      dtype: Optional[np.dtype] = None) -> 'ToroidalGrid':
    """Apply ``transform(current, neighborhood)`` at every cell.

    ``current`` is the cell's own value and is also ``neighborhood.center``;
    both are passed so transforms can use whichever reads better.

    Args:
        grid: Source grid (read-only snapshot for the whole pass)
        transform: Function of (current, Neighborhood)
        dtype: Optional numpy dtype for the result storage

    Returns:
        ToroidalGrid: New grid of transform results in the same positions
    """
    logger.debug(f"Mapping {grid.rows}x{grid.cols} grid over L5 neighborhoods")

    def produce(row: int, col: int) -> Any:
        current = grid.at(row, col)
        hood = grid.neighborhood(row, col)
        return transform(current, hood)

    return grid.__class__(grid.rows, grid.cols, produce, dtype=dtype, config=grid.config)


def reduce_grid(grid: 'ToroidalGrid', fun: Callable[[Any, Any], Any],
                initial: Any = _MISSING) -> Any:
    """Fold all elements in row-major order with ``fun(accumulator, element)``.

    Without ``initial`` the first element seeds the accumulator and ``fun``
    runs n - 1 times; a single-element grid returns its element untouched.
    With ``initial``, ``fun`` runs n times starting from it.

    Raises:
        EmptyReductionError: If the grid has no elements and no initial value
    """
    if initial is _MISSING:
        if grid.size == 0:
            raise EmptyReductionError("Cannot reduce an empty grid without an initial value")
        return functools.reduce(fun, grid)
    return functools.reduce(fun, grid, initial)
