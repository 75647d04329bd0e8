"""L5 (von Neumann) neighborhood resolution on a toroidal grid.

Each cell's neighborhood is the cell itself plus its four cardinal
neighbors. Edges wrap around: north of row 0 is the last row, east of the
last column is column 0, and so on, so every cell (corners included) has
exactly five entries.

Wraparound is plain modular arithmetic on the dimensions, applied the same
way to interior, edge and corner cells.
"""

from typing import Any, NamedTuple, Tuple, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .grid import ToroidalGrid

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]


class Neighborhood(NamedTuple):
    """Values of a cell and its four cardinal neighbors.

    Values are copied out of the grid; the neighborhood keeps no reference
    to it. Being a tuple, it can be sorted, iterated and searched directly.
    """
    center: Any
    north: Any
    east: Any
    south: Any
    west: Any

    @property
    def neighbors(self) -> Tuple[Any, Any, Any, Any]:
        """The four cardinal values (north, east, south, west)."""
        return (self.north, self.east, self.south, self.west)


def neighbor_coordinates(rows: int, cols: int, row: int, col: int) -> Tuple[Coordinate, ...]:
    """Compute wrapped L5 coordinates for (row, col).

    Args:
        rows: Grid height (R >= 1)
        cols: Grid width (C >= 1)
        row: Cell row, 0 <= row < rows
        col: Cell column, 0 <= col < cols

    Returns:
        ((row, col), north, east, south, west) as (row, col) pairs. With
        rows == 1 or cols == 1 some pairs coincide.
    """
    return (
        (row, col),
        ((row - 1 + rows) % rows, col),
        (row, (col + 1) % cols),
        ((row + 1) % rows, col),
        (row, (col - 1 + cols) % cols),
    )


def resolve_neighborhood(grid: 'ToroidalGrid', row: int, col: int) -> Neighborhood:
    """Read the L5 neighborhood of (row, col) from a grid.

    The center lookup goes first so invalid coordinates fail with
    IndexOutOfRangeError from ``grid.at``; the wrapped lookups are always
    in range after that.

    Args:
        grid: Source grid
        row: Cell row
        col: Cell column

    Returns:
        Neighborhood: (center, north, east, south, west) values
    """
    center = grid.at(row, col)
    coords = neighbor_coordinates(grid.rows, grid.cols, row, col)
    return Neighborhood(center, *(grid.at(r, c) for r, c in coords[1:]))
