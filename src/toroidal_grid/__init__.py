"""
Toroidal grid substrate for neighborhood-driven algorithms.

A fixed-size 2D grid whose edges wrap around, with element-wise and
L5 (von Neumann) neighborhood-wise transforms that always produce a new grid.
"""

from .errors import (
    ToroidalGridError,
    InvalidDimensionError,
    IndexOutOfRangeError,
    EmptyReductionError,
)
from .config import GridConfig, load_config, get_default_config, reset_default_config
from .core import (
    MatrixStorage,
    Neighborhood,
    ToroidalGrid,
    map_grid,
    map_neighborhoods,
    neighbor_coordinates,
    reduce_grid,
    resolve_neighborhood,
)

__version__ = "0.1.0"

__all__ = [
    'ToroidalGrid',
    'Neighborhood',
    'MatrixStorage',
    'neighbor_coordinates',
    'resolve_neighborhood',
    'map_grid',
    'map_neighborhoods',
    'reduce_grid',
    'ToroidalGridError',
    'InvalidDimensionError',
    'IndexOutOfRangeError',
    'EmptyReductionError',
    'GridConfig',
    'load_config',
    'get_default_config',
    'reset_default_config',
]
