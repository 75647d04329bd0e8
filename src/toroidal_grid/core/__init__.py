"""
Core toroidal grid: storage, L5 neighborhood resolution and transforms.
"""

from .storage import MatrixStorage
from .neighborhood import Neighborhood, neighbor_coordinates, resolve_neighborhood
from .transform import map_grid, map_neighborhoods, reduce_grid
from .grid import ToroidalGrid

__all__ = [
    'MatrixStorage',
    'Neighborhood',
    'neighbor_coordinates',
    'resolve_neighborhood',
    'map_grid',
    'map_neighborhoods',
    'reduce_grid',
    'ToroidalGrid',
]
