"""Unit tests for core grid operations.

Tests grid construction, bounds-checked access, immutability and the
utility methods. Includes a memory budget check for large transforms.
"""

import pytest
import numpy as np
from toroidal_grid import (
    ToroidalGrid,
    GridConfig,
    InvalidDimensionError,
    IndexOutOfRangeError,
)


def flat_index_grid(rows, cols):
    """Grid whose element at (r, c) is its row-major index r*cols + c."""
    return ToroidalGrid(rows, cols, lambda r, c: r * cols + c)


class TestGridInitialization:
    """Test grid initialization and basic properties."""

    def test_dimension_invariant(self):
        """Grid holds rows*cols elements at row-major indices."""
        grid = flat_index_grid(2, 4)

        assert grid.rows == 2
        assert grid.cols == 4
        assert grid.shape == (2, 4)
        assert grid.size == 8
        assert len(grid) == 8
        assert list(grid) == list(range(8))

    def test_generator_called_once_per_cell_in_row_major_order(self):
        """Generator runs exactly once per coordinate, all of row 0 first."""
        calls = []

        def generator(row, col):
            calls.append((row, col))
            return len(calls) - 1

        grid = ToroidalGrid(2, 3, generator)

        assert calls == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]
        assert list(grid) == [0, 1, 2, 3, 4, 5]

    def test_new_alias(self):
        """Grid.new builds the same grid as the constructor."""
        assert ToroidalGrid.new(2, 3, lambda r, c: r * 3 + c) == flat_index_grid(2, 3)

    @pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, 2), (2, -5), (0, 0)])
    def test_non_positive_dimensions(self, rows, cols):
        """Non-positive dimensions raise InvalidDimensionError."""
        with pytest.raises(InvalidDimensionError, match="must be positive"):
            ToroidalGrid(rows, cols, lambda r, c: 0)

    @pytest.mark.parametrize("rows,cols", [(2.0, 3), (2, "3"), (True, 3), (None, 1)])
    def test_non_integer_dimensions(self, rows, cols):
        """Non-integer dimensions raise InvalidDimensionError."""
        with pytest.raises(InvalidDimensionError, match="must be an integer"):
            ToroidalGrid(rows, cols, lambda r, c: 0)

    def test_invalid_dimension_is_value_error(self):
        """InvalidDimensionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            ToroidalGrid(0, 1, lambda r, c: 0)

    def test_generator_not_called_on_invalid_dimensions(self):
        """Construction fails before producing any element."""
        calls = []
        with pytest.raises(InvalidDimensionError):
            ToroidalGrid(0, 4, lambda r, c: calls.append((r, c)))
        assert calls == []

    def test_numpy_integer_dimensions(self):
        """numpy integer dimensions are accepted."""
        grid = ToroidalGrid(np.int64(2), np.int32(2), lambda r, c: 0)
        assert grid.shape == (2, 2)
        assert isinstance(grid.rows, int)

    def test_generator_error_propagates(self):
        """Exceptions from the generator propagate unchanged."""
        def generator(row, col):
            if (row, col) == (1, 1):
                raise RuntimeError("boom")
            return 0

        with pytest.raises(RuntimeError, match="boom"):
            ToroidalGrid(3, 3, generator)

    def test_max_cells_limit(self):
        """Configured max_cells limit rejects oversized grids."""
        config = GridConfig(max_cells=16)
        ToroidalGrid(4, 4, lambda r, c: 0, config=config)  # Should work

        with pytest.raises(InvalidDimensionError, match="exceeds configured limit"):
            ToroidalGrid(4, 5, lambda r, c: 0, config=config)

    def test_arbitrary_element_types(self):
        """Sequences and objects are stored as single elements."""
        grid = ToroidalGrid(2, 2, lambda r, c: [r, c])

        assert grid[1, 0] == [1, 0]
        assert grid.to_list() == [[[0, 0], [0, 1]], [[1, 0], [1, 1]]]


class TestAlternateConstructors:
    """Test grids built from flat values and numpy arrays."""

    def test_from_values(self):
        """Flat row-major values fill the grid."""
        grid = ToroidalGrid.from_values(2, 3, [1, 2, 3, 4, 5, 6])

        assert grid.to_list() == [[1, 2, 3], [4, 5, 6]]

    def test_from_values_length_mismatch(self):
        """Wrong value count raises InvalidDimensionError."""
        with pytest.raises(InvalidDimensionError, match="Got 5 values"):
            ToroidalGrid.from_values(2, 3, [1, 2, 3, 4, 5])

    def test_from_array_keeps_dtype(self):
        """2D numpy arrays keep their dtype and layout."""
        array = np.arange(6, dtype=np.int16).reshape(2, 3)
        grid = ToroidalGrid.from_array(array)

        assert grid.shape == (2, 3)
        assert grid.dtype == np.int16
        assert grid[1, 2] == 5

    def test_from_array_independent_of_source(self):
        """Mutating the source array does not affect the grid."""
        array = np.zeros((2, 2), dtype=int)
        grid = ToroidalGrid.from_array(array)
        array[0, 0] = 7

        assert grid[0, 0] == 0

    @pytest.mark.parametrize("array", [np.arange(4), np.zeros((2, 2, 2)), np.zeros((0, 3))])
    def test_from_array_invalid_shapes(self, array):
        """Non-2D or empty arrays raise InvalidDimensionError."""
        with pytest.raises(InvalidDimensionError):
            ToroidalGrid.from_array(array)


class TestGridAccess:
    """Test bounds-checked element access."""

    def test_at_and_indexing_syntax(self):
        """at(row, col) and grid[row, col] read the same element."""
        grid = flat_index_grid(3, 4)

        assert grid.at(0, 0) == 0
        assert grid.at(1, 2) == 6
        assert grid[2, 3] == 11

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 4), (3, 4)])
    def test_bounds_checking(self, row, col):
        """Out-of-bounds access raises IndexOutOfRangeError, never wraps."""
        grid = flat_index_grid(3, 4)

        with pytest.raises(IndexOutOfRangeError, match="out of bounds for 3x4 grid"):
            grid.at(row, col)

        with pytest.raises(IndexError):
            grid[row, col]

    @pytest.mark.parametrize("row,col", [(1.0, 0), (0, 1.5), (True, 0), (0, False), ("1", 0), (None, 0)])
    def test_non_integer_coordinates(self, row, col):
        """Non-integer coordinates raise IndexOutOfRangeError."""
        grid = flat_index_grid(3, 4)

        with pytest.raises(IndexOutOfRangeError, match="must be integers"):
            grid.at(row, col)

        with pytest.raises(IndexOutOfRangeError, match="must be integers"):
            grid.neighborhood(row, col)

        with pytest.raises(IndexOutOfRangeError, match="must be integers"):
            grid.neighbor_coordinates(row, col)

    def test_numpy_integer_coordinates(self):
        """numpy integer coordinates are accepted."""
        grid = flat_index_grid(3, 4)
        assert grid.at(np.int64(2), np.int32(3)) == 11

    def test_coordinates_row_major(self):
        """coordinates() yields every cell in row-major order."""
        grid = flat_index_grid(2, 2)
        assert list(grid.coordinates()) == [(0, 0), (0, 1), (1, 0), (1, 1)]


class TestGridImmutability:
    """Test that grids cannot be modified after construction."""

    def test_no_item_assignment(self):
        """Grid does not support item assignment."""
        grid = flat_index_grid(2, 2)

        with pytest.raises(TypeError):
            grid[0, 0] = 5

    def test_storage_is_read_only(self):
        """Backing buffer rejects writes."""
        grid = flat_index_grid(2, 2)

        with pytest.raises(ValueError):
            grid._storage.flat[0] = 5

    def test_to_array_returns_copy(self):
        """to_array gives a writable copy independent of the grid."""
        grid = flat_index_grid(2, 2)
        array = grid.to_array()
        array[0, 0] = 99

        assert array.shape == (2, 2)
        assert grid[0, 0] == 0


class TestGridEquality:
    """Test grid equality comparison."""

    def test_identity_equality(self):
        """Grid is equal to itself."""
        grid = flat_index_grid(3, 3)
        assert grid == grid

    def test_equal_contents(self):
        """Independently built grids with same contents are equal."""
        assert flat_index_grid(3, 3) == ToroidalGrid.from_values(3, 3, range(9))

    def test_different_shapes_inequal(self):
        """Same elements in different shapes are not equal."""
        assert ToroidalGrid.from_values(2, 3, range(6)) != ToroidalGrid.from_values(3, 2, range(6))

    def test_different_contents_inequal(self):
        """Grids with different contents are not equal."""
        assert flat_index_grid(2, 2) != ToroidalGrid.from_values(2, 2, [0, 1, 2, 4])

    def test_list_elements_equality(self):
        """Equal-length list elements compare element-wise."""
        grid1 = ToroidalGrid(2, 2, lambda r, c: [r, c])
        grid2 = ToroidalGrid(2, 2, lambda r, c: [r, c])
        assert grid1 == grid2

    def test_numpy_array_cells(self):
        """Cells holding numpy arrays compare by value."""
        grid = ToroidalGrid(2, 2, lambda r, c: np.array([r, c]))

        assert grid.map_neighborhoods(lambda current, hood: current) == grid
        assert grid == ToroidalGrid(2, 2, lambda r, c: np.array([r, c]))
        assert grid != ToroidalGrid(2, 2, lambda r, c: np.array([c, r]))
        assert grid != ToroidalGrid(2, 2, lambda r, c: np.array([r, c, 0]))

    def test_nan_cells_equal_to_identity_map(self):
        """Identical cell objects are equal even when they compare unequal to themselves."""
        grid = ToroidalGrid(2, 2, lambda r, c: float("nan"))

        assert grid.map_neighborhoods(lambda current, hood: current) == grid
        assert grid != ToroidalGrid(2, 2, lambda r, c: float("nan"))

    def test_non_grid_comparison(self):
        """Grid is not equal to non-grid objects."""
        grid = flat_index_grid(2, 2)
        assert grid != "not a grid"
        assert grid != 42
        assert grid != None


class TestGridRepresentation:
    """Test string representations."""

    def test_str_small_grid(self):
        """Small grids print every row."""
        assert str(flat_index_grid(2, 3)) == "0 1 2\n3 4 5"

    def test_str_truncates_large_grid(self):
        """Large grids are truncated past 10 rows and columns."""
        lines = str(flat_index_grid(12, 12)).split('\n')

        assert len(lines) == 11
        assert lines[0].endswith(' ...')
        assert lines[-1] == '...'

    def test_repr(self):
        """repr shows dimensions and dtype."""
        assert repr(flat_index_grid(2, 3)) == "ToroidalGrid(2x3, dtype=object)"


def test_memory_usage_verification():
    """Map over a 256x256 grid stays within a modest memory budget."""
    import psutil
    import os

    process = psutil.Process(os.getpid())
    memory_before = process.memory_info().rss / 1024 / 1024  # MB

    grid = ToroidalGrid(256, 256, lambda r, c: float(r + c), dtype=np.float64)
    doubled = grid.map(lambda x: x * 2, dtype=np.float64)

    assert doubled[255, 255] == 1020.0

    memory_after = process.memory_info().rss / 1024 / 1024  # MB
    memory_used = memory_after - memory_before

    assert memory_used < 50, f"Grid memory usage {memory_used:.1f}MB exceeds 50MB limit"


@pytest.mark.parametrize("rows,cols", [
    (1, 1),
    (1, 7),
    (7, 1),
    (8, 8),
    (16, 32),
])
class TestGridSizes:
    """Parameterized tests for different grid sizes."""

    def test_every_cell_at_row_major_index(self, rows, cols):
        """Element at (r, c) is the one generated for r*cols + c."""
        grid = flat_index_grid(rows, cols)

        for row, col in grid.coordinates():
            assert grid.at(row, col) == row * cols + col
