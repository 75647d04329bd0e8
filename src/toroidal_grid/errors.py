"""Exception hierarchy for toroidal grid operations.

Each error also derives from the built-in exception callers would expect
(ValueError for bad dimensions, IndexError for bad coordinates), so plain
``except ValueError`` handlers keep working.
"""


class ToroidalGridError(Exception):
    """Base class for all toroidal grid errors."""


class InvalidDimensionError(ToroidalGridError, ValueError):
    """Grid dimensions are non-positive, non-integer or over the configured limit."""


class IndexOutOfRangeError(ToroidalGridError, IndexError):
    """Direct cell access outside [0, rows) x [0, cols)."""


class EmptyReductionError(ToroidalGridError, ValueError):
    """Reduction over a grid with no elements and no initial value."""
