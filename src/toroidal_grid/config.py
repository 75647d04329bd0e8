"""Environment-driven configuration for toroidal grids.

Settings are read from the environment on first use by ``get_default_config``,
so a bad variable surfaces when the first grid is built rather than on
import. Grids fall back to it when no explicit ``GridConfig`` is passed.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MAX_CELLS_ENV = "TOROIDAL_GRID_MAX_CELLS"
LOG_LEVEL_ENV = "TOROIDAL_GRID_LOG_LEVEL"

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class GridConfig:
    """Grid construction limits and script logging level.

    Attributes:
        max_cells: Upper bound on rows * cols, or None for no limit
        log_level: Logging level name used by scripts
    """

    max_cells: Optional[int] = None
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_cells is not None and self.max_cells < 1:
            raise ValueError(f"max_cells must be positive, got {self.max_cells}")
        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            raise ValueError(f"Unknown log level {self.log_level!r}")

    def allows(self, rows: int, cols: int) -> bool:
        """Check whether a rows x cols grid fits under max_cells."""
        return self.max_cells is None or rows * cols <= self.max_cells


def load_config() -> GridConfig:
    """Create configuration from environment variables.

    Raises:
        ValueError: If an environment variable holds an invalid value
    """
    raw_max = os.getenv(MAX_CELLS_ENV, "").strip()
    max_cells = None
    if raw_max:
        try:
            max_cells = int(raw_max)
        except ValueError:
            raise ValueError(f"{MAX_CELLS_ENV} must be an integer, got {raw_max!r}") from None
        if max_cells < 1:
            raise ValueError(f"{MAX_CELLS_ENV} must be positive, got {max_cells}")

    log_level = os.getenv(LOG_LEVEL_ENV, "INFO").strip().upper() or "INFO"
    if log_level not in _VALID_LOG_LEVELS:
        raise ValueError(f"{LOG_LEVEL_ENV} must be one of {', '.join(_VALID_LOG_LEVELS)}, got {log_level!r}")

    config = GridConfig(max_cells=max_cells, log_level=log_level)
    logger.debug(f"Loaded grid config {config}")
    return config


_default_config: Optional[GridConfig] = None


def get_default_config() -> GridConfig:
    """Get the environment config, loading it on first call."""
    global _default_config
    if _default_config is None:
        _default_config = load_config()
    return _default_config


def reset_default_config() -> None:
    """Forget the cached config so the next call re-reads the environment."""
    global _default_config
    _default_config = None
