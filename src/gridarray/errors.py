from __future__ import annotations

from typing import Optional


class GridArrayError(Exception):
    """Base error for gridarray exceptions."""


class OutOfRange(GridArrayError, IndexError):
    """Raised when a coordinate pair does not map into the grid's buffer."""

    def __init__(self, message: str, x: int, y: int, index: Optional[int] = None) -> None:
        super().__init__(message)
        self.x = x
        self.y = y
        self.index = index


class IndexOutOfRange(OutOfRange):
    """Raised when a computed linear index falls outside the buffer bounds."""


class CoordinateOutOfRange(OutOfRange):
    """Raised when a checked read or flood fill is given unusable coordinates."""


class GridValidationError(GridArrayError, ValueError):
    """Raised when persisted grid data is malformed."""


class GridNotFound(GridArrayError, KeyError):
    """Raised when a named grid is not present in storage."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""
