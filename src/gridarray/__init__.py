"""Fixed-size 2D grids stored in a flat, serializable buffer."""

from .codec import SCHEMA_VERSION, decode_grid, encode_grid
from .errors import (
    CoordinateOutOfRange,
    GridArrayError,
    GridNotFound,
    GridValidationError,
    IndexOutOfRange,
    OutOfRange,
)
from .grid import GridArray
from .storage import GridStorage

__version__ = "0.1.0"

__all__ = [
    "GridArray",
    "GridStorage",
    "encode_grid",
    "decode_grid",
    "SCHEMA_VERSION",
    "GridArrayError",
    "OutOfRange",
    "IndexOutOfRange",
    "CoordinateOutOfRange",
    "GridValidationError",
    "GridNotFound",
]
