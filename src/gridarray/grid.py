from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar, Union

from .errors import CoordinateOutOfRange, GridValidationError, IndexOutOfRange

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Flood fill visit order: right, left, down, up
FILL_OFFSETS: Tuple[Tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridArray(Generic[T]):
    """A fixed-size 2D grid stored in a single row-major list.

    The grid exists so that 2D data can be persisted as three plain fields
    (``width``, ``height`` and the flat ``array``) while callers keep working
    with ``(x, y)`` coordinates. Cell ``(x, y)`` lives at ``y * width + x``.

    Coordinate validity is decided on the computed linear index only, so
    ``(width, 0)`` is a legal address for ``(0, 1)``. Two entry points exist
    for element access:

    * ``get``/``set`` and ``grid[x, y]`` are bounds-checked and raise
      :class:`~gridarray.errors.OutOfRange` subclasses.
    * ``grid[i]`` indexes the underlying list directly with no checks.

    Elements only need to support ``==``; flood fill relies on value equality.
    """

    __slots__ = ("_w", "_h", "_array", "_legacy_bounds")

    def __init__(
        self,
        width: Optional[int] = None,
        height: Optional[int] = None,
        default: Optional[T] = None,
        *,
        legacy_bounds: bool = False,
    ) -> None:
        self._legacy_bounds = bool(legacy_bounds)
        if width is None and height is None:
            # Unallocated grid: iteration is the only defined operation
            self._w = 0
            self._h = 0
            self._array: Optional[List[Any]] = None
            return
        if width is None or height is None:
            raise ValueError("GridArray needs both width and height")
        if width <= 0 or height <= 0:
            raise ValueError("GridArray dimensions must be positive")
        self._w = int(width)
        self._h = int(height)
        # Every cell shares the same default object
        self._array = [default] * (self._w * self._h)
        logger.debug("Initialized GridArray %dx%d with default %r", self._w, self._h, default)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def legacy_bounds(self) -> bool:
        """Whether index ``width * height`` is accepted as in range."""
        return self._legacy_bounds

    def length(self) -> int:
        """Number of elements in the buffer, useful when using ``grid[i]``."""
        return len(self)

    def _upper_bound(self) -> int:
        size = self._w * self._h
        return size + 1 if self._legacy_bounds else size

    def is_valid_index(self, x: int, y: int) -> bool:
        """Return True if ``(x, y)`` maps to an index inside the grid.

        Never raises; use it to guard calls that would otherwise fail.
        """
        index = y * self._w + x
        return 0 <= index < self._upper_bound()

    def calculate_index(self, x: int, y: int) -> int:
        """Translate ``(x, y)`` into a linear buffer index.

        Raises:
            IndexOutOfRange: if the index lies outside the grid.
        """
        index = y * self._w + x
        if not 0 <= index < self._upper_bound():
            logger.debug("Index %d for (%d, %d) is outside grid %dx%d", index, x, y, self._w, self._h)
            raise IndexOutOfRange(
                f"({x}, {y}) maps to index {index}, outside grid {self._w}x{self._h}",
                x,
                y,
                index,
            )
        return index

    def get(self, x: int, y: int) -> T:
        """Return the element at ``(x, y)``.

        Raises CoordinateOutOfRange, chained to the underlying indexing
        failure, when the coordinates cannot be read.
        """
        try:
            return self._array[self.calculate_index(x, y)]
        except IndexError as e:
            raise CoordinateOutOfRange(
                f"Cannot read ({x}, {y}) from grid {self._w}x{self._h}; check x and y",
                x,
                y,
                getattr(e, "index", None),
            ) from e

    def set(self, x: int, y: int, value: T) -> None:
        """Overwrite the element at ``(x, y)``.

        Raises IndexOutOfRange if the coordinates are out of range.
        """
        self._array[self.calculate_index(x, y)] = value

    def __getitem__(self, key: Union[int, Tuple[int, int]]) -> T:
        if isinstance(key, tuple):
            x, y = key
            return self.get(x, y)
        # No bounds checks on flat access
        return self._array[key]

    def __setitem__(self, key: Union[int, Tuple[int, int]], value: T) -> None:
        if isinstance(key, tuple):
            x, y = key
            self.set(x, y, value)
            return
        self._array[key] = value

    def __len__(self) -> int:
        if self._array is None:
            return 0
        return len(self._array)

    def __iter__(self) -> Iterator[T]:
        if self._array is None:
            return iter(())
        return iter(self._array)

    def flood_fill(self, x: int, y: int, new_value: T, target_value: T) -> int:
        """Replace the 4-connected region of ``target_value`` around ``(x, y)``.

        Cells are visited depth-first, trying right, left, down and up from
        each filled cell. A cell stops the fill when it already holds
        ``new_value`` or does not equal ``target_value``. Neighbours that fall
        outside the buffer are skipped.

        Args:
            x: Seed X coordinate.
            y: Seed Y coordinate.
            new_value: Value written into the region.
            target_value: Value a cell must hold to be filled.

        Returns:
            The number of cells written.

        Raises:
            CoordinateOutOfRange: if the seed coordinate is not valid.
        """
        if not self.is_valid_index(x, y):
            raise CoordinateOutOfRange(
                f"Flood fill seed ({x}, {y}) is outside grid {self._w}x{self._h}",
                x,
                y,
            )
        # Under legacy bounds the one-past-the-end seed passes the check but not this read
        self.get(x, y)

        array = self._array
        size = len(array)
        pending: List[Tuple[int, int]] = [(x, y)]
        filled = 0
        while pending:
            cx, cy = pending.pop()
            index = cy * self._w + cx
            if not 0 <= index < size:
                continue
            current = array[index]
            if current == new_value:
                continue
            if current != target_value:
                continue
            array[index] = new_value
            filled += 1
            # Pushed in reverse so they pop in FILL_OFFSETS order
            for dx, dy in reversed(FILL_OFFSETS):
                pending.append((cx + dx, cy + dy))

        logger.debug("Flood fill from (%d, %d) wrote %d cells", x, y, filled)
        return filled

    def to_rows(self) -> List[List[T]]:
        """Return a row-major copy of the grid as nested lists."""
        if self._array is None:
            return []
        return [self._array[y * self._w:(y + 1) * self._w] for y in range(self._h)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]], *, legacy_bounds: bool = False) -> "GridArray[T]":
        """Create a grid from equal-length rows, ``rows[y][x]``.

        Raises:
            ValueError: if there are no rows or the rows differ in length.
        """
        if not rows:
            raise ValueError("rows must not be empty")
        width = len(rows[0])
        if width == 0:
            raise ValueError("row width must be positive")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")

        grid: GridArray[T] = cls(width, len(rows), legacy_bounds=legacy_bounds)
        grid._array = [value for row in rows for value in row]
        return grid

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self._w, "height": self._h, "array": list(self._array or [])}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, legacy_bounds: bool = False) -> "GridArray[Any]":
        """Restore a grid from its ``width``, ``height`` and ``array`` fields."""
        try:
            width = data["width"]
            height = data["height"]
            array = data["array"]
        except (KeyError, TypeError) as e:
            raise GridValidationError(f"Grid data is missing field {e}") from e

        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise GridValidationError(f"Grid {name} must be a positive integer, got {value!r}")
        if not isinstance(array, list):
            raise GridValidationError("Grid array must be a list")
        if len(array) != width * height:
            raise GridValidationError(
                f"Grid array has {len(array)} elements; expected {width * height} for {width}x{height}"
            )

        grid: GridArray[Any] = cls(width, height, legacy_bounds=legacy_bounds)
        grid._array = list(array)
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridArray):
            return NotImplemented
        return self._w == other._w and self._h == other._h and self._array == other._array

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"GridArray(width={self._w}, height={self._h})"
