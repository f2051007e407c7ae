from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, List

from .codec import decode_grid, encode_grid
from .errors import GridNotFound
from .grid import GridArray

logger = logging.getLogger(__name__)


class GridStorage:
    """Filesystem-backed storage for named grids.

    Each grid is one ``<name>.json`` file under ``root``. Writes are atomic
    so an interrupted save never leaves a partial file behind.
    """

    SUFFIX = ".json"

    def __init__(self, root: Path, *, indent: int = 2, legacy_bounds: bool = False) -> None:
        self.root = Path(root)
        self.indent = indent
        self.legacy_bounds = legacy_bounds
        self._ensure_dirs()

    def _ensure_dirs(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            raise ValueError(f"Invalid grid name: {name!r}")
        return self.root / f"{name}{self.SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.path_for(name).exists()

    def save(self, name: str, grid: GridArray[Any]) -> Path:
        """Write a grid atomically and return its path.

        Raises OSError on failure.
        """
        path = self.path_for(name)
        tmp_path = path.with_suffix(".json.tmp")
        payload = encode_grid(grid, indent=self.indent)
        logger.debug("Writing grid %s to temporary file: %s", name, tmp_path)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
        logger.info("Saved grid %s (%dx%d) to %s", name, grid.width, grid.height, path)
        return path

    def load(self, name: str) -> GridArray[Any]:
        """Read a stored grid.

        Raises:
            GridNotFound: if no grid with that name exists.
            GridValidationError: if the stored data is malformed.
        """
        path = self.path_for(name)
        if not path.exists():
            raise GridNotFound(f"No stored grid named {name!r} in {self.root}")
        text = path.read_text(encoding="utf-8")
        grid = decode_grid(text, legacy_bounds=self.legacy_bounds)
        logger.debug("Loaded grid %s from %s", name, path)
        return grid

    def delete(self, name: str) -> bool:
        path = self.path_for(name)
        if not path.exists():
            return False
        path.unlink()
        logger.info("Deleted grid %s", name)
        return True

    def names(self) -> List[str]:
        return sorted(p.stem for p in self.root.glob(f"*{self.SUFFIX}") if p.is_file())
