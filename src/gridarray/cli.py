from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from . import __version__
from .errors import GridArrayError, GridNotFound
from .grid import GridArray
from .logging_config import configure_logging
from .settings import Settings
from .storage import GridStorage

logger = logging.getLogger(__name__)


def parse_value(text: str) -> Any:
    """Parse a cell value as a JSON scalar, falling back to the raw string."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _format_cell(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gridarray",
        description="Create, inspect and flood fill stored grids",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--root", type=Path, default=None, help="Directory holding grid files")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a grid filled with one value")
    new.add_argument("name")
    new.add_argument("width", type=int)
    new.add_argument("height", type=int)
    new.add_argument("--value", type=parse_value, default=None, help="Initial cell value (JSON scalar)")

    show = sub.add_parser("show", help="Print a grid row by row")
    show.add_argument("name")

    set_ = sub.add_parser("set", help="Set a single cell")
    set_.add_argument("name")
    set_.add_argument("x", type=int)
    set_.add_argument("y", type=int)
    set_.add_argument("value", type=parse_value)

    fill = sub.add_parser("fill", help="Flood fill a 4-connected region")
    fill.add_argument("name")
    fill.add_argument("x", type=int)
    fill.add_argument("y", type=int)
    fill.add_argument("new", type=parse_value)
    fill.add_argument("target", type=parse_value)

    return parser.parse_args(argv)


def _log_level(verbosity: int, settings: Settings) -> int:
    if verbosity == 1:
        return logging.INFO
    if verbosity >= 2:
        return logging.DEBUG
    return settings.logging.level_value


def run(args: argparse.Namespace, settings: Settings) -> int:
    root = args.root if args.root is not None else Path(settings.storage.root)
    storage = GridStorage(root, indent=settings.storage.indent, legacy_bounds=settings.grid.legacy_bounds)

    if args.command == "new":
        value = args.value if args.value is not None else settings.grid.default_value
        grid: GridArray[Any] = GridArray(
            args.width, args.height, value, legacy_bounds=settings.grid.legacy_bounds
        )
        storage.save(args.name, grid)
        print(f"Created {args.name}: {grid.width}x{grid.height}")
        return 0

    grid = storage.load(args.name)

    if args.command == "show":
        for row in grid.to_rows():
            print(" ".join(_format_cell(v) for v in row))
        return 0

    if args.command == "set":
        grid.set(args.x, args.y, args.value)
        storage.save(args.name, grid)
        print(f"Set ({args.x}, {args.y}) in {args.name}")
        return 0

    if args.command == "fill":
        filled = grid.flood_fill(args.x, args.y, args.new, args.target)
        storage.save(args.name, grid)
        print(f"Filled {filled} cells in {args.name}")
        return 0

    raise AssertionError(f"Unhandled command: {args.command}")


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)

    try:
        settings = Settings.load(user_path=args.settings_path)
        configure_logging(level=_log_level(args.verbose, settings))
        return run(args, settings)
    except GridNotFound as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (GridArrayError, IndexError, ValueError) as e:
        # A legacy-bounds set at index width * height surfaces as a plain IndexError
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
