import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict

from jsonschema import Draft202012Validator

from .errors import GridValidationError

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load_grid_schema() -> Dict[str, Any]:
    """
    Load the grid JSON schema bundled in gridarray/schemas.

    The function is cached since the schema is static.
    """
    text = resources.files("gridarray").joinpath("schemas").joinpath("grid.schema.json").read_text(encoding="utf-8")
    logger.debug("Loaded grid schema resource")
    return json.loads(text)


def validate_grid_dict(data: Dict[str, Any]) -> None:
    """
    Validate a persisted grid payload against the grid JSON schema.

    Raises:
        GridValidationError if the data is invalid.
    """
    validator = Draft202012Validator(_load_grid_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errors:
        # Log all errors, then raise the first to provide a clear exception
        for err in errors:
            logger.error("Grid schema validation error at %s: %s", list(err.path), err.message)
        first = errors[0]
        raise GridValidationError(f"Invalid grid data at {list(first.path)}: {first.message}") from first


__all__ = [
    "validate_grid_dict",
]
