from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import GridValidationError

logger = logging.getLogger(__name__)


@dataclass
class GridSettings:
    legacy_bounds: bool = False
    default_value: Any = 0


@dataclass
class StorageSettings:
    root: str = "grids"
    indent: int = 2


@dataclass
class LoggingSettings:
    level: str = "WARNING"

    @property
    def level_value(self) -> int:
        return getattr(logging, self.level.upper(), logging.WARNING)


@dataclass
class Settings:
    grid: GridSettings = field(default_factory=GridSettings)
    storage: StorageSettings = field(default_factory=StorageSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            try:
                return yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise GridValidationError(f"Invalid YAML in settings file {path}: {e}") from e

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _section(data: dict, name: str, section_cls: type) -> Any:
        raw = data.get(name)
        if raw is None:
            # An empty "grid:" block in YAML loads as None
            return section_cls()
        if not isinstance(raw, dict):
            raise GridValidationError(f"Settings section '{name}' must be a mapping, got {type(raw).__name__}")
        known = {f.name for f in dataclasses.fields(section_cls)}
        unknown = sorted(str(k) for k in set(raw) - known)
        if unknown:
            raise GridValidationError(
                f"Unknown key(s) in settings section '{name}': {', '.join(unknown)}"
            )
        return section_cls(**raw)

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        if not isinstance(data, dict):
            raise GridValidationError("Settings file must contain a mapping at the top level")
        grid = cls._section(data, "grid", GridSettings)
        storage = cls._section(data, "storage", StorageSettings)
        logging_ = cls._section(data, "logging", LoggingSettings)
        grid.legacy_bounds = bool(grid.legacy_bounds)
        try:
            storage.indent = int(storage.indent)
        except (TypeError, ValueError) as e:
            raise GridValidationError(f"Settings storage.indent must be an integer, got {storage.indent!r}") from e
        return Settings(grid=grid, storage=storage, logging=logging_)

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("gridarray.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                if not isinstance(user_data, dict):
                    raise GridValidationError(f"Settings file {user_path} must contain a mapping at the top level")
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        data = dataclasses.asdict(self)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info("Saved settings to %s", path)
