"""Tessellation settings and their YAML representation.

A settings file looks like::

    m: 48
    n: 24
    surface: torus
    params:
      major_radius: 3.0
      minor_radius: 1.0
    workers: 4

Every key is optional. Subdivision counts are limited to
``MIN_SUBDIVISIONS..MAX_SUBDIVISIONS``, matching the range an interactive
editor exposes.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from surfmesh.errors import ConfigurationError
from surfmesh.surfaces import SURFACES, SurfaceFunction, make_surface

logger = logging.getLogger(__name__)

MIN_SUBDIVISIONS = 1
MAX_SUBDIVISIONS = 256
DEFAULT_SUBDIVISIONS = 33


@dataclass
class TessellationSettings:
    """User-facing knobs for one tessellation run."""

    m: int = DEFAULT_SUBDIVISIONS
    n: int = DEFAULT_SUBDIVISIONS
    surface: str = "sphere"
    params: Dict[str, Any] = field(default_factory=dict)
    workers: Optional[int] = None

    @property
    def subdivisions(self) -> Tuple[int, int]:
        return self.m, self.n

    def validate(self) -> "TessellationSettings":
        """Check ranges and types; return ``self`` for chaining."""
        for label in ("m", "n"):
            value = getattr(self, label)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{label} must be an integer, got {value!r}")
            if not MIN_SUBDIVISIONS <= value <= MAX_SUBDIVISIONS:
                raise ConfigurationError(
                    f"{label} must be in [{MIN_SUBDIVISIONS}, {MAX_SUBDIVISIONS}], got {value}")
        if self.surface not in SURFACES:
            known = ", ".join(sorted(SURFACES))
            raise ConfigurationError(f"unknown surface '{self.surface}' (expected one of: {known})")
        if not isinstance(self.params, dict):
            raise ConfigurationError("params must be a mapping")
        if self.workers is not None:
            if isinstance(self.workers, bool) or not isinstance(self.workers, int) or self.workers < 1:
                raise ConfigurationError(f"workers must be a positive integer, got {self.workers!r}")
        return self

    def make_surface(self) -> SurfaceFunction:
        return make_surface(self.surface, **self.params)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["workers"] is None:
            del data["workers"]
        return data


def settings_from_dict(data: Optional[Dict[str, Any]]) -> TessellationSettings:
    """Build validated settings from a plain mapping."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("settings must be a mapping")
    bad_keys = [key for key in data if not isinstance(key, str)]
    if bad_keys:
        raise ConfigurationError(
            f"settings keys must be strings, got: {', '.join(sorted(map(repr, bad_keys)))}")
    known = {f.name for f in fields(TessellationSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"unknown settings key(s): {', '.join(unknown)}")
    params = data.get("params")
    if params is None:
        data = {**data, "params": {}}
    return TessellationSettings(**data).validate()


def load_settings(path: Path | str) -> TessellationSettings:
    """Read settings from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"settings file not found: {path}")
    with path.open("r", encoding="utf-8") as fp:
        try:
            data = yaml.safe_load(fp)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"cannot parse {path}: {exc}") from exc
    logger.debug("loaded settings from %s", path)
    return settings_from_dict(data)


def save_settings(settings: TessellationSettings, path: Path | str) -> None:
    """Write settings to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(settings.validate().to_dict(), fp, sort_keys=False)


__all__ = [
    "MIN_SUBDIVISIONS",
    "MAX_SUBDIVISIONS",
    "DEFAULT_SUBDIVISIONS",
    "TessellationSettings",
    "settings_from_dict",
    "load_settings",
    "save_settings",
]
