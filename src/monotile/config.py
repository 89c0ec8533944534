"""Physical constants of the printed tile and their YAML loader."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass(frozen=True)
class TileConfig:
    """Dimensions used when turning kite units into millimetres.

    ``unit`` is the length in mm of one kite unit.  ``inset`` is the
    fraction of a unit by which the groove kite is shrunk; the groove
    kite is also raised by the same fraction.  ``height`` is the base
    slab thickness in kite units.
    """

    unit: float = 12.0
    inset: float = 0.03
    height: float = 0.2

    def __post_init__(self) -> None:
        if not self.unit > 0:
            raise ValueError(f"unit must be positive, got {self.unit}")
        if not 0 <= self.inset < 1:
            raise ValueError(f"inset must be in [0, 1), got {self.inset}")
        if not self.height > 0:
            raise ValueError(f"height must be positive, got {self.height}")

    def with_overrides(self, **overrides: Optional[float]) -> "TileConfig":
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


DEFAULT = TileConfig()


def config_from_dict(data: Dict[str, Any]) -> TileConfig:
    known = {f.name for f in fields(TileConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    values = {}
    for k, v in data.items():
        # bool is an int subclass; "unit: yes" is not a size
        if isinstance(v, bool):
            raise ValueError(f"bad value for {k}: {v!r}")
        try:
            values[k] = float(v)
        except (TypeError, ValueError):
            raise ValueError(f"bad value for {k}: {v!r}") from None
    return TileConfig(**values)


def load_config(path: Path | str) -> TileConfig:
    """Read a ``TileConfig`` from a YAML mapping.

    Missing keys take their default values.  An empty file yields the
    defaults.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"config not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping: {config_path}")
    return config_from_dict(data)


def save_config(config: TileConfig, path: Path | str) -> None:
    with Path(path).open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config.to_dict(), fp, sort_keys=False)


__all__ = ['TileConfig', 'DEFAULT', 'config_from_dict', 'load_config', 'save_config']
