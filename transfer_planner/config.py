"""Simple configuration loader for transfer_planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"


@dataclass
class PlannerConfig:
    """Configuration values for the planner section."""

    stack_limit: int = 99
    max_replans: int = 1
    allow_partial: bool = False


@dataclass
class InventoriesConfig:
    """Fixed slot counts per inventory kind."""

    player: int = 36
    chest: int = 27

    def capacity_for(self, kind: str) -> int:
        """Return the slot count for ``kind`` (``player`` or ``chest``)."""

        try:
            return int(getattr(self, kind))
        except AttributeError:
            raise KeyError(f"Unknown inventory kind: {kind!r}") from None


@dataclass
class LoggingConfig:
    """Log levels applied by :mod:`transfer_planner.main`."""

    global_level: str = "INFO"
    module_levels: Dict[str, str] = field(default_factory=dict)


@dataclass
class Config:
    """Top level configuration dataclass."""

    planner: PlannerConfig
    inventories: InventoriesConfig
    logging: LoggingConfig
    paths: Optional[Dict[str, Any]] = None
    cache: Optional[Dict[str, Any]] = None


def _parse_config(data: dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""

    planner_data = data.get("planner") or {}
    planner = PlannerConfig(
        stack_limit=int(planner_data.get("stack_limit", 99)),
        max_replans=int(planner_data.get("max_replans", 1)),
        allow_partial=bool(planner_data.get("allow_partial", False)),
    )

    inv_data = data.get("inventories") or {}
    inventories = InventoriesConfig(
        player=int(inv_data.get("player", 36)),
        chest=int(inv_data.get("chest", 27)),
    )

    log_data = data.get("logging") or {}
    logging_cfg = LoggingConfig(
        global_level=str(log_data.get("global_level", "INFO")).upper(),
        module_levels={
            str(k): str(v) for k, v in (log_data.get("module_levels") or {}).items()
        },
    )

    paths = data.get("paths")
    cache = data.get("cache")

    return Config(
        planner=planner,
        inventories=inventories,
        logging=logging_cfg,
        paths=paths,
        cache=cache,
    )


def load_config(path: Path = CONFIG_PATH) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`."""

    path = Path(path)
    if path.is_file():
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        raw = {}
    return _parse_config(raw)


# Load configuration at module import time.
CONFIG = load_config()


__all__ = [
    "CONFIG",
    "CONFIG_PATH",
    "Config",
    "PlannerConfig",
    "InventoriesConfig",
    "LoggingConfig",
    "load_config",
]
