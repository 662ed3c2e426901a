# transfer_planner/main.py
"""Console bootstrap for the transfer planner."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, Optional

from dotenv import load_dotenv

from .config import CONFIG, CONFIG_PATH, Config, load_config
from .core.catalog import ItemCatalog
from .persistence.event_log import EventLog
from .utils.cli.command_parser import parse_command
from .utils.cli.commands import Session, execute

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(cfg: Config = CONFIG) -> None:
    """Apply the global and per-module log levels from ``cfg``."""

    numeric_level = getattr(logging, cfg.logging.global_level, logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)

    for module_name, level_str in cfg.logging.module_levels.items():
        module_numeric_level = getattr(logging, level_str.upper(), None)
        if module_numeric_level is not None:
            logging.getLogger(module_name).setLevel(module_numeric_level)
        else:
            logger.warning("Invalid log level '%s' for module '%s' in config.", level_str, module_name)


def bootstrap(config_path: str | Path | None = None) -> Session:
    """Load ``.env`` and configuration, then return a ready console session."""

    env_path = Path(".env")
    if env_path.exists():
        load_dotenv(env_path)

    if config_path is None:
        config_path = os.getenv("TRANSFER_PLANNER_CONFIG") or CONFIG_PATH
    actual_config_path = Path(config_path)
    if not actual_config_path.is_file():
        logger.warning("Config %s not found; using defaults.", actual_config_path)
    cfg = load_config(actual_config_path)
    configure_logging(cfg)

    paths = cfg.paths or {}
    catalog = ItemCatalog.load(paths.get("catalog"))
    event_log = EventLog(paths["event_log"]) if paths.get("event_log") else None

    session = Session.create(
        catalog=catalog,
        event_log=event_log,
        stack_limit=cfg.planner.stack_limit,
        max_replans=cfg.planner.max_replans,
        allow_partial=cfg.planner.allow_partial,
        inventories=cfg.inventories,
    )
    logger.info(
        "[Bootstrap] stack limit %s, inventories %s, %s catalog items",
        cfg.planner.stack_limit,
        ", ".join(session.store.inventory_ids()),
        len(catalog),
    )
    return session


def run(session: Session, stdin: IO[str] = sys.stdin, stdout: IO[str] = sys.stdout) -> None:
    """Read ``/commands`` from ``stdin`` until EOF or ``/quit``."""

    for line in stdin:
        line = line.strip()
        if not line:
            continue
        cmd = parse_command(line)
        if cmd is None:
            print("Commands start with '/'. Try /help.", file=stdout)
            continue
        for out in execute(cmd, session):
            print(out, file=stdout)
        if not session.running:
            break


def main(config_path: Optional[str] = None) -> None:
    session = bootstrap(config_path)
    run(session)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
