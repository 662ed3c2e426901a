import logging

from transfer_planner.config import Config, InventoriesConfig, LoggingConfig, PlannerConfig
from transfer_planner.main import configure_logging


def _config(level: str, modules: dict) -> Config:
    return Config(
        planner=PlannerConfig(),
        inventories=InventoriesConfig(),
        logging=LoggingConfig(global_level=level, module_levels=modules),
    )


def test_logging_configured():
    logging.basicConfig(level=logging.WARNING, force=True)
    configure_logging(_config("INFO", {}))
    assert logging.getLogger().getEffectiveLevel() == logging.INFO


def test_module_levels_applied():
    configure_logging(
        _config("INFO", {"transfer_planner.planning": "DEBUG", "bogus.module": "LOUD"})
    )
    assert logging.getLogger("transfer_planner.planning").level == logging.DEBUG
    assert logging.getLogger("bogus.module").level == logging.NOTSET
    logging.getLogger("transfer_planner.planning").setLevel(logging.NOTSET)


def test_planner_modules_use_named_loggers():
    from transfer_planner.planning import fill, greedy_planner, locator

    assert greedy_planner.logger.name == "transfer_planner.planning.greedy_planner"
    assert fill.logger.name == "transfer_planner.planning.fill"
    assert locator.logger.name == "transfer_planner.planning.locator"
