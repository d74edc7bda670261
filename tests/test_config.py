import importlib

import pytest

import vending_fsm.config as config

ENV_NAMES = ("VENDING_ITEM_PRICE", "VENDING_INITIAL_STOCK", "LOG_LEVEL")


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env):
        for name in ENV_NAMES:
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(reload_config):
    cfg = reload_config()
    assert cfg.ITEM_PRICE == 10
    assert cfg.INITIAL_STOCK == 10
    assert cfg.LOG_LEVEL == "INFO"
    assert cfg.validate_config() == []


def test_env_overrides(reload_config):
    cfg = reload_config(VENDING_ITEM_PRICE="25", VENDING_INITIAL_STOCK="3", LOG_LEVEL="debug")
    assert cfg.ITEM_PRICE == 25
    assert cfg.INITIAL_STOCK == 3
    assert cfg.LOG_LEVEL == "DEBUG"


def test_validate_config_reports_bad_values(reload_config):
    cfg = reload_config(VENDING_ITEM_PRICE="0", VENDING_INITIAL_STOCK="abc")
    errors = cfg.validate_config()
    assert cfg.INITIAL_STOCK == 10
    assert any("VENDING_INITIAL_STOCK is not an integer" in e for e in errors)
    assert any("VENDING_ITEM_PRICE must be positive" in e for e in errors)


def test_unknown_log_level_falls_back_to_info(reload_config):
    cfg = reload_config(LOG_LEVEL="verbose")
    assert cfg.LOG_LEVEL == "INFO"
    assert any("LOG_LEVEL is not a logging level" in e for e in cfg.validate_config())
