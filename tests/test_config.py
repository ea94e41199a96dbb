import json
import logging

import pytest

from northernlights.config import ConfigError, ConfigLoader


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__(logging.DEBUG)
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


@pytest.fixture
def collected():
    config_logger = logging.getLogger("northernlights.config")
    handler = _Collector()
    previous_level = config_logger.level
    config_logger.addHandler(handler)
    config_logger.setLevel(logging.INFO)
    yield handler.messages
    config_logger.removeHandler(handler)
    config_logger.setLevel(previous_level)


@pytest.fixture
def strategy_file(tmp_path):
    path = tmp_path / "strategy.cfg"
    path.write_text(
        json.dumps(
            {
                "strategy": {
                    "name": "momentum",
                    "lookback": 14,
                    "threshold": 0.5,
                    "enabled": True,
                },
                "risk": 1.0,
                "tags": [1, 2],
                "nothing": None,
            }
        ),
        encoding="utf-8",
    )
    return path


def test_basic_load_and_get(strategy_file):
    config = ConfigLoader()
    config.load(strategy_file)
    assert config.get("some_integer_key", 42) == 42


def test_nested_values_are_flattened(strategy_file):
    config = ConfigLoader()
    config.load(strategy_file)
    assert config.get("strategy.name", "") == "momentum"
    assert config.get("strategy.lookback", 0) == 14
    assert config.get("strategy.threshold", 0.0) == 0.5
    assert config.get("strategy.enabled", False) is True
    assert config.get("risk", 0.0) == 1.0


def test_arrays_and_nulls_are_not_stored(strategy_file):
    config = ConfigLoader()
    config.load(strategy_file)
    assert "tags" not in config
    assert "nothing" not in config
    assert len(config) == 5


def test_type_mismatch_returns_default(strategy_file):
    config = ConfigLoader()
    config.load(strategy_file)
    assert config.get("strategy.lookback", 1.5) == 1.5
    assert config.get("strategy.enabled", 7) == 7
    assert config.get("strategy.name", 3) == 3


def test_get_without_default_returns_stored_value(strategy_file):
    config = ConfigLoader()
    config.load(strategy_file)
    assert config.get("strategy.name") == "momentum"
    assert config.get("missing") is None


def test_later_load_overrides_and_merges(tmp_path, strategy_file):
    override = tmp_path / "risk.cfg"
    override.write_text(json.dumps({"risk": 2.5, "max_positions": 3}), encoding="utf-8")
    config = ConfigLoader()
    config.load(strategy_file)
    config.load(override)
    assert config.get("risk", 0.0) == 2.5
    assert config.get("max_positions", 0) == 3
    assert config.get("strategy.lookback", 0) == 14


def test_missing_file_raises(tmp_path):
    config = ConfigLoader()
    with pytest.raises(ConfigError):
        config.load(tmp_path / "absent.cfg")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.cfg"
    path.write_text("{not json", encoding="utf-8")
    config = ConfigLoader()
    with pytest.raises(ConfigError):
        config.load(path)
    assert len(config) == 0


def test_non_object_top_level_raises(tmp_path):
    path = tmp_path / "list.cfg"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigLoader().load(path)


def test_log_values_reports_each_entry(strategy_file, collected):
    config = ConfigLoader()
    config.load(strategy_file)
    collected.clear()
    config.log_values()
    assert collected[0] == "Config Values:"
    assert "  strategy.enabled = true" in collected
    assert "  strategy.lookback = 14" in collected
    assert "  strategy.name = momentum" in collected
    assert len(collected) == 6
    assert len(config) == 5
    assert config.get("strategy.lookback", 0) == 14