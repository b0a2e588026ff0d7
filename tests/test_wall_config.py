"""
Unit tests for planner configuration
"""

import pytest

from wall_config import DEFAULT_CONFIG, ConfigError, PlannerConfig, load_config


@pytest.mark.unit
class TestDefaults:

    def test_derived_capacities(self):
        assert DEFAULT_CONFIG.safe_pixels_per_port == pytest.approx(552500)
        assert DEFAULT_CONFIG.safe_amps_per_circuit == pytest.approx(16)

    def test_environments(self):
        assert DEFAULT_CONFIG.environments == ("indoor", "outdoor")
        assert DEFAULT_CONFIG.power_spec("outdoor").peak_watts_per_cabinet == 500
        with pytest.raises(KeyError):
            DEFAULT_CONFIG.power_spec("space")

    def test_tables_ascending(self):
        assert list(DEFAULT_CONFIG.main_breaker_sizes) == sorted(DEFAULT_CONFIG.main_breaker_sizes)
        assert list(DEFAULT_CONFIG.block_breaker_sizes) == sorted(DEFAULT_CONFIG.block_breaker_sizes)

    def test_hashable(self):
        assert hash(PlannerConfig()) == hash(DEFAULT_CONFIG)


@pytest.mark.unit
class TestLoadConfig:

    def test_empty_environment_gives_defaults(self):
        assert load_config({}) == DEFAULT_CONFIG

    def test_overrides(self):
        config = load_config({
            "LED_WALL_SUPPLY_VOLTAGE": "230",
            "LED_WALL_CIRCUITS_PER_BLOCK": "4",
            "LED_WALL_LOG_LEVEL": "debug",
        })

        assert config.supply_voltage == 230.0
        assert config.circuits_per_block == 4
        assert config.log_level == "DEBUG"

    def test_blank_values_ignored(self):
        assert load_config({"LED_WALL_SAFE_CAPACITY": "  "}) == DEFAULT_CONFIG

    @pytest.mark.parametrize("env", [
        {"LED_WALL_SUPPLY_VOLTAGE": "abc"},
        {"LED_WALL_SUPPLY_VOLTAGE": "0"},
        {"LED_WALL_SAFE_CAPACITY": "1.5"},
        {"LED_WALL_SAFE_LOAD_FACTOR": "0"},
        {"LED_WALL_CIRCUITS_PER_BLOCK": "0"},
        {"LED_WALL_CIRCUITS_PER_BLOCK": "2.5"},
        {"LED_WALL_MAIN_SAFETY_MARGIN": "0.9"},
        {"LED_WALL_LOG_LEVEL": "chatty"},
    ])
    def test_invalid_values(self, env):
        with pytest.raises(ConfigError):
            load_config(env)
