# wall_config.py
# Planner constants: cabinet size, port capacity, power coefficients and breaker tables.
#
# Everything the calculator needs is carried on a PlannerConfig instance so that
# environments and tables can be swapped without touching the calculation code.
# Values can be overridden from the environment (or a .env file) with LED_WALL_* keys.

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration validation error"""


@dataclass(frozen=True)
class PowerSpec:
    """Per-cabinet wattage for one installation environment."""

    peak_watts_per_cabinet: float
    avg_watts_per_cabinet: float


# -----------------------
# Defaults
# -----------------------

PIXEL_PITCHES = (1.25, 1.56, 1.95, 2.5, 2.6, 2.9, 3.91)

POWER_SPECS = (
    ("indoor", PowerSpec(peak_watts_per_cabinet=250, avg_watts_per_cabinet=100)),
    ("outdoor", PowerSpec(peak_watts_per_cabinet=500, avg_watts_per_cabinet=200)),
)

# Standard circuit breaker sizes (ampere trip), ascending
MAIN_BREAKER_SIZES = (
    20, 30, 40, 50, 60, 70, 80, 100, 125, 150, 175, 200,
    225, 250, 300, 350, 400, 500, 600, 800, 1000, 1200,
)
MCCB_SIZES = (32, 40, 63, 80, 100, 125, 160, 200, 250, 400)

# (max LAN ports, controller model), checked in order
CONTROLLER_TIERS = ((1, "TB20"), (2, "MCTRL300"), (4, "MCTRL600"), (16, "VX16s"))

# (label, long side, short side), highest first
RESOLUTION_TIERS = (
    ("8K", 7680, 4320),
    ("4K", 3840, 2160),
    ("QHD", 2560, 1440),
    ("FHD", 1920, 1080),
    ("HD", 1280, 720),
)


@dataclass(frozen=True)
class PlannerConfig:
    cabinet_width_mm: float = 500
    cabinet_height_mm: float = 1000
    pitches: Tuple[float, ...] = PIXEL_PITCHES

    max_pixels_per_port: int = 650000
    safe_capacity_percentage: float = 0.85

    supply_voltage: float = 220
    circuit_breaker_amps: float = 20
    safe_load_factor: float = 0.8
    main_safety_margin: float = 1.25
    main_breaker_sizes: Tuple[int, ...] = MAIN_BREAKER_SIZES

    circuits_per_block: int = 6
    block_safety_margin: float = 1.25
    block_breaker_sizes: Tuple[int, ...] = MCCB_SIZES

    power_specs: Tuple[Tuple[str, PowerSpec], ...] = POWER_SPECS
    controller_tiers: Tuple[Tuple[int, str], ...] = CONTROLLER_TIERS
    controller_fallback: str = "Multiple VX16s"
    resolution_tiers: Tuple[Tuple[str, int, int], ...] = RESOLUTION_TIERS
    resolution_fallback: str = "SD"

    log_level: str = field(default="INFO", compare=False)

    @property
    def safe_pixels_per_port(self) -> float:
        return self.max_pixels_per_port * self.safe_capacity_percentage  # 552,500

    @property
    def safe_amps_per_circuit(self) -> float:
        return self.circuit_breaker_amps * self.safe_load_factor  # 16A

    @property
    def environments(self) -> Tuple[str, ...]:
        return tuple(name for name, _spec in self.power_specs)

    def power_spec(self, environment: str) -> PowerSpec:
        """Return the PowerSpec for *environment*; KeyError if unknown."""
        for name, spec in self.power_specs:
            if name == environment:
                return spec
        raise KeyError(environment)


DEFAULT_CONFIG = PlannerConfig()


# -----------------------
# Environment overrides
# -----------------------

# env var -> (field, type)
_ENV_OVERRIDES = {
    "LED_WALL_SUPPLY_VOLTAGE": ("supply_voltage", float),
    "LED_WALL_MAX_PIXELS_PER_PORT": ("max_pixels_per_port", int),
    "LED_WALL_SAFE_CAPACITY": ("safe_capacity_percentage", float),
    "LED_WALL_CIRCUIT_BREAKER_AMPS": ("circuit_breaker_amps", float),
    "LED_WALL_SAFE_LOAD_FACTOR": ("safe_load_factor", float),
    "LED_WALL_MAIN_SAFETY_MARGIN": ("main_safety_margin", float),
    "LED_WALL_CIRCUITS_PER_BLOCK": ("circuits_per_block", int),
}


def _validate(config: PlannerConfig) -> None:
    if not 0 < config.safe_capacity_percentage <= 1:
        raise ConfigError("LED_WALL_SAFE_CAPACITY must be in (0, 1]")
    if not 0 < config.safe_load_factor <= 1:
        raise ConfigError("LED_WALL_SAFE_LOAD_FACTOR must be in (0, 1]")
    if config.supply_voltage <= 0:
        raise ConfigError("LED_WALL_SUPPLY_VOLTAGE must be positive")
    if config.max_pixels_per_port <= 0:
        raise ConfigError("LED_WALL_MAX_PIXELS_PER_PORT must be positive")
    if config.circuit_breaker_amps <= 0:
        raise ConfigError("LED_WALL_CIRCUIT_BREAKER_AMPS must be positive")
    if config.main_safety_margin < 1:
        raise ConfigError("LED_WALL_MAIN_SAFETY_MARGIN must be at least 1")
    if config.circuits_per_block < 1:
        raise ConfigError("LED_WALL_CIRCUITS_PER_BLOCK must be at least 1")
    if not isinstance(logging.getLevelName(config.log_level.upper()), int):
        raise ConfigError(f"Unknown LED_WALL_LOG_LEVEL: {config.log_level}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> PlannerConfig:
    """
    Build a PlannerConfig from DEFAULT_CONFIG plus LED_WALL_* overrides.

    When *environ* is None the process environment is used, after loading a
    .env file from the working directory if one exists.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    changes = {}
    for var_name, (field_name, cast) in _ENV_OVERRIDES.items():
        raw = environ.get(var_name)
        if raw is None or raw.strip() == "":
            continue
        try:
            changes[field_name] = cast(raw.strip())
        except ValueError:
            raise ConfigError(f"Invalid {var_name}: {raw!r}") from None

    level = environ.get("LED_WALL_LOG_LEVEL")
    if level:
        changes["log_level"] = level.strip().upper()

    config = replace(DEFAULT_CONFIG, **changes)
    _validate(config)
    if changes:
        logger.info("Config overrides applied: %s", sorted(changes))
    return config
