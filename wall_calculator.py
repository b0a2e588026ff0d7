# wall_calculator.py
# Requirement calculator: wall dimensions + pixel pitch + environment -> cabinets,
# resolution, LAN ports, controller, power, circuits and main breaker.
#
# Pure functions only. Results are frozen dataclasses; the pitch sweep is memoised
# on the full input tuple and can be invalidated with clear_cache().

import logging
import math
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Sequence, Tuple

from wall_config import DEFAULT_CONFIG, PlannerConfig

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a request is rejected before any computation."""


@dataclass(frozen=True)
class CalculationResult:
    pitch: float
    environment: str
    width_mm: float
    height_mm: float

    resolution_width: int
    resolution_height: int
    resolution_class: str
    total_pixels: int

    cabinets_width: int
    cabinets_height: int
    total_cabinets: int
    pixels_per_cabinet_width: int
    pixels_per_cabinet_height: int
    pixels_per_cabinet: int

    cabinets_per_port: int
    lan_ports: int
    controller: str

    peak_power_watts: float
    avg_power_watts: float
    amps_220v: float
    cabinets_per_circuit: int
    circuits_220v: int
    main_breaker_size: int
    main_breaker_at_ceiling: bool

    area_sq_m: float

    def to_dict(self) -> dict:
        return asdict(self)


# -----------------------
# Helpers
# -----------------------

def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def smallest_at_least(table: Sequence[float], target: float):
    """
    Return the first entry of the ascending *table* that is >= *target*.
    Saturates at the last (largest) entry when nothing qualifies.
    """
    for size in table:
        if size >= target:
            return size
    return table[-1]


def classify_resolution(width_px: int, height_px: int,
                        config: PlannerConfig = DEFAULT_CONFIG) -> str:
    long_side = max(width_px, height_px)
    short_side = min(width_px, height_px)
    for label, min_long, min_short in config.resolution_tiers:
        if long_side >= min_long and short_side >= min_short:
            return label
    return config.resolution_fallback


def select_controller(lan_ports: int, config: PlannerConfig = DEFAULT_CONFIG) -> str:
    # Multiple VX16s: the unit count is left to the caller (lan_ports / 16)
    for max_ports, model in config.controller_tiers:
        if lan_ports <= max_ports:
            return model
    return config.controller_fallback


def validate_request(width_mm, height_mm, pitch, environment,
                     config: PlannerConfig = DEFAULT_CONFIG) -> None:
    # "not > 0" also rejects NaN
    if not width_mm > 0:
        raise InvalidInputError(f"width_mm must be positive, got {width_mm!r}")
    if not height_mm > 0:
        raise InvalidInputError(f"height_mm must be positive, got {height_mm!r}")
    if pitch not in config.pitches:
        raise InvalidInputError(
            f"Unsupported pitch {pitch!r}; expected one of {list(config.pitches)}"
        )
    if environment not in config.environments:
        raise InvalidInputError(
            f"Unknown environment {environment!r}; expected one of {list(config.environments)}"
        )


# -----------------------
# Calculator
# -----------------------

def calculate_requirements(width_mm: float, height_mm: float, pitch: float, environment: str,
                           config: PlannerConfig = DEFAULT_CONFIG) -> CalculationResult:
    """Compute the full requirement record for one (dimensions, pitch, environment) tuple."""
    validate_request(width_mm, height_mm, pitch, environment, config)

    # 1. Cabinets, rounded up
    cabinets_width = math.ceil(width_mm / config.cabinet_width_mm)
    cabinets_height = math.ceil(height_mm / config.cabinet_height_mm)
    total_cabinets = cabinets_width * cabinets_height

    # 2. Resolution
    resolution_width = round_half_up(width_mm / pitch)
    resolution_height = round_half_up(height_mm / pitch)
    total_pixels = resolution_width * resolution_height
    resolution_class = classify_resolution(resolution_width, resolution_height, config)

    # Pixels per cabinet from the physical cabinet size, not total_pixels / total_cabinets
    ppc_w = round_half_up(config.cabinet_width_mm / pitch)
    ppc_h = round_half_up(config.cabinet_height_mm / pitch)
    pixels_per_cabinet = max(1, ppc_w * ppc_h)

    # 3. LAN ports; one cabinet per port at minimum even if it exceeds the safe budget
    max_cabinets_per_port = math.floor(config.safe_pixels_per_port / pixels_per_cabinet)
    cabinets_per_port = max(1, max_cabinets_per_port)
    lan_ports = math.ceil(total_cabinets / cabinets_per_port)
    controller = select_controller(lan_ports, config)

    # 4. Power
    spec = config.power_spec(environment)
    peak_power_watts = total_cabinets * spec.peak_watts_per_cabinet
    avg_power_watts = total_cabinets * spec.avg_watts_per_cabinet
    amps_220v = peak_power_watts / config.supply_voltage

    # 5. Branch circuits against the derated breaker current
    amps_per_cabinet = spec.peak_watts_per_cabinet / config.supply_voltage
    max_cabinets_per_circuit = math.floor(config.safe_amps_per_circuit / amps_per_cabinet)
    cabinets_per_circuit = max(1, max_cabinets_per_circuit)
    circuits_220v = math.ceil(total_cabinets / cabinets_per_circuit)

    # 6. Main breaker
    required_main_amps = amps_220v * config.main_safety_margin
    main_breaker_size = smallest_at_least(config.main_breaker_sizes, required_main_amps)
    at_ceiling = required_main_amps > config.main_breaker_sizes[-1]
    if at_ceiling:
        logger.warning(
            "Main breaker saturated at %sA (required %.1fA) for P%s %sx%smm",
            main_breaker_size, required_main_amps, pitch, width_mm, height_mm,
        )

    result = CalculationResult(
        pitch=pitch,
        environment=environment,
        width_mm=width_mm,
        height_mm=height_mm,
        resolution_width=resolution_width,
        resolution_height=resolution_height,
        resolution_class=resolution_class,
        total_pixels=total_pixels,
        cabinets_width=cabinets_width,
        cabinets_height=cabinets_height,
        total_cabinets=total_cabinets,
        pixels_per_cabinet_width=ppc_w,
        pixels_per_cabinet_height=ppc_h,
        pixels_per_cabinet=pixels_per_cabinet,
        cabinets_per_port=cabinets_per_port,
        lan_ports=lan_ports,
        controller=controller,
        peak_power_watts=peak_power_watts,
        avg_power_watts=avg_power_watts,
        amps_220v=amps_220v,
        cabinets_per_circuit=cabinets_per_circuit,
        circuits_220v=circuits_220v,
        main_breaker_size=main_breaker_size,
        main_breaker_at_ceiling=at_ceiling,
        area_sq_m=(width_mm / 1000) * (height_mm / 1000),
    )
    logger.debug("P%s %s: %s cabinets, %s ports, %s circuits",
                 pitch, environment, total_cabinets, lan_ports, circuits_220v)
    return result


@lru_cache(maxsize=128)
def _sweep(width_mm, height_mm, environment, config) -> Tuple[CalculationResult, ...]:
    return tuple(
        calculate_requirements(width_mm, height_mm, pitch, environment, config)
        for pitch in config.pitches
    )


def calculate_all_pitches(width_mm: float, height_mm: float, environment: str,
                          config: PlannerConfig = DEFAULT_CONFIG) -> Tuple[CalculationResult, ...]:
    """One result per supported pitch, in config order."""
    return _sweep(width_mm, height_mm, environment, config)


def result_for_pitch(results: Sequence[CalculationResult], pitch: float) -> CalculationResult:
    for result in results:
        if result.pitch == pitch:
            return result
    raise InvalidInputError(f"No result for pitch {pitch!r}")


def clear_cache() -> None:
    _sweep.cache_clear()
