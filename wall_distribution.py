# wall_distribution.py
# Cabinet -> LAN port / power circuit assignment, and grouping of circuits into
# distribution blocks (MCCBs).
#
# Notes:
# - Cabinets are numbered along a vertical snake: even columns top to bottom,
#   odd columns bottom to top, which follows a continuous cable run.
# - Groups are filled in snake order with balanced sizes (e.g. 11, 11, 11, 11)
#   rather than sequentially (14, 14, 14, 2); sizes never differ by more than one.

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

import numpy as np

from wall_calculator import CalculationResult, InvalidInputError, round_half_up, smallest_at_least
from wall_config import DEFAULT_CONFIG, PlannerConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CabinetCell:
    x: int
    y: int
    snake_index: int
    port_id: int
    circuit_id: int


@dataclass(frozen=True)
class PortSummary:
    id: int
    cabinet_count: int
    pixel_count: int
    load_percentage: float


@dataclass(frozen=True)
class CircuitSummary:
    id: int
    cabinet_count: int
    watts: float
    amps: float


@dataclass(frozen=True)
class DistributionBlock:
    id: int
    circuits: Tuple[CircuitSummary, ...]
    total_amps: float
    breaker_size: int
    at_capacity_ceiling: bool


@dataclass(frozen=True)
class WallDistribution:
    cells: Tuple[CabinetCell, ...]
    ports: Tuple[PortSummary, ...]
    circuits: Tuple[CircuitSummary, ...]
    blocks: Tuple[DistributionBlock, ...]
    cabinets_width: int

    def cell_at(self, x: int, y: int) -> CabinetCell:
        # cells are stored row-major
        return self.cells[y * self.cabinets_width + x]


# -----------------------
# Assignment
# -----------------------

@lru_cache(maxsize=256)
def assign_balanced(total_items: int, group_count: int) -> Tuple[int, ...]:
    """
    Return a group id for each of *total_items* positions.

    Every group gets floor(total_items / group_count) items; the first
    total_items % group_count groups (in id order) get one extra. Ids are
    contiguous, so position i belongs to the group covering that slice.
    """
    if total_items < 0:
        raise InvalidInputError(f"total_items must be >= 0, got {total_items}")
    if group_count < 1:
        raise InvalidInputError(f"group_count must be >= 1, got {group_count}")

    base_size, remainder = divmod(total_items, group_count)
    sizes = np.full(group_count, base_size, dtype=np.int64)
    sizes[:remainder] += 1
    return tuple(np.repeat(np.arange(group_count), sizes).tolist())


def snake_index(x: int, y: int, cabinets_width: int, cabinets_height: int) -> int:
    """Position of cabinet (x, y) along the column-major serpentine path."""
    if not (0 <= x < cabinets_width and 0 <= y < cabinets_height):
        raise InvalidInputError(
            f"Cabinet ({x}, {y}) outside {cabinets_width}x{cabinets_height} grid"
        )
    if x % 2 == 0:
        return x * cabinets_height + y
    return x * cabinets_height + (cabinets_height - 1 - y)


def build_cells(cabinets_width: int, cabinets_height: int,
                lan_ports: int, circuits: int) -> Tuple[CabinetCell, ...]:
    total = cabinets_width * cabinets_height
    port_assignments = assign_balanced(total, lan_ports)
    circuit_assignments = assign_balanced(total, circuits)

    cells = []
    for y in range(cabinets_height):
        for x in range(cabinets_width):
            idx = snake_index(x, y, cabinets_width, cabinets_height)
            cells.append(CabinetCell(
                x=x,
                y=y,
                snake_index=idx,
                port_id=port_assignments[idx],
                circuit_id=circuit_assignments[idx],
            ))
    return tuple(cells)


# -----------------------
# Summaries
# -----------------------

def _counts(cells: Sequence[CabinetCell], attr: str) -> Dict[int, int]:
    counts: Dict[int, int] = {}
    for cell in cells:
        group_id = getattr(cell, attr)
        counts[group_id] = counts.get(group_id, 0) + 1
    return dict(sorted(counts.items()))


def summarize_ports(cells: Sequence[CabinetCell], result: CalculationResult,
                    config: PlannerConfig = DEFAULT_CONFIG) -> Tuple[PortSummary, ...]:
    # Average pixels per cabinet over the whole wall, load vs. the raw port ceiling
    pixels_per_cabinet = result.total_pixels / result.total_cabinets
    ports = []
    for port_id, count in _counts(cells, "port_id").items():
        pixels = round_half_up(count * pixels_per_cabinet)
        ports.append(PortSummary(
            id=port_id,
            cabinet_count=count,
            pixel_count=pixels,
            load_percentage=pixels / config.max_pixels_per_port * 100,
        ))
    return tuple(ports)


def summarize_circuits(cells: Sequence[CabinetCell], result: CalculationResult,
                       config: PlannerConfig = DEFAULT_CONFIG) -> Tuple[CircuitSummary, ...]:
    watts_per_cabinet = result.peak_power_watts / result.total_cabinets
    circuits = []
    for circuit_id, count in _counts(cells, "circuit_id").items():
        watts = count * watts_per_cabinet
        circuits.append(CircuitSummary(
            id=circuit_id,
            cabinet_count=count,
            watts=watts,
            amps=watts / config.supply_voltage,
        ))
    return tuple(circuits)


def group_blocks(circuits: Sequence[CircuitSummary],
                 config: PlannerConfig = DEFAULT_CONFIG) -> Tuple[DistributionBlock, ...]:
    """Chunk circuits into distribution blocks of config.circuits_per_block, ids from 1."""
    size = config.circuits_per_block
    table = config.block_breaker_sizes
    blocks: List[DistributionBlock] = []
    for start in range(0, len(circuits), size):
        members = tuple(circuits[start:start + size])
        total_amps = sum(c.amps for c in members)
        required = total_amps * config.block_safety_margin
        breaker = smallest_at_least(table, required)
        at_ceiling = required > table[-1]
        if at_ceiling:
            logger.warning("Distribution block %d saturated at %sA (required %.1fA)",
                           start // size + 1, breaker, required)
        blocks.append(DistributionBlock(
            id=start // size + 1,
            circuits=members,
            total_amps=total_amps,
            breaker_size=breaker,
            at_capacity_ceiling=at_ceiling,
        ))
    return tuple(blocks)


def distribute(result: CalculationResult,
               config: PlannerConfig = DEFAULT_CONFIG) -> WallDistribution:
    """Cells, port/circuit summaries and distribution blocks for one result."""
    cells = build_cells(result.cabinets_width, result.cabinets_height,
                        result.lan_ports, result.circuits_220v)
    circuits = summarize_circuits(cells, result, config)
    distribution = WallDistribution(
        cells=cells,
        ports=summarize_ports(cells, result, config),
        circuits=circuits,
        blocks=group_blocks(circuits, config),
        cabinets_width=result.cabinets_width,
    )
    logger.debug("P%s distribution: %d ports, %d circuits, %d blocks", result.pitch,
                 len(distribution.ports), len(distribution.circuits), len(distribution.blocks))
    return distribution
