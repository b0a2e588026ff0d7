# boq_report.py
# Plain-text preliminary bill of quantities for one wall configuration.

import datetime as dt
import math
from typing import Optional

from wall_calculator import CalculationResult
from wall_config import DEFAULT_CONFIG, PlannerConfig
from wall_distribution import WallDistribution

RULE = "-" * 50
PORTS_PER_VX16S = 16


def fmt_int(x) -> str:
    return f"{x:,}"


def fmt_mm(x) -> str:
    return f"{x:.0f}" if float(x).is_integer() else f"{x}"


def controller_units(result: CalculationResult, config: PlannerConfig = DEFAULT_CONFIG) -> int:
    """Controller count; only the fallback model is ganged."""
    if result.controller == config.controller_fallback:
        return math.ceil(result.lan_ports / PORTS_PER_VX16S)
    return 1


def boq_filename(result: CalculationResult) -> str:
    return f"BOQ_LED_P{result.pitch}_{fmt_mm(result.width_mm)}x{fmt_mm(result.height_mm)}.txt"


def build_boq(result: CalculationResult, distribution: WallDistribution,
              config: PlannerConfig = DEFAULT_CONFIG, date: Optional[dt.date] = None) -> str:
    date = date or dt.date.today()
    block_sizes = sorted({b.breaker_size for b in distribution.blocks})
    block_sizes_txt = ", ".join(f"{s}A" for s in block_sizes) or "n/a"
    ceiling_note = " (AT TABLE CEILING - verify supply)" if result.main_breaker_at_ceiling else ""

    lines = [
        "BILL OF QUANTITIES (BOQ) - PRELIMINARY",
        "Project: LED Wall Deployment",
        f"Date: {date.isoformat()}",
        "",
        RULE,
        "1. SYSTEM SPECIFICATIONS",
        RULE,
        f"- Screen Dimensions  : {fmt_mm(result.width_mm)}mm (W) x {fmt_mm(result.height_mm)}mm (H)",
        f"- Pixel Pitch        : P{result.pitch}",
        f"- Resolution         : {fmt_int(result.resolution_width)} x {fmt_int(result.resolution_height)}",
        f"- Resolution Class   : {result.resolution_class}",
        f"- Total Area         : {result.area_sq_m:.2f} m²",
        f"- Environment        : {result.environment.capitalize()}",
        "",
        RULE,
        "2. BILL OF MATERIALS (BOM)",
        RULE,
        "",
        "[A] LED DISPLAY MODULES",
        f"   - Item Description : {result.environment.capitalize()} LED Cabinet "
        f"({fmt_mm(config.cabinet_width_mm)}mm x {fmt_mm(config.cabinet_height_mm)}mm)",
        f"   - Quantity         : {result.total_cabinets} units",
        f"   - Grid Topology    : {result.cabinets_width} (W) x {result.cabinets_height} (H)",
        f"   - Total Resolution : {fmt_int(result.total_pixels)} pixels",
        "",
        "[B] CONTROL SYSTEM",
        f"   - Main Controller  : {result.controller} (or equivalent)",
        f"   - Quantity         : {controller_units(result, config)} unit(s)",
        f"   - Active LAN Ports : {result.lan_ports} ports used",
        f"   - Signal Cabling   : {result.lan_ports} runs of CAT6 (Main Lines)",
        "",
        "[C] POWER DISTRIBUTION",
        f"   - Main Breaker     : {result.main_breaker_size}A (Main Supply Requirement){ceiling_note}",
        f"   - Distro Blocks    : {len(distribution.blocks)} units (MCCB) @ {block_sizes_txt}",
        f"   - Branch Circuits  : {result.circuits_220v} units (CO) @ {config.circuit_breaker_amps:g}A each",
        f"   - Est. Peak Load   : {result.peak_power_watts / 1000:.2f} kW",
        f"   - Est. Avg Load    : {result.avg_power_watts / 1000:.2f} kW",
        f"   - Power Cabling    : {result.circuits_220v} runs (AC Loop Cables)",
        "",
        RULE,
        "* Note: This BOQ is an engineering estimate based on",
        "  standard power coefficients and "
        f"{fmt_mm(config.cabinet_width_mm)}x{fmt_mm(config.cabinet_height_mm)}mm panels.",
        "  Final cabling lengths and accessories must be verified",
        "  during site survey.",
    ]
    return "\n".join(lines) + "\n"
