# wall_tables.py
# pandas views of calculator / distribution output for the Streamlit page.

from typing import Sequence

import pandas as pd

from wall_calculator import CalculationResult
from wall_distribution import WallDistribution


def comparison_frame(results: Sequence[CalculationResult]) -> pd.DataFrame:
    """One row per pitch, the columns shown in the pitch comparison table."""
    rows = []
    for r in results:
        rows.append({
            "Pitch": f"P{r.pitch}",
            "Resolution": f"{r.resolution_width:,} x {r.resolution_height:,}",
            "Class": r.resolution_class,
            "Total pixels": r.total_pixels,
            "Cabinets": r.total_cabinets,
            "LAN ports": r.lan_ports,
            "Controller": r.controller,
            "Peak kW": round(r.peak_power_watts / 1000, 2),
            "Amps @220V": round(r.amps_220v, 2),
            "Circuits": r.circuits_220v,
            "Main breaker (A)": r.main_breaker_size,
        })
    return pd.DataFrame(rows)


def cells_frame(distribution: WallDistribution) -> pd.DataFrame:
    return pd.DataFrame(
        [(c.x, c.y, c.snake_index, c.port_id, c.circuit_id) for c in distribution.cells],
        columns=["x", "y", "snake_index", "port_id", "circuit_id"],
    )


def ports_frame(distribution: WallDistribution) -> pd.DataFrame:
    df = pd.DataFrame(
        [(p.id + 1, p.cabinet_count, p.pixel_count, p.load_percentage) for p in distribution.ports],
        columns=["Port", "Cabinets", "Pixels", "Load %"],
    )
    df["Load %"] = df["Load %"].round(1)
    return df


def circuits_frame(distribution: WallDistribution) -> pd.DataFrame:
    df = pd.DataFrame(
        [(c.id + 1, c.cabinet_count, c.watts, c.amps) for c in distribution.circuits],
        columns=["Circuit", "Cabinets", "Watts", "Amps"],
    )
    df["Amps"] = df["Amps"].round(2)
    return df


def blocks_frame(distribution: WallDistribution) -> pd.DataFrame:
    rows = []
    for block in distribution.blocks:
        rows.append({
            "MCCB": block.id,
            "Circuits": ", ".join(f"CO{c.id + 1}" for c in block.circuits),
            "Total amps": round(block.total_amps, 2),
            "Breaker (A)": block.breaker_size,
            "At ceiling": block.at_capacity_ceiling,
        })
    return pd.DataFrame(rows, columns=["MCCB", "Circuits", "Total amps", "Breaker (A)", "At ceiling"])
