# led_wall_planner.py
# Streamlit app: LED Video Wall Planner with pitch comparison, cabling and power distribution
#
# Usage:
#   1) pip install -e .
#   2) streamlit run led_wall_planner.py
#
# Notes:
# - Cabinets are 500 mm x 1000 mm; the wall is rounded up to whole cabinets.
# - Every supported pitch is computed for the comparison table; pick one for the detail view.
# - The grid preview colours cabinets by LAN port (Data view) or branch circuit (Power view),
#   numbered along the vertical snake cable path.

import logging

import plotly.graph_objects as go
import streamlit as st
from plotly.colors import qualitative

from boq_report import boq_filename, build_boq
from wall_calculator import InvalidInputError, calculate_all_pitches, result_for_pitch
from wall_config import load_config
from wall_distribution import distribute
from wall_tables import blocks_frame, circuits_frame, comparison_frame, ports_frame

st.set_page_config(page_title="LED Video Wall Planner", layout="wide")

config = load_config()
logging.basicConfig(level=config.log_level,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("led_wall_planner")

PALETTE = qualitative.Plotly + qualitative.Set2


# -----------------------
# Helpers
# -----------------------

@st.cache_data
def cached_results(width_mm, height_mm, environment):
    return calculate_all_pitches(width_mm, height_mm, environment, config)


def grid_figure(result, distribution, view_mode):
    """Draw the cabinet grid with Plotly, one tile per cabinet."""
    cab_w = config.cabinet_width_mm / 1000
    cab_h = config.cabinet_height_mm / 1000
    width_m = result.cabinets_width * cab_w
    height_m = result.cabinets_height * cab_h

    fig = go.Figure()
    fig.add_shape(type="rect", x0=0, y0=0, x1=width_m, y1=height_m, line=dict(width=2))

    # Actual screen outline when it does not land on a cabinet edge
    fig.add_shape(type="rect", x0=0, y0=height_m - result.height_mm / 1000,
                  x1=result.width_mm / 1000, y1=height_m,
                  line=dict(width=1, dash="dot", color="gray"))

    for cell in distribution.cells:
        x0 = cell.x * cab_w
        # row 0 is the top of the wall
        y0 = height_m - (cell.y + 1) * cab_h
        if view_mode == "Data":
            group_id, label = cell.port_id, f"P{cell.port_id + 1}"
        elif view_mode == "Power":
            group_id, label = cell.circuit_id, f"CO{cell.circuit_id + 1}"
        else:
            group_id, label = None, f"{cell.snake_index + 1}"

        fill = "rgba(0,0,0,0)" if group_id is None else PALETTE[group_id % len(PALETTE)]
        fig.add_shape(type="rect", x0=x0, y0=y0, x1=x0 + cab_w, y1=y0 + cab_h,
                      line=dict(width=1, color="white" if group_id is not None else "gray"),
                      fillcolor=fill, opacity=0.85)
        fig.add_annotation(x=x0 + cab_w / 2, y=y0 + cab_h / 2, text=label,
                           showarrow=False, font=dict(size=10))

    fig.update_xaxes(range=[-0.05, max(0.5, width_m + 0.05)], title_text="Width (m)",
                     showgrid=False, zeroline=False)
    fig.update_yaxes(range=[-0.05, max(0.5, height_m + 0.05)], title_text="Height (m)",
                     scaleanchor="x", scaleratio=1, showgrid=False, zeroline=False)
    fig.update_layout(margin=dict(l=10, r=10, t=10, b=10), height=420, dragmode=False)
    return fig


# -----------------------
# Sidebar Controls
# -----------------------

st.sidebar.title("Planner Controls")

st.sidebar.subheader("Screen Size")
width_mm = st.sidebar.number_input("Width (mm)", min_value=0.0, step=100.0, value=5000.0)
height_mm = st.sidebar.number_input("Height (mm)", min_value=0.0, step=100.0, value=3000.0)

st.sidebar.subheader("Environment")
environment = st.sidebar.radio("Installation", config.environments, horizontal=True)
spec = config.power_spec(environment)
st.sidebar.caption(f"{spec.peak_watts_per_cabinet:g} W peak / {spec.avg_watts_per_cabinet:g} W avg per cabinet")

# -----------------------
# Main: Comparison
# -----------------------

st.title("LED Video Wall Planner")
st.caption("Cabinets, resolution, LAN ports, controller and power per pixel pitch.")

try:
    results = cached_results(width_mm, height_mm, environment)
except InvalidInputError as exc:
    logger.info("Rejected input: %s", exc)
    st.error(str(exc))
    st.stop()

st.subheader("Pitch Comparison")
st.dataframe(comparison_frame(results), use_container_width=True, hide_index=True)

pitch = st.selectbox("Pitch for detailed report", config.pitches,
                     index=config.pitches.index(2.5) if 2.5 in config.pitches else 0,
                     format_func=lambda p: f"P{p}")
result = result_for_pitch(results, pitch)
distribution = distribute(result, config)

# -----------------------
# Main: Detail
# -----------------------

left, right = st.columns([1, 1])

with left:
    st.subheader("Layout")
    view_mode = st.radio("View", ["Physical", "Data", "Power"], horizontal=True)
    st.plotly_chart(grid_figure(result, distribution, view_mode), use_container_width=True)

with right:
    st.subheader("Specs")
    m1, m2 = st.columns(2)
    m1.metric("Resolution", f"{result.resolution_width:,} x {result.resolution_height:,}")
    m2.metric("Class", result.resolution_class)
    m1.metric("Cabinets", f"{result.total_cabinets} ({result.cabinets_width} x {result.cabinets_height})")
    m2.metric("Area (m²)", f"{result.area_sq_m:.2f}")
    m1.metric("LAN ports", result.lan_ports)
    m2.metric("Controller", result.controller)
    m1.metric("Peak load (kW)", f"{result.peak_power_watts / 1000:.2f}")
    m2.metric("Main breaker", f"{result.main_breaker_size} A")
    if result.main_breaker_at_ceiling:
        st.warning("Required main current exceeds the largest standard breaker; "
                   "the size shown is the table maximum.")

    st.download_button(
        "Generate BOQ",
        data=build_boq(result, distribution, config),
        file_name=boq_filename(result),
        mime="text/plain",
    )

st.markdown("---")

c1, c2, c3 = st.columns(3)
with c1:
    st.subheader("Data Ports")
    st.dataframe(ports_frame(distribution), use_container_width=True, hide_index=True)
with c2:
    st.subheader("Branch Circuits")
    st.dataframe(circuits_frame(distribution), use_container_width=True, hide_index=True)
with c3:
    st.subheader("Distribution Blocks")
    st.dataframe(blocks_frame(distribution), use_container_width=True, hide_index=True)

st.markdown("---")
st.caption("Engineering estimate only. Verify cabling lengths and supply capacity during site survey.")
