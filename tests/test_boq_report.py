"""
Unit tests for the bill of quantities export
"""

import datetime as dt

import pytest

from boq_report import boq_filename, build_boq, controller_units
from wall_calculator import calculate_requirements
from wall_distribution import distribute


@pytest.mark.unit
class TestBuildBoq:

    def test_reference_wall_content(self, reference_result, reference_distribution):
        text = build_boq(reference_result, reference_distribution, date=dt.date(2026, 1, 2))

        assert text.startswith("BILL OF QUANTITIES (BOQ) - PRELIMINARY")
        assert "Date: 2026-01-02" in text
        assert "- Screen Dimensions  : 5000mm (W) x 3000mm (H)" in text
        assert "- Pixel Pitch        : P2.5" in text
        assert "- Resolution         : 2,000 x 1,200" in text
        assert "- Resolution Class   : FHD" in text
        assert "- Total Area         : 15.00 m²" in text
        assert "- Environment        : Indoor" in text
        assert "   - Quantity         : 30 units" in text
        assert "   - Grid Topology    : 10 (W) x 3 (H)" in text
        assert "   - Main Controller  : VX16s (or equivalent)" in text
        assert "   - Quantity         : 1 unit(s)" in text
        assert "   - Signal Cabling   : 5 runs of CAT6 (Main Lines)" in text
        assert "   - Main Breaker     : 50A (Main Supply Requirement)\n" in text
        assert "   - Distro Blocks    : 1 units (MCCB) @ 63A" in text
        assert "   - Branch Circuits  : 3 units (CO) @ 20A each" in text
        assert "   - Est. Peak Load   : 7.50 kW" in text
        assert "   - Est. Avg Load    : 3.00 kW" in text

    def test_ceiling_is_called_out(self):
        result = calculate_requirements(50000, 10000, 3.91, "indoor")
        text = build_boq(result, distribute(result))

        assert "1200A (Main Supply Requirement) (AT TABLE CEILING" in text

    def test_filename(self, reference_result):
        assert boq_filename(reference_result) == "BOQ_LED_P2.5_5000x3000.txt"


@pytest.mark.unit
def test_controller_units_for_ganged_controllers():
    result = calculate_requirements(5000, 3000, 1.25, "indoor")

    assert result.controller == "Multiple VX16s"
    assert controller_units(result) == 2


@pytest.mark.unit
def test_controller_units_single(reference_result):
    assert controller_units(reference_result) == 1
