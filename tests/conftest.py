"""
Pytest configuration and fixtures
"""

import sys
from pathlib import Path

import pytest

# Add repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from wall_calculator import calculate_requirements, clear_cache
from wall_config import DEFAULT_CONFIG
from wall_distribution import distribute


@pytest.fixture
def reference_result():
    """5000 x 3000 mm indoor wall at P2.5"""
    return calculate_requirements(5000, 3000, 2.5, "indoor")


@pytest.fixture
def reference_distribution(reference_result):
    return distribute(reference_result, DEFAULT_CONFIG)


@pytest.fixture(autouse=True)
def reset_sweep_cache():
    """Clear the pitch sweep cache before each test"""
    clear_cache()
    yield
    clear_cache()


# Test markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "regression: Reference scenarios that must not change"
    )
