"""
Verification suite for PhysiViz.

These tests compare what the scenes show against hand-worked textbook
answers and conservation laws, so a regression in a closed-form
expression or in the playback clock is caught with a physical meaning
attached.

Test Categories:
- Reference problems: worked examples with published answers
- Conservation: momentum and energy across collisions and flight
- Mapping: world/canvas round trips over the whole drawing area
"""

import pytest

from physiviz.problem import LiveParameters


# -----------------------------------------------------------------------------
# Common Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def ledge_throw():
    """Ball thrown horizontally at 15 m/s from a 25 m ledge (g = 9.8)."""
    return LiveParameters(velocity=15.0, angle=0.0, gravity=9.8, height=25.0, name="Ball")


@pytest.fixture
def cannon_shot():
    """Level-ground launch at 30 m/s and 60° (g = 9.8)."""
    return LiveParameters(velocity=30.0, angle=60.0, gravity=9.8, height=0.0)


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def relative_error(computed: float, analytical: float) -> float:
    """Compute relative error, handling zero case."""
    if abs(analytical) < 1e-12:
        return abs(computed - analytical)
    return abs(computed - analytical) / abs(analytical)


@pytest.fixture
def rel_err():
    """The ``relative_error`` helper, for use inside tests."""
    return relative_error
