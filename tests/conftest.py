import os
import sys

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend for testing

import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from physiviz.problem import LiveParameters, ProblemDescription  # noqa: E402


@pytest.fixture
def ledge_problem():
    """Ball thrown horizontally at 15 m/s from a 25 m ledge."""
    return ProblemDescription.from_payload(
        {
            "title": "Kinematics",
            "description": "A ball is thrown horizontally at 15 m/s from a 25 m high ledge.",
            "motion_type": "free_fall",
            "objects": [{"name": "Ball", "mass": 0.5}],
            "initial_conditions": {"velocity": 15, "height": 25, "gravity": 9.8},
            "forces": ["gravity"],
        }
    )


@pytest.fixture
def projectile_params():
    return LiveParameters(velocity=20.0, angle=45.0, gravity=9.8, height=0.0, name="Ball")


@pytest.fixture
def ledge_params():
    return LiveParameters(velocity=15.0, angle=0.0, gravity=9.8, height=25.0, name="Ball")


@pytest.fixture
def collision_params():
    return LiveParameters(m1=3.0, v1=10.0, m2=5.0, v2=2.0)


@pytest.fixture
def circular_params():
    return LiveParameters(velocity=20.0, radius=50.0)
