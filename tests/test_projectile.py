import math

import numpy as np
import pytest

from physiviz.kinematics.projectile import (
    horizontal_range,
    launch_components,
    max_height,
    peak_time,
    projectile_position,
    projectile_velocity,
    sample_trajectory,
    solve_projectile,
    time_of_flight,
)


def test_launch_components():
    vx, vy = launch_components(10.0, 30.0)
    assert vx == pytest.approx(10.0 * math.cos(math.radians(30)))
    assert vy == pytest.approx(5.0)


def test_flat_ground_45_degrees():
    v, g = 20.0, 9.8
    t_f = time_of_flight(v, 45.0, g)
    assert t_f == pytest.approx(2 * v * math.sin(math.radians(45)) / g)
    assert horizontal_range(v, 45.0, g) == pytest.approx(v**2 / g)
    assert max_height(v, 45.0, g) == pytest.approx(v**2 / (4 * g))
    assert peak_time(v, 45.0, g) == pytest.approx(t_f / 2)


def test_launch_from_height():
    t_f = time_of_flight(15.0, 0.0, 9.8, 25.0)
    assert t_f == pytest.approx(math.sqrt(2 * 25 / 9.8))
    assert max_height(15.0, 0.0, 9.8, 25.0) == 25.0
    assert peak_time(15.0, 0.0, 9.8) == 0.0


def test_position_is_clamped_after_landing():
    t_f = time_of_flight(15.0, 0.0, 9.8, 25.0)
    x_land, y_land = projectile_position(15.0, 0.0, 9.8, 25.0, t_f)
    x_late, y_late = projectile_position(15.0, 0.0, 9.8, 25.0, t_f + 5.0)
    assert (x_late, y_late) == (x_land, y_land)
    assert y_late == pytest.approx(0.0, abs=1e-9)


def test_position_before_launch_is_start():
    assert projectile_position(10.0, 30.0, 9.8, 5.0, -1.0) == pytest.approx((0.0, 5.0))


def test_velocity_after_landing_is_impact_velocity():
    t_f = time_of_flight(10.0, 60.0, 9.8)
    vx, vy = projectile_velocity(10.0, 60.0, 9.8, 0.0, t_f + 1.0)
    assert vx == pytest.approx(5.0)
    assert vy == pytest.approx(-10.0 * math.sin(math.radians(60)))


class TestZeroGravity:
    def test_never_lands(self):
        assert math.isinf(time_of_flight(10.0, 30.0, 0.0, 5.0))
        assert math.isinf(max_height(10.0, 30.0, 0.0))
        assert math.isinf(horizontal_range(10.0, 30.0, 0.0))

    def test_moving_downward_lands(self):
        # vy0 < 0 is impossible with angle in [0, 90] but the math handles it
        assert time_of_flight(10.0, -90.0, 0.0, 20.0) == pytest.approx(2.0)

    def test_at_rest_on_ground(self):
        assert time_of_flight(0.0, 0.0, 0.0, 0.0) == 0.0

    def test_sampling_uses_horizon(self):
        t, x, y = sample_trajectory(10.0, 0.0, 0.0, 5.0, samples=10, horizon=4.0)
        assert t[-1] == pytest.approx(4.0)
        assert x[-1] == pytest.approx(40.0)
        assert np.allclose(y, 5.0)


def test_sample_trajectory_shape_and_ends():
    t, x, y = sample_trajectory(20.0, 45.0, 9.8)
    assert len(t) == len(x) == len(y) == 101
    assert t[0] == 0.0
    assert x[-1] == pytest.approx(horizontal_range(20.0, 45.0, 9.8))
    assert y[-1] == pytest.approx(0.0, abs=1e-9)
    assert np.all(y >= 0.0)


def test_solve_projectile_summary():
    sol = solve_projectile(20.0, 45.0, 9.8)
    assert sol.lands
    assert sol.range == pytest.approx(20.0**2 / 9.8)
    assert not solve_projectile(20.0, 45.0, 0.0).lands
