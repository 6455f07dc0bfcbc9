import math

import pytest

from physiviz.core.mapping import TRAJECTORY_VIEWPORT, CoordinateMapper
from physiviz.kinematics.motion import (
    MOTIONS,
    Circular,
    Collision1D,
    FreeFall,
    LinearAcceleration,
    Projectile,
    motion_for,
)
from physiviz.problem import LiveParameters, MotionType


def test_every_motion_type_has_a_variant():
    for mt in MotionType:
        assert motion_for(mt).motion_type is mt
        assert motion_for(mt.value) is MOTIONS[mt]


def test_unknown_motion_type():
    with pytest.raises(ValueError, match="Unknown motion type"):
        motion_for("spiral")


def test_variants_are_stateless(projectile_params):
    m = Projectile()
    assert m.compute_state(projectile_params, 1.234) == m.compute_state(projectile_params, 1.234)


class TestProjectile:
    def test_duration_and_bounds(self, projectile_params):
        m = Projectile()
        sol = m.solution(projectile_params)
        assert m.duration(projectile_params) == pytest.approx(sol.time_of_flight)
        b = m.bounds(projectile_params)
        assert b.max_x == pytest.approx(sol.range)
        assert b.max_y == pytest.approx(sol.max_height)

    def test_terminal_at_landing(self, projectile_params):
        m = Projectile()
        t_f = m.duration(projectile_params)
        assert not m.is_terminal(projectile_params, t_f - 0.01)
        assert m.is_terminal(projectile_params, t_f)

    def test_acceleration_is_gravity(self, projectile_params):
        assert Projectile().acceleration(projectile_params, 0.3) == (0.0, -9.8)

    def test_zero_gravity_bounds_are_finite(self):
        params = LiveParameters(velocity=10.0, angle=30.0, gravity=0.0)
        b = Projectile().bounds(params)
        assert math.isfinite(b.max_x) and math.isfinite(b.max_y)
        assert b.max_x > 0

    @pytest.mark.parametrize(
        "params",
        [
            LiveParameters(velocity=20.0, angle=135.0),
            LiveParameters(velocity=-15.0, angle=30.0, height=10.0),
            LiveParameters(velocity=10.0, angle=150.0, gravity=0.0),
        ],
    )
    def test_backward_launch_stays_on_canvas(self, params):
        m = Projectile()
        b = m.bounds(params)
        assert b.min_x < 0.0 and b.max_x == 0.0
        mapper = CoordinateMapper.fit(b, TRAJECTORY_VIEWPORT)
        xs = mapper.path_to_canvas(m.path(params))[:, 0]
        pad = TRAJECTORY_VIEWPORT.padding
        assert xs.min() >= pad - 1e-6
        assert xs.max() <= TRAJECTORY_VIEWPORT.width - pad + 1e-6


class TestFreeFall:
    def test_angle_is_ignored(self, ledge_params):
        tilted = ledge_params.replace(angle=60.0)
        m = FreeFall()
        assert m.compute_state(tilted, 1.0) == m.compute_state(ledge_params, 1.0)
        assert m.duration(tilted) == pytest.approx(math.sqrt(2 * 25 / 9.8))

    def test_starts_at_height(self, ledge_params):
        s = FreeFall().compute_state(ledge_params, 0.0)[0]
        assert (s.x, s.y) == (0.0, 25.0)
        assert s.name == "Ball"


class TestLinear:
    def test_stays_on_ground(self):
        params = LiveParameters(velocity=5.0, acceleration=2.0)
        s = LinearAcceleration().compute_state(params, 3.0)[0]
        assert s.y == 0.0
        assert s.x == pytest.approx(5 * 3 + 0.5 * 2 * 9)
        assert math.isinf(LinearAcceleration().duration(params))

    def test_bounds_cover_backward_motion(self):
        params = LiveParameters(velocity=-5.0, acceleration=0.0)
        b = LinearAcceleration().bounds(params)
        assert b.min_x < 0.0
        assert b.max_x == 0.0


class TestCollision:
    def test_two_blocks(self, collision_params):
        bodies = Collision1D().compute_state(collision_params, 0.0)
        assert [b.name for b in bodies] == ["m1", "m2"]
        assert all(b.shape == "block" for b in bodies)
        assert bodies[0].x < bodies[1].x

    def test_momentum_same_before_and_after(self, collision_params):
        m = Collision1D()
        before = sum(b.momentum for b in m.compute_state(collision_params, 0.0))
        after = sum(b.momentum for b in m.compute_state(collision_params, 5.0))
        assert after == pytest.approx(before)

    def test_terminal_once_both_blocks_leave_view(self):
        params = LiveParameters(v1=-20.0, v2=20.0)
        m = Collision1D()
        assert not m.is_terminal(params, 0.0)
        assert m.is_terminal(params, 10.0)

    def test_not_terminal_while_a_block_is_visible(self, collision_params):
        # After contact m1 is at rest inside the view
        assert not Collision1D().is_terminal(collision_params, 50.0)


class TestCircular:
    def test_bounds_are_centered(self, circular_params):
        b = Circular().bounds(circular_params)
        assert (b.min_x, b.max_x, b.min_y, b.max_y) == (-50.0, 50.0, -50.0, 50.0)

    def test_acceleration_points_to_center(self, circular_params):
        m = Circular()
        s = m.compute_state(circular_params, 2.0)[0]
        ax, ay = m.acceleration(circular_params, 2.0)
        assert math.hypot(ax, ay) == pytest.approx(8.0)
        assert ax * s.x + ay * s.y < 0.0

    def test_zero_radius_has_no_acceleration_vector(self):
        params = LiveParameters(velocity=5.0, radius=0.0)
        assert Circular().acceleration(params, 1.0) == (0.0, 0.0)
