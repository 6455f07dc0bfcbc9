import pytest

from physiviz.kinematics.collision import (
    CollisionLayout,
    collision_state,
    collision_time,
    kinetic_energy,
    momentum,
    post_collision_velocities,
)


def test_elastic_velocities_closed_form():
    u1, u2 = post_collision_velocities(3.0, 10.0, 5.0, 2.0)
    assert u1 == pytest.approx(0.0)
    assert u2 == pytest.approx(8.0)


def test_equal_masses_swap_velocities():
    u1, u2 = post_collision_velocities(2.0, 7.0, 2.0, -3.0)
    assert u1 == pytest.approx(-3.0)
    assert u2 == pytest.approx(7.0)


def test_perfectly_inelastic_moves_together():
    u1, u2 = post_collision_velocities(1.0, 6.0, 2.0, 0.0, elasticity=0.0)
    assert u1 == pytest.approx(2.0)
    assert u2 == pytest.approx(2.0)


@pytest.mark.parametrize("e", [0.0, 0.5, 1.0])
def test_momentum_conserved_for_any_restitution(e):
    m1, v1, m2, v2 = 3.0, 10.0, 5.0, 2.0
    u1, u2 = post_collision_velocities(m1, v1, m2, v2, e)
    assert momentum(m1, u1, m2, u2) == pytest.approx(momentum(m1, v1, m2, v2))


def test_energy_lost_when_inelastic():
    m1, v1, m2, v2 = 3.0, 10.0, 5.0, 2.0
    u1, u2 = post_collision_velocities(m1, v1, m2, v2, 0.5)
    assert kinetic_energy(m1, u1, m2, u2) < kinetic_energy(m1, v1, m2, v2)


def test_collision_time():
    assert collision_time(17.5, 10.0, 2.0) == pytest.approx(17.5 / 8.0)
    assert collision_time(17.5, 2.0, 10.0) is None
    assert collision_time(17.5, 5.0, 5.0) is None


def test_state_before_and_after_contact():
    lay = CollisionLayout()
    t_c = collision_time(lay.gap, 10.0, 2.0)

    (x1, u1), (x2, u2) = collision_state(lay, 3.0, 10.0, 5.0, 2.0, t_c / 2)
    assert (u1, u2) == (10.0, 2.0)
    assert x1 == pytest.approx(lay.x1 + 10.0 * t_c / 2)

    (x1, u1), (x2, u2) = collision_state(lay, 3.0, 10.0, 5.0, 2.0, t_c + 1.0)
    assert u1 == pytest.approx(0.0)
    assert u2 == pytest.approx(8.0)
    # Facing edges never overlap
    assert x2 - x1 >= lay.block_size - 1e-9


def test_no_collision_keeps_initial_velocities():
    lay = CollisionLayout()
    (x1, u1), (x2, u2) = collision_state(lay, 1.0, -3.0, 1.0, 4.0, 10.0)
    assert (u1, u2) == (-3.0, 4.0)
    assert x1 == pytest.approx(-30.0)
    assert x2 == pytest.approx(60.0)
