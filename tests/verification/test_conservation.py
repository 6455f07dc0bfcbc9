"""
Conservation Verification Tests.

- Momentum is conserved by every collision, elastic or not
- Kinetic energy is conserved only by elastic collisions
- Mechanical energy is constant along a projectile's flight
"""

import numpy as np
import pytest

from physiviz.kinematics.collision import (
    kinetic_energy,
    momentum,
    post_collision_velocities,
)
from physiviz.kinematics.motion import Collision1D, Projectile
from physiviz.problem import LiveParameters

ENERGY_TOLERANCE = 1e-9  # relative error

COLLISIONS = [
    (3.0, 10.0, 5.0, 2.0),
    (1.0, 5.0, 1.0, 0.0),
    (0.5, 20.0, 8.0, -4.0),
    (10.0, 1.0, 0.1, -30.0),
]


@pytest.mark.parametrize("m1, v1, m2, v2", COLLISIONS)
@pytest.mark.parametrize("elasticity", [0.0, 0.5, 1.0])
def test_momentum_conserved(m1, v1, m2, v2, elasticity, rel_err):
    u1, u2 = post_collision_velocities(m1, v1, m2, v2, elasticity)
    assert rel_err(momentum(m1, u1, m2, u2), momentum(m1, v1, m2, v2)) < ENERGY_TOLERANCE


@pytest.mark.parametrize("m1, v1, m2, v2", COLLISIONS)
def test_elastic_conserves_kinetic_energy(m1, v1, m2, v2, rel_err):
    u1, u2 = post_collision_velocities(m1, v1, m2, v2)
    assert rel_err(kinetic_energy(m1, u1, m2, u2), kinetic_energy(m1, v1, m2, v2)) < ENERGY_TOLERANCE


@pytest.mark.parametrize("m1, v1, m2, v2", COLLISIONS)
def test_inelastic_loses_kinetic_energy(m1, v1, m2, v2):
    u1, u2 = post_collision_velocities(m1, v1, m2, v2, elasticity=0.5)
    assert kinetic_energy(m1, u1, m2, u2) < kinetic_energy(m1, v1, m2, v2)


def test_scene_momentum_constant_over_playback(rel_err):
    params = LiveParameters(m1=3.0, v1=10.0, m2=5.0, v2=2.0, elasticity=0.8)
    motion = Collision1D()
    p0 = sum(b.momentum for b in motion.compute_state(params, 0.0))
    for t in np.linspace(0.0, 10.0, 101):
        p = sum(b.momentum for b in motion.compute_state(params, t))
        assert rel_err(p, p0) < ENERGY_TOLERANCE


def test_bodies_never_overlap():
    params = LiveParameters(m1=3.0, v1=10.0, m2=5.0, v2=2.0)
    motion = Collision1D()
    size = motion.layout.block_size
    for t in np.linspace(0.0, 10.0, 201):
        b1, b2 = motion.compute_state(params, t)
        assert b1.x + size <= b2.x + 1e-9


@pytest.mark.parametrize("angle, height", [(45.0, 0.0), (60.0, 10.0), (0.0, 25.0), (-20.0, 40.0)])
def test_projectile_mechanical_energy(angle, height, rel_err):
    """E = ½·m·v² + m·g·y is constant until landing."""
    params = LiveParameters(velocity=18.0, angle=angle, gravity=9.8, height=height, mass=2.0)
    motion = Projectile()
    t_f = motion.duration(params)

    def energy(t):
        s = motion.compute_state(params, t)[0]
        return s.kinetic_energy + s.mass * params.gravity * s.y

    e0 = energy(0.0)
    for t in np.linspace(0.0, t_f, 50):
        assert rel_err(energy(t), e0) < ENERGY_TOLERANCE
