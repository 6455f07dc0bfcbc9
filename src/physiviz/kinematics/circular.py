"""
Uniform circular motion about the world origin.

    a_c = v² / r
    θ(t) = θ0 + (v / r)·t

A zero radius is degenerate: the acceleration is reported as ``math.inf`` and
the body sits at the center.
"""
from __future__ import annotations

import math


def centripetal_acceleration(velocity: float, radius: float) -> float:
    """Centripetal acceleration magnitude [m/s²]."""
    if radius <= 0.0:
        return math.inf if velocity != 0.0 else 0.0
    return velocity * velocity / radius


def angular_velocity(velocity: float, radius: float) -> float:
    """Angular velocity ``v / r`` [rad/s]."""
    if radius <= 0.0:
        return math.inf if velocity != 0.0 else 0.0
    return velocity / radius


def period(velocity: float, radius: float) -> float:
    """Time for one revolution [s]; ``inf`` for a body at rest."""
    if velocity == 0.0:
        return math.inf
    return 2.0 * math.pi * radius / abs(velocity)


def angular_position(
    velocity: float, radius: float, t: float, theta0: float = 0.0
) -> float:
    if radius <= 0.0:
        return theta0
    return theta0 + (velocity / radius) * t


def circular_position(
    velocity: float, radius: float, t: float, theta0: float = 0.0
) -> tuple[float, float]:
    theta = angular_position(velocity, radius, t, theta0)
    r = max(radius, 0.0)
    return r * math.cos(theta), r * math.sin(theta)


def circular_velocity(
    velocity: float, radius: float, t: float, theta0: float = 0.0
) -> tuple[float, float]:
    """Tangential velocity vector [m/s]."""
    theta = angular_position(velocity, radius, t, theta0)
    return -velocity * math.sin(theta), velocity * math.cos(theta)
