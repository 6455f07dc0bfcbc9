"""Straight-line motion under constant acceleration along the ground."""
from __future__ import annotations


def linear_position(velocity: float, acceleration: float, t: float) -> float:
    """``x(t) = v0·t + ½·a·t²`` [m]."""
    t = max(t, 0.0)
    return velocity * t + 0.5 * acceleration * t * t


def linear_velocity(velocity: float, acceleration: float, t: float) -> float:
    return velocity + acceleration * max(t, 0.0)


def time_to_stop(velocity: float, acceleration: float) -> float | None:
    """Time at which the velocity passes through zero, or ``None`` if it never does."""
    if acceleration == 0.0 or velocity * acceleration >= 0.0:
        return None
    return -velocity / acceleration
