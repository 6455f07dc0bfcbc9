"""
Closed-form projectile and free-fall kinematics.

World frame: origin on the ground directly below the launch point, x to the
right, y upward. Launch angle is given in degrees and measured from the
horizontal.

    x(t) = vx·t
    y(t) = h0 + vy0·t − ½·g·t²

Degenerate inputs never raise. With zero gravity a body moving upward or
horizontally never lands: the flight time is ``math.inf`` and callers cap
their drawing and playback at a finite horizon.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

DEFAULT_TIME_HORIZON = 10.0  # Sampling horizon for scenes that never land [s]
TRAJECTORY_SAMPLES = 100  # Path resolution over [0, t_f]


def launch_components(velocity: float, angle_deg: float) -> tuple[float, float]:
    """Split launch speed into horizontal and vertical components [m/s]."""
    theta = math.radians(angle_deg)
    return velocity * math.cos(theta), velocity * math.sin(theta)


def time_of_flight(
    velocity: float, angle_deg: float, gravity: float, height: float = 0.0
) -> float:
    """
    Time until the body returns to y = 0.

    Positive root of ``h0 + vy0·t − ½·g·t² = 0``::

        t_f = (vy0 + √(vy0² + 2·g·h0)) / g

    Returns
    -------
    float
        Flight time [s]. ``math.inf`` when ``gravity == 0`` and the body is
        not moving toward the ground.
    """
    _, vy0 = launch_components(velocity, angle_deg)
    if gravity <= 0.0:
        if vy0 < 0.0:
            return height / -vy0
        return 0.0 if height <= 0.0 and vy0 == 0.0 else math.inf
    disc = max(vy0 * vy0 + 2.0 * gravity * height, 0.0)
    return max((vy0 + math.sqrt(disc)) / gravity, 0.0)


def peak_time(velocity: float, angle_deg: float, gravity: float) -> float:
    """Time of maximum height, ``vy0 / g`` (0 when launched downward or flat)."""
    _, vy0 = launch_components(velocity, angle_deg)
    if vy0 <= 0.0:
        return 0.0
    if gravity <= 0.0:
        return math.inf
    return vy0 / gravity


def max_height(
    velocity: float, angle_deg: float, gravity: float, height: float = 0.0
) -> float:
    """Apex height ``h0 + vy0²/(2g)`` [m]; unbounded (inf) without gravity."""
    _, vy0 = launch_components(velocity, angle_deg)
    if vy0 <= 0.0:
        return height
    if gravity <= 0.0:
        return math.inf
    return height + vy0 * vy0 / (2.0 * gravity)


def horizontal_range(
    velocity: float, angle_deg: float, gravity: float, height: float = 0.0
) -> float:
    """Horizontal distance at landing, ``vx · t_f`` [m]."""
    vx, _ = launch_components(velocity, angle_deg)
    t_f = time_of_flight(velocity, angle_deg, gravity, height)
    if math.isinf(t_f):
        return math.inf if vx > 0.0 else 0.0
    return vx * t_f


def projectile_position(
    velocity: float, angle_deg: float, gravity: float, height: float, t: float
) -> tuple[float, float]:
    """
    Position at time ``t``.

    ``t`` is clamped to ``[0, t_f]``: after landing the body stays where it
    touched down, and y is never negative.
    """
    vx, vy0 = launch_components(velocity, angle_deg)
    tc = min(max(t, 0.0), time_of_flight(velocity, angle_deg, gravity, height))
    y = height + vy0 * tc - 0.5 * gravity * tc * tc
    return vx * tc, max(y, 0.0)


def projectile_velocity(
    velocity: float, angle_deg: float, gravity: float, height: float, t: float
) -> tuple[float, float]:
    """Velocity ``(vx, vy0 − g·t)`` at the clamped time (impact velocity after landing)."""
    vx, vy0 = launch_components(velocity, angle_deg)
    tc = min(max(t, 0.0), time_of_flight(velocity, angle_deg, gravity, height))
    return vx, vy0 - gravity * tc


def sample_trajectory(
    velocity: float,
    angle_deg: float,
    gravity: float,
    height: float = 0.0,
    samples: int = TRAJECTORY_SAMPLES,
    horizon: float = DEFAULT_TIME_HORIZON,
) -> tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
    """
    Sample the path at a fixed resolution.

    Covers ``[0, t_f]``, or ``[0, horizon]`` for a body that never lands.

    Returns
    -------
    t, x, y : ndarray
        Arrays of length ``samples + 1``.
    """
    vx, vy0 = launch_components(velocity, angle_deg)
    t_f = time_of_flight(velocity, angle_deg, gravity, height)
    t_end = t_f if math.isfinite(t_f) else horizon
    t = np.linspace(0.0, t_end, samples + 1)
    x = vx * t
    y = np.maximum(height + vy0 * t - 0.5 * gravity * t**2, 0.0)
    return t, x, y


@dataclass(frozen=True)
class ProjectileSolution:
    """Derived quantities of one launch."""

    vx: float
    vy0: float
    time_of_flight: float
    peak_time: float
    max_height: float
    range: float

    @property
    def lands(self) -> bool:
        return math.isfinite(self.time_of_flight)


def solve_projectile(
    velocity: float, angle_deg: float, gravity: float, height: float = 0.0
) -> ProjectileSolution:
    vx, vy0 = launch_components(velocity, angle_deg)
    return ProjectileSolution(
        vx=vx,
        vy0=vy0,
        time_of_flight=time_of_flight(velocity, angle_deg, gravity, height),
        peak_time=peak_time(velocity, angle_deg, gravity),
        max_height=max_height(velocity, angle_deg, gravity, height),
        range=horizontal_range(velocity, angle_deg, gravity, height),
    )
