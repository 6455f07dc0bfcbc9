"""
One-dimensional two-body collision.

Body 1 starts left of body 2; both move at constant velocity until their
facing edges meet, then continue with the post-collision velocities.

Post-collision velocities for a coefficient of restitution ``e``::

    v1' = (m1·v1 + m2·v2 + m2·e·(v2 − v1)) / (m1 + m2)
    v2' = (m1·v1 + m2·v2 + m1·e·(v1 − v2)) / (m1 + m2)

With ``e = 1`` these reduce to the elastic formulas

    v1' = ((m1 − m2)·v1 + 2·m2·v2) / (m1 + m2)
    v2' = (2·m1·v1 + (m2 − m1)·v2) / (m1 + m2)

Momentum is conserved for every ``e``; kinetic energy only for ``e = 1``.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CollisionLayout:
    """
    Start positions of the two blocks (left edges) and their size [m].

    Attributes
    ----------
    x1, x2 : float
        Left edge of body 1 and body 2 at t = 0.
    block_size : float
        Edge length of each square block.
    view_margin : float
        Extra world distance shown on either side of the start layout.
    """

    x1: float = 0.0
    x2: float = 20.0
    block_size: float = 2.5
    view_margin: float = 10.0

    @property
    def gap(self) -> float:
        """Distance between the facing edges at t = 0."""
        return self.x2 - self.x1 - self.block_size


def momentum(m1: float, v1: float, m2: float, v2: float) -> float:
    return m1 * v1 + m2 * v2


def kinetic_energy(m1: float, v1: float, m2: float, v2: float) -> float:
    return 0.5 * m1 * v1 * v1 + 0.5 * m2 * v2 * v2


def post_collision_velocities(
    m1: float, v1: float, m2: float, v2: float, elasticity: float = 1.0
) -> tuple[float, float]:
    """Velocities of both bodies right after contact [m/s]."""
    total = m1 + m2
    p = momentum(m1, v1, m2, v2)
    v1_after = (p + m2 * elasticity * (v2 - v1)) / total
    v2_after = (p + m1 * elasticity * (v1 - v2)) / total
    return v1_after, v2_after


def collision_time(gap: float, v1: float, v2: float) -> float | None:
    """
    Time at which the closing distance uses up ``gap``.

    Returns ``None`` when the bodies are not approaching (``v1 − v2 ≤ 0``);
    they never meet, which is a valid outcome rather than an error.
    """
    closing = v1 - v2
    if closing <= 0.0:
        return None
    return max(gap, 0.0) / closing


def collision_state(
    layout: CollisionLayout,
    m1: float,
    v1: float,
    m2: float,
    v2: float,
    t: float,
    elasticity: float = 1.0,
) -> tuple[tuple[float, float], tuple[float, float]]:
    """
    Left-edge position and velocity of both bodies at time ``t``.

    Returns
    -------
    (x1, u1), (x2, u2)
        Position [m] and velocity [m/s] of body 1 and body 2.
    """
    t = max(t, 0.0)
    t_c = collision_time(layout.gap, v1, v2)
    if t_c is None or t < t_c:
        return (layout.x1 + v1 * t, v1), (layout.x2 + v2 * t, v2)

    u1, u2 = post_collision_velocities(m1, v1, m2, v2, elasticity)
    dt = t - t_c
    x1 = layout.x1 + v1 * t_c + u1 * dt
    x2 = layout.x2 + v2 * t_c + u2 * dt
    return (x1, u1), (x2, u2)
