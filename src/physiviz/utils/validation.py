"""
Validation utilities for simulation settings and physical parameters.

Invalid settings raise ``ValueError``. Degenerate but well-defined physics
(a collision that never happens, a body that never lands) is reported with a
``RuntimeWarning`` and left to the kinematics to handle.
"""
from __future__ import annotations

import math
import warnings

from physiviz.problem import LiveParameters, MotionType


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if not value > 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_timestep(dt: float, max_dt: float = 1.0) -> None:
    """
    Validate that a playback step is positive and reasonable.

    Raises
    ------
    ValueError
        If the step is not positive or not finite
    """
    if not math.isfinite(dt) or dt <= 0:
        raise ValueError(f"Timestep must be positive, got {dt}")
    if dt > max_dt:
        warnings.warn(
            f"Large timestep {dt}s makes playback jumpy. Consider using dt < {max_dt}s.",
            RuntimeWarning,
            stacklevel=2,
        )


def warn_degenerate(motion_type: MotionType | str, params: LiveParameters) -> list[str]:
    """
    Warn about parameter sets whose scene is degenerate.

    Returns
    -------
    list[str]
        The warning messages issued (empty when the scene is ordinary).
    """
    mt = MotionType(motion_type)
    messages: list[str] = []
    if mt in (MotionType.PROJECTILE, MotionType.FREE_FALL) and params.gravity == 0:
        messages.append("Zero gravity: the body never lands; playback is capped at the horizon.")
    if mt is MotionType.COLLISION_1D and params.v1 - params.v2 <= 0:
        messages.append(
            f"Bodies are not approaching (v1={params.v1}, v2={params.v2}); no collision occurs."
        )
    if mt is MotionType.CIRCULAR and params.radius <= 0:
        messages.append("Zero radius: centripetal acceleration is unbounded.")
    if mt is MotionType.CIRCULAR and params.velocity == 0:
        messages.append("Zero speed: the body does not move around the circle.")

    for msg in messages:
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
    return messages
