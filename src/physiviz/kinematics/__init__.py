"""
Closed-form kinematics for the supported motion families.

Pure functions (projectile, collision, circular, linear) plus the
``Motion`` variants that wrap them behind a common contract.
"""

from .circular import (
    angular_position,
    angular_velocity,
    centripetal_acceleration,
    circular_position,
    circular_velocity,
    period,
)
from .collision import (
    CollisionLayout,
    collision_state,
    collision_time,
    kinetic_energy,
    momentum,
    post_collision_velocities,
)
from .linear import linear_position, linear_velocity, time_to_stop
from .motion import (
    MOTIONS,
    BodyState,
    Circular,
    Collision1D,
    FreeFall,
    LinearAcceleration,
    Motion,
    Projectile,
    WorldBounds,
    motion_for,
)
from .projectile import (
    DEFAULT_TIME_HORIZON,
    TRAJECTORY_SAMPLES,
    ProjectileSolution,
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

__all__ = [
    # Projectile / free fall
    "DEFAULT_TIME_HORIZON",
    "TRAJECTORY_SAMPLES",
    "ProjectileSolution",
    "launch_components",
    "time_of_flight",
    "peak_time",
    "max_height",
    "horizontal_range",
    "projectile_position",
    "projectile_velocity",
    "sample_trajectory",
    "solve_projectile",
    # Collision
    "CollisionLayout",
    "collision_state",
    "collision_time",
    "post_collision_velocities",
    "momentum",
    "kinetic_energy",
    # Circular
    "centripetal_acceleration",
    "angular_velocity",
    "angular_position",
    "period",
    "circular_position",
    "circular_velocity",
    # Linear
    "linear_position",
    "linear_velocity",
    "time_to_stop",
    # Variants
    "Motion",
    "BodyState",
    "WorldBounds",
    "Projectile",
    "FreeFall",
    "LinearAcceleration",
    "Collision1D",
    "Circular",
    "MOTIONS",
    "motion_for",
]
