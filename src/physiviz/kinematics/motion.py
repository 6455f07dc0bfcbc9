"""
Motion variants.

Each supported motion family implements the same contract on top of the
closed-form functions in this package:

- ``compute_state(params, t)`` - body states at time ``t``
- ``bounds(params)`` - world region the scene occupies
- ``duration(params)`` - natural end time (``inf`` when open-ended)
- ``is_terminal(params, t)`` - automatic stop condition for playback
- ``path(params)`` - sampled path of the primary body

Variants are stateless: the same ``(params, t)`` always yields the same
states, so the renderer and the animation driver can recompute everything on
every frame.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from physiviz.problem import LiveParameters, MotionType

from .circular import (
    centripetal_acceleration,
    circular_position,
    circular_velocity,
)
from .collision import CollisionLayout, collision_state
from .linear import linear_position, linear_velocity
from .projectile import (
    DEFAULT_TIME_HORIZON,
    TRAJECTORY_SAMPLES,
    ProjectileSolution,
    projectile_position,
    projectile_velocity,
    sample_trajectory,
    solve_projectile,
)


@dataclass(frozen=True)
class BodyState:
    """
    Instantaneous state of one body in world coordinates.

    Attributes
    ----------
    name : str
        Label drawn next to the body
    x, y : float
        Position [m]. For blocks this is the bottom-left corner.
    vx, vy : float
        Velocity [m/s]
    mass : float
        Mass [kg]
    shape : str
        "ball" or "block"
    """

    name: str
    x: float
    y: float
    vx: float
    vy: float
    mass: float = 1.0
    shape: str = "ball"

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def momentum(self) -> float:
        return self.mass * self.vx

    @property
    def kinetic_energy(self) -> float:
        return 0.5 * self.mass * (self.vx**2 + self.vy**2)


@dataclass(frozen=True)
class WorldBounds:
    """Axis-aligned world region [m] that a scene occupies."""

    min_x: float
    max_x: float
    max_y: float
    min_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


class Motion(ABC):
    """Base class for the closed set of motion variants."""

    motion_type: MotionType
    # Same pixel scale on both axes when drawn (keeps circles round)
    uniform_scale = False
    # Playback stops when the body reaches the ground
    stops_on_landing = False

    @abstractmethod
    def compute_state(self, params: LiveParameters, t: float) -> list[BodyState]:
        """Body states at simulation time ``t`` [s]."""

    @abstractmethod
    def bounds(self, params: LiveParameters) -> WorldBounds:
        """World region covered by the whole scene."""

    def duration(self, params: LiveParameters) -> float:
        return math.inf

    def is_terminal(self, params: LiveParameters, t: float) -> bool:
        return t >= self.duration(params)

    def acceleration(self, params: LiveParameters, t: float) -> tuple[float, float]:
        """Acceleration of the primary body [m/s²]."""
        return 0.0, 0.0

    def path(
        self,
        params: LiveParameters,
        samples: int = TRAJECTORY_SAMPLES,
        horizon: float = DEFAULT_TIME_HORIZON,
    ) -> NDArray[np.float64]:
        """
        Sampled path of the primary body.

        Returns
        -------
        ndarray, shape (samples + 1, 2)
            World (x, y) points over ``[0, min(duration, horizon)]``.
        """
        t_end = min(self.duration(params), horizon)
        primary = [self.compute_state(params, t)[0] for t in np.linspace(0.0, t_end, samples + 1)]
        return np.array([(s.x, s.y) for s in primary], dtype=np.float64)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Projectile(Motion):
    """Launch at an angle from an initial height under uniform gravity."""

    motion_type = MotionType.PROJECTILE
    stops_on_landing = True

    def launch_angle(self, params: LiveParameters) -> float:
        return params.angle

    def solution(self, params: LiveParameters) -> ProjectileSolution:
        return solve_projectile(
            params.velocity, self.launch_angle(params), params.gravity, params.height
        )

    def compute_state(self, params: LiveParameters, t: float) -> list[BodyState]:
        args = (params.velocity, self.launch_angle(params), params.gravity, params.height, t)
        x, y = projectile_position(*args)
        vx, vy = projectile_velocity(*args)
        return [BodyState(params.name, x, y, vx, vy, params.mass)]

    def duration(self, params: LiveParameters) -> float:
        return self.solution(params).time_of_flight

    def acceleration(self, params: LiveParameters, t: float) -> tuple[float, float]:
        return 0.0, -params.gravity

    def bounds(self, params: LiveParameters) -> WorldBounds:
        sol = self.solution(params)
        if sol.lands and math.isfinite(sol.max_height):
            return WorldBounds(min(0.0, sol.range), max(0.0, sol.range), sol.max_height)
        points = self.path(params)
        xs = points[:, 0]
        return WorldBounds(
            min(0.0, float(xs.min())), max(0.0, float(xs.max())), float(points[:, 1].max())
        )

    def path(
        self,
        params: LiveParameters,
        samples: int = TRAJECTORY_SAMPLES,
        horizon: float = DEFAULT_TIME_HORIZON,
    ) -> NDArray[np.float64]:
        _, x, y = sample_trajectory(
            params.velocity,
            self.launch_angle(params),
            params.gravity,
            params.height,
            samples=samples,
            horizon=horizon,
        )
        return np.column_stack([x, y])


class FreeFall(Projectile):
    """
    Release with a horizontal (or zero) initial velocity.

    The launch angle is always 0; the parameter's angle is ignored rather
    than interpreted.
    """

    motion_type = MotionType.FREE_FALL

    def launch_angle(self, params: LiveParameters) -> float:
        return 0.0


class LinearAcceleration(Motion):
    """Constant acceleration along the ground line."""

    motion_type = MotionType.LINEAR_ACCELERATION

    def compute_state(self, params: LiveParameters, t: float) -> list[BodyState]:
        x = linear_position(params.velocity, params.acceleration, t)
        vx = linear_velocity(params.velocity, params.acceleration, t)
        return [BodyState(params.name, x, 0.0, vx, 0.0, params.mass)]

    def acceleration(self, params: LiveParameters, t: float) -> tuple[float, float]:
        return params.acceleration, 0.0

    def bounds(self, params: LiveParameters) -> WorldBounds:
        xs = self.path(params)[:, 0]
        return WorldBounds(min(0.0, float(xs.min())), max(0.0, float(xs.max())), 0.0)


class Collision1D(Motion):
    """
    Two blocks on a line, body 1 to the left of body 2.

    Playback continues after the collision and ends once both blocks have
    left the visible region.
    """

    motion_type = MotionType.COLLISION_1D
    uniform_scale = True

    def __init__(self, layout: CollisionLayout | None = None) -> None:
        self.layout = layout if layout is not None else CollisionLayout()

    def compute_state(self, params: LiveParameters, t: float) -> list[BodyState]:
        (x1, u1), (x2, u2) = collision_state(
            self.layout, params.m1, params.v1, params.m2, params.v2, t, params.elasticity
        )
        return [
            BodyState("m1", x1, 0.0, u1, 0.0, params.m1, shape="block"),
            BodyState("m2", x2, 0.0, u2, 0.0, params.m2, shape="block"),
        ]

    def bounds(self, params: LiveParameters) -> WorldBounds:
        lay = self.layout
        return WorldBounds(
            lay.x1 - lay.view_margin,
            lay.x2 + lay.block_size + lay.view_margin,
            2.0 * lay.block_size,
        )

    def is_terminal(self, params: LiveParameters, t: float) -> bool:
        b = self.bounds(params)
        size = self.layout.block_size
        return all(
            s.x > b.max_x or s.x + size < b.min_x for s in self.compute_state(params, t)
        )

    def __repr__(self) -> str:
        return f"Collision1D(layout={self.layout!r})"


class Circular(Motion):
    """Uniform circular motion about the origin, starting at angle 0."""

    motion_type = MotionType.CIRCULAR
    uniform_scale = True

    def compute_state(self, params: LiveParameters, t: float) -> list[BodyState]:
        x, y = circular_position(params.velocity, params.radius, t)
        vx, vy = circular_velocity(params.velocity, params.radius, t)
        return [BodyState(params.name, x, y, vx, vy, params.mass)]

    def acceleration(self, params: LiveParameters, t: float) -> tuple[float, float]:
        s = self.compute_state(params, t)[0]
        r = math.hypot(s.x, s.y)
        a_c = centripetal_acceleration(params.velocity, params.radius)
        if r == 0.0 or not math.isfinite(a_c):
            return 0.0, 0.0
        return -a_c * s.x / r, -a_c * s.y / r

    def bounds(self, params: LiveParameters) -> WorldBounds:
        r = max(params.radius, 0.0)
        return WorldBounds(-r, r, r, min_y=-r)


MOTIONS: dict[MotionType, Motion] = {
    MotionType.PROJECTILE: Projectile(),
    MotionType.FREE_FALL: FreeFall(),
    MotionType.LINEAR_ACCELERATION: LinearAcceleration(),
    MotionType.COLLISION_1D: Collision1D(),
    MotionType.CIRCULAR: Circular(),
}


def motion_for(motion_type: MotionType | str) -> Motion:
    """
    Look up the variant for a motion type.

    Raises
    ------
    ValueError
        If ``motion_type`` is not one of the supported families.
    """
    try:
        return MOTIONS[MotionType(motion_type)]
    except ValueError:
        raise ValueError(
            f"Unknown motion type {motion_type!r}. "
            f"Valid options: {[m.value for m in MotionType]}"
        ) from None
