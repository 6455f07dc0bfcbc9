"""
Problem description schema.

Typed models for the structured problem produced by the parse service and the
editable parameter set that drives a visualization session.

A ``ProblemDescription`` is read-only once produced. Everything the user
changes during "what-if" exploration lives in a ``LiveParameters`` copy, so
the original problem is always recoverable.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# Defaults applied when the parsed problem omits a value
DEFAULT_GRAVITY = 9.8  # [m/s²]
DEFAULT_RADIUS = 10.0  # [m]
DEFAULT_OBJECT_NAME = "Object"

FORCE_TAGS = ("gravity", "normal", "tension", "applied", "friction")


class ProblemFormatError(ValueError):
    """Raised when a parsed problem is missing fields or holds invalid values."""


class MotionType(str, Enum):
    """Closed-form kinematics family of a problem."""

    PROJECTILE = "projectile"
    FREE_FALL = "free_fall"
    LINEAR_ACCELERATION = "linear_acceleration"
    COLLISION_1D = "collision_1d"
    CIRCULAR = "circular"


def _drop_nulls(data: Any) -> Any:
    # LLM output often carries explicit nulls for values it could not find
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if v is not None}
    return data


class _Schema(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _strip_nulls(cls, data: Any) -> Any:
        return _drop_nulls(data)


class InitialConditions(_Schema):
    """
    Named scalar inputs of a problem.

    Angles are stored in degrees and converted to radians only inside the
    kinematics functions.
    """

    velocity: float = 0.0
    angle: float = 0.0
    gravity: float = Field(DEFAULT_GRAVITY, ge=0.0)
    height: float = Field(0.0, ge=0.0)
    v1: float = 10.0
    v2: float = 0.0
    m1: float = Field(1.0, gt=0.0)
    m2: float = Field(1.0, gt=0.0)
    radius: float = Field(DEFAULT_RADIUS, ge=0.0)
    acceleration: float = 0.0
    elasticity: float = Field(1.0, ge=0.0, le=1.0)


class PhysicsObject(_Schema):
    name: str = DEFAULT_OBJECT_NAME
    mass: float = Field(1.0, gt=0.0)


class SolutionStep(_Schema):
    """One narrative step of the worked solution. Has no numeric role."""

    step: str = ""
    explanation: str = ""
    formula: str = ""
    value: str = ""

    @field_validator("step", "explanation", "formula", "value", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)):
            return str(v)
        return v


class ProblemDescription(_Schema):
    """
    Structured physics problem.

    Accepts the wire field names (``motion_type``, ``initial_conditions``,
    ``solution_steps``) as well as their camelCase aliases.

    Examples
    --------
    >>> problem = ProblemDescription.from_payload({
    ...     "motion_type": "projectile",
    ...     "initial_conditions": {"velocity": 15, "height": 25},
    ... })
    >>> problem.initial_conditions.gravity
    9.8
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str = "Physics Problem"
    description: str = ""
    motion_type: MotionType = Field(alias="motionType")
    objects: list[PhysicsObject] = Field(default_factory=lambda: [PhysicsObject()])
    initial_conditions: InitialConditions = Field(
        default_factory=InitialConditions, alias="initialConditions"
    )
    forces: list[str] = Field(default_factory=list)
    equations: list[str] = Field(default_factory=list)
    unknowns: list[str] = Field(default_factory=list)
    solution_steps: list[SolutionStep] = Field(default_factory=list, alias="solutionSteps")

    @field_validator("motion_type", mode="before")
    @classmethod
    def _lower_motion_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower().replace(" ", "_")
        return v

    @field_validator("forces")
    @classmethod
    def _normalize_forces(cls, v: list[str]) -> list[str]:
        seen: list[str] = []
        for tag in v:
            tag = tag.strip().lower()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @field_validator("objects")
    @classmethod
    def _at_least_one_object(cls, v: list[PhysicsObject]) -> list[PhysicsObject]:
        return v or [PhysicsObject()]

    @classmethod
    def from_payload(cls, data: Any) -> ProblemDescription:
        """
        Validate an untrusted mapping into a problem.

        Raises
        ------
        ProblemFormatError
            If ``data`` is not a mapping or violates the schema.
        """
        if not isinstance(data, dict):
            raise ProblemFormatError(
                f"Problem payload must be an object, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ProblemFormatError(f"Invalid problem description: {exc}") from exc

    @property
    def force_tags(self) -> list[str]:
        """Forces that the free-body diagram knows how to draw."""
        return [f for f in self.forces if f in FORCE_TAGS]


@dataclass(frozen=True)
class LiveParameters:
    """
    User-editable copy of the initial conditions.

    Edits produce new instances through ``replace``; the problem the
    parameters were copied from is never touched.
    """

    velocity: float = 0.0
    angle: float = 0.0
    gravity: float = DEFAULT_GRAVITY
    height: float = 0.0
    v1: float = 10.0
    v2: float = 0.0
    m1: float = 1.0
    m2: float = 1.0
    radius: float = DEFAULT_RADIUS
    acceleration: float = 0.0
    elasticity: float = 1.0
    mass: float = 1.0
    name: str = DEFAULT_OBJECT_NAME

    @classmethod
    def from_problem(cls, problem: ProblemDescription) -> LiveParameters:
        ic = problem.initial_conditions
        first = problem.objects[0]
        return cls(
            velocity=ic.velocity,
            angle=ic.angle,
            gravity=ic.gravity,
            height=ic.height,
            v1=ic.v1,
            v2=ic.v2,
            m1=ic.m1,
            m2=ic.m2,
            radius=ic.radius,
            acceleration=ic.acceleration,
            elasticity=ic.elasticity,
            mass=first.mass,
            name=first.name,
        )

    def replace(self, **changes: Any) -> LiveParameters:
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)
