"""
PhysiViz - interactive visualizations for introductory physics problems.

Core Components
---------------
ProblemDescription : Structured problem produced by the parse service
LiveParameters : Editable copy of a problem's initial conditions
Motion : Closed-form motion variants (projectile, free fall, linear,
    1-D collision, circular)
CoordinateMapper : World meters <-> canvas pixels
AnimationDriver : Play/pause/reset playback on a fixed time step
ControlPanel : Slider edits bound to a driver

Examples
--------
>>> from physiviz import ProblemDescription, LiveParameters, motion_for
>>> problem = ProblemDescription.from_payload(
...     {"motion_type": "free_fall", "initial_conditions": {"velocity": 15, "height": 25}}
... )
>>> motion = motion_for(problem.motion_type)
>>> round(motion.duration(LiveParameters.from_problem(problem)), 2)
2.26
"""

__version__ = "0.1.0"

# Problem model
from physiviz.problem import (
    LiveParameters,
    MotionType,
    ProblemDescription,
    ProblemFormatError,
)

# Kinematics
from physiviz.kinematics import (
    BodyState,
    Circular,
    Collision1D,
    FreeFall,
    LinearAcceleration,
    Motion,
    Projectile,
    motion_for,
)

# Mapping, rendering, playback
from physiviz.core.mapping import CoordinateMapper, Viewport
from physiviz.core.animation import AnimationDriver, ManualScheduler, PlaybackState
from physiviz.core.controls import ControlPanel, sliders_for
from physiviz.render import (
    MatplotlibSurface,
    RecordingSurface,
    draw_frame,
    draw_trajectory,
    render_force_diagram,
    render_frame,
    render_trajectory,
)

# Logging
from physiviz.logger import TrajectoryLogger
from physiviz.api.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Problem
    "ProblemDescription",
    "ProblemFormatError",
    "MotionType",
    "LiveParameters",
    # Kinematics
    "Motion",
    "BodyState",
    "Projectile",
    "FreeFall",
    "LinearAcceleration",
    "Collision1D",
    "Circular",
    "motion_for",
    # Mapping
    "Viewport",
    "CoordinateMapper",
    # Rendering
    "RecordingSurface",
    "MatplotlibSurface",
    "render_trajectory",
    "render_frame",
    "render_force_diagram",
    "draw_trajectory",
    "draw_frame",
    # Playback
    "AnimationDriver",
    "ManualScheduler",
    "PlaybackState",
    "ControlPanel",
    "sliders_for",
    # Logging
    "TrajectoryLogger",
    # API
    "Scenario",
]
