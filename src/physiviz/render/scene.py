"""
Scene rendering.

Every function here is a pure function of (motion, parameters, time,
viewport): it builds a fresh list of ``DrawCommand`` objects and keeps no
state between calls, so parameter edits show up on the very next frame and
two calls with the same inputs produce identical instructions.

Two scenes are provided:

- ``render_trajectory`` - static annotated trajectory view (800×600): grid,
  axes with tick labels, full path, launch velocity, gravity, and the
  max-height and range markers.
- ``render_frame`` - one frame of the live simulator (800×400): ground,
  path, bodies with velocity arrows, acceleration arrow and a time readout.

``draw_trajectory`` and ``draw_frame`` paint the same instructions onto an
explicitly passed surface.
"""
from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from physiviz.core.mapping import SIMULATOR_VIEWPORT, TRAJECTORY_VIEWPORT, CoordinateMapper, Viewport
from physiviz.kinematics.motion import BodyState, Circular, Collision1D, Motion, Projectile
from physiviz.kinematics.projectile import DEFAULT_TIME_HORIZON, TRAJECTORY_SAMPLES
from physiviz.problem import LiveParameters

from .surface import DrawCommand, RecordingSurface, Surface, replay

# Palette
BACKGROUND = "#f8f9fa"
SIM_BACKGROUND = "#f8fafc"
GRID_COLOR = "#e2e8f0"
AXIS_COLOR = "#334155"
LABEL_COLOR = "#1e293b"
TICK_COLOR = "#64748b"
PATH_COLOR = "#06b6d4"
LIVE_PATH_COLOR = "#0ea5e9"
BODY_COLOR = "#2563eb"
BODY_GLOW = "#3b82f6"
BLOCK_COLORS = ("#2563eb", "#7c3aed")
VELOCITY_COLOR = "#3b82f6"
LIVE_VELOCITY_COLOR = "#ef4444"
GRAVITY_COLOR = "#f97316"
PEAK_COLOR = "#d946ef"
RANGE_COLOR = "#8b5cf6"
GROUND_COLOR = "#94a3b8"
HIGHLIGHT_FILL = "#fbbf24"
HIGHLIGHT_STROKE = "#f59e0b"

TICK_COUNT = 10
VELOCITY_ARROW_SCALE = 30.0  # Trajectory view [px per m/s]
LIVE_VELOCITY_SCALE = 2.0  # Live simulator [px per m/s]
ACCEL_ARROW_SCALE = 4.0  # [px per m/s²]
MAX_ACCEL_ARROW_LENGTH = 150.0  # [px]
ARROW_HEAD = 12.0  # [px]
BALL_RADIUS = 10.0  # [px]
PATH_MARKERS = 8


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------

def _line(s: Surface, x0: float, y0: float, x1: float, y1: float) -> None:
    s.begin_path()
    s.move_to(x0, y0)
    s.line_to(x1, y1)
    s.stroke()


def _polyline(s: Surface, pts: NDArray[np.float64]) -> None:
    if len(pts) == 0:
        return
    s.begin_path()
    s.move_to(pts[0, 0], pts[0, 1])
    for px, py in pts[1:]:
        s.line_to(px, py)
    s.stroke()


def _dot(s: Surface, x: float, y: float, r: float, color: str) -> None:
    s.set_fill_style(color)
    s.begin_path()
    s.arc(x, y, r, 0.0, 2.0 * math.pi)
    s.fill()


def _text(
    s: Surface, text: str, x: float, y: float, color: str, font: str = "12px Arial", align: str = "left"
) -> None:
    s.set_fill_style(color)
    s.set_font(font)
    s.set_text_align(align)
    s.fill_text(text, x, y)


def _arrow(
    s: Surface,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: str,
    width: float = 2.5,
    head: float = ARROW_HEAD,
) -> None:
    """Straight arrow from (x0, y0) to (x1, y1) in pixels."""
    s.set_stroke_style(color)
    s.set_line_width(width)
    _line(s, x0, y0, x1, y1)
    if math.hypot(x1 - x0, y1 - y0) < 1e-9:
        return
    ang = math.atan2(y1 - y0, x1 - x0)
    s.set_fill_style(color)
    s.begin_path()
    s.move_to(x1, y1)
    s.line_to(x1 - head * math.cos(ang - math.pi / 6), y1 - head * math.sin(ang - math.pi / 6))
    s.line_to(x1 - head * math.cos(ang + math.pi / 6), y1 - head * math.sin(ang + math.pi / 6))
    s.close_path()
    s.fill()


def _vector_tip(
    x: float, y: float, vx: float, vy: float, scale: float, cap: float | None = None
) -> tuple[float, float]:
    """Pixel tip of a world vector drawn from (x, y), optionally capped in length."""
    dx, dy = vx * scale, -vy * scale
    length = math.hypot(dx, dy)
    if cap is not None and length > cap:
        dx, dy = dx * cap / length, dy * cap / length
    return x + dx, y + dy


# -----------------------------------------------------------------------------
# Trajectory view
# -----------------------------------------------------------------------------

def _grid_and_axes(s: Surface, mapper: CoordinateMapper) -> None:
    vp = mapper.viewport
    left, bottom = vp.padding, vp.height - vp.padding
    gw, gh = vp.graph_width, vp.graph_height

    s.set_stroke_style(GRID_COLOR)
    s.set_line_width(0.5)
    for i in range(TICK_COUNT + 1):
        x = left + i * gw / TICK_COUNT
        y = bottom - i * gh / TICK_COUNT
        _line(s, x, bottom, x, bottom - gh)
        _line(s, left, y, left + gw, y)

    s.set_stroke_style(AXIS_COLOR)
    s.set_line_width(2)
    _line(s, left, bottom, left + gw, bottom)
    _line(s, left, bottom, left, bottom - gh)

    _text(s, "x (m)", left + gw / 2, vp.height - 10, LABEL_COLOR, "14px Arial", "center")
    s.save()
    s.translate(20, vp.height / 2)
    s.rotate(-math.pi / 2)
    _text(s, "y (m)", 0, 0, LABEL_COLOR, "14px Arial", "center")
    s.restore()

    # Labels are read back through the mapper so they match the drawn geometry
    s.set_stroke_style(TICK_COLOR)
    s.set_line_width(1)
    for i in range(1, TICK_COUNT + 1):
        x = left + i * gw / TICK_COUNT
        x_value, _ = mapper.canvas_to_world(x, bottom)
        _line(s, x, bottom, x, bottom + 5)
        _text(s, f"{x_value:.1f}", x, bottom + 20, TICK_COLOR, "12px Arial", "center")

        y = bottom - i * gh / TICK_COUNT
        _, y_value = mapper.canvas_to_world(left, y)
        _line(s, left - 5, y, left, y)
        _text(s, f"{y_value:.1f}", left - 10, y + 5, TICK_COLOR, "12px Arial", "right")


def _projectile_markers(
    s: Surface, mapper: CoordinateMapper, motion: Projectile, params: LiveParameters
) -> None:
    sol = motion.solution(params)
    left = mapper.viewport.padding
    _, ground_y = mapper.world_to_canvas(0.0, 0.0)

    if math.isfinite(sol.max_height) and sol.max_height > 0.0:
        px, py = mapper.world_to_canvas(sol.vx * sol.peak_time, sol.max_height)
        s.set_stroke_style(PEAK_COLOR)
        s.set_line_width(1.5)
        s.set_line_dash([4, 4])
        _line(s, left, py, px, py)
        s.set_line_dash([])
        _dot(s, px, py, 5, "#ec4899")
        _text(s, f"h = {sol.max_height:.2f} m", px, py - 12, "#be123c", "bold 11px Arial", "center")

    if math.isfinite(sol.range):
        rx, _ = mapper.world_to_canvas(sol.range, 0.0)
        s.set_stroke_style(RANGE_COLOR)
        s.set_line_width(1.5)
        s.set_line_dash([4, 4])
        _line(s, rx, ground_y, rx, ground_y + 20)
        s.set_line_dash([])
        _text(s, f"Range = {sol.range:.2f} m", rx, ground_y + 35, "#6d28d9", "bold 11px Arial", "center")


def render_trajectory(
    motion: Motion,
    params: LiveParameters,
    viewport: Viewport = TRAJECTORY_VIEWPORT,
    selected_point: int | None = None,
    samples: int = TRAJECTORY_SAMPLES,
) -> list[DrawCommand]:
    """
    Draw instructions for the annotated trajectory view.

    Parameters
    ----------
    motion : Motion
        Motion variant of the problem
    params : LiveParameters
        Current (possibly edited) parameters
    viewport : Viewport
        Target surface size and padding
    selected_point : int | None
        Index of a path sample to highlight
    samples : int
        Path resolution over ``[0, t_f]``

    Returns
    -------
    list[DrawCommand]
    """
    s = RecordingSurface(viewport.width, viewport.height)
    mapper = CoordinateMapper.fit(motion.bounds(params), viewport)

    s.set_fill_style(BACKGROUND)
    s.fill_rect(0, 0, viewport.width, viewport.height)
    _grid_and_axes(s, mapper)

    path = mapper.path_to_canvas(motion.path(params, samples=samples))
    s.set_stroke_style(PATH_COLOR)
    s.set_line_width(3)
    _polyline(s, path)

    start = motion.compute_state(params, 0.0)[0]
    sx, sy = mapper.world_to_canvas(start.x, start.y)
    _dot(s, sx, sy, 6, "#0ea5e9")

    tip_x, tip_y = _vector_tip(sx, sy, start.vx, start.vy, VELOCITY_ARROW_SCALE)
    _arrow(s, sx, sy, tip_x, tip_y, VELOCITY_COLOR)
    _text(s, f"u₀ = {start.speed:.1f} m/s", tip_x + 10, tip_y - 5, "#1e40af", "bold 12px Arial")

    if isinstance(motion, Projectile):
        if params.gravity > 0.0:
            gx = viewport.padding + viewport.graph_width - 40
            gy = viewport.height - viewport.padding - 80
            _arrow(s, gx, gy - 40, gx, gy, GRAVITY_COLOR)
            _text(s, "g", gx, gy + 20, "#7c2d12", "bold 12px Arial", "center")
        _projectile_markers(s, mapper, motion, params)

    if selected_point is not None and 0 <= selected_point < len(path):
        px, py = path[selected_point]
        s.set_fill_style(HIGHLIGHT_FILL)
        s.set_stroke_style(HIGHLIGHT_STROKE)
        s.set_line_width(2)
        s.begin_path()
        s.arc(px, py, 8, 0.0, 2.0 * math.pi)
        s.fill()
        s.stroke()

    return s.commands


# -----------------------------------------------------------------------------
# Live simulator frame
# -----------------------------------------------------------------------------

def _draw_ball(s: Surface, mapper: CoordinateMapper, body: BodyState) -> tuple[float, float]:
    x, y = mapper.world_to_canvas(body.x, body.y)
    _dot(s, x, y, BALL_RADIUS, BODY_COLOR)
    s.set_stroke_style(BODY_GLOW)
    s.set_line_width(2)
    s.set_global_alpha(0.5)
    s.begin_path()
    s.arc(x, y, BALL_RADIUS + 5, 0.0, 2.0 * math.pi)
    s.stroke()
    s.set_global_alpha(1.0)
    _text(s, body.name, x - 20, y - 20, LABEL_COLOR, "12px Inter")

    tip_x, tip_y = _vector_tip(x, y, body.vx, body.vy, LIVE_VELOCITY_SCALE)
    s.set_stroke_style(LIVE_VELOCITY_COLOR)
    s.set_line_width(2)
    _line(s, x, y, tip_x, tip_y)
    return x, y


def _draw_blocks(
    s: Surface, mapper: CoordinateMapper, bodies: list[BodyState], size: float
) -> None:
    w, h = size * mapper.scale_x, size * mapper.scale_y
    for i, body in enumerate(bodies):
        x, y = mapper.world_to_canvas(body.x, body.y)
        s.set_fill_style(BLOCK_COLORS[i % len(BLOCK_COLORS)])
        s.fill_rect(x, y - h, w, h)
        _text(s, body.name, x + w / 2, y - h / 2 + 4, "white", "12px Inter", "center")
        _text(s, f"v{i + 1}: {body.vx:.1f} m/s", x, y - h - 10, TICK_COLOR, "10px Inter")


def _draw_path(s: Surface, mapper: CoordinateMapper, motion: Motion, params: LiveParameters) -> None:
    pts = mapper.path_to_canvas(motion.path(params, horizon=DEFAULT_TIME_HORIZON))
    s.set_line_dash([8, 4])
    s.set_stroke_style(LIVE_PATH_COLOR)
    s.set_line_width(3)
    _polyline(s, pts)
    s.set_line_dash([])

    s.set_global_alpha(0.6)
    for idx in np.linspace(0, len(pts) - 1, PATH_MARKERS + 1).astype(int):
        _dot(s, pts[idx, 0], pts[idx, 1], 4, PATH_COLOR)
    s.set_global_alpha(1.0)


def _draw_orbit(s: Surface, mapper: CoordinateMapper, params: LiveParameters, body: BodyState) -> None:
    cx, cy = mapper.world_to_canvas(0.0, 0.0)
    s.set_stroke_style(GROUND_COLOR)
    s.set_line_width(1.5)
    s.set_line_dash([8, 4])
    s.begin_path()
    s.arc(cx, cy, max(params.radius, 0.0) * mapper.scale_x, 0.0, 2.0 * math.pi)
    s.stroke()
    s.set_line_dash([])
    _dot(s, cx, cy, 3, AXIS_COLOR)
    bx, by = mapper.world_to_canvas(body.x, body.y)
    s.set_stroke_style(GRID_COLOR)
    s.set_line_width(1)
    _line(s, cx, cy, bx, by)


def render_frame(
    motion: Motion,
    params: LiveParameters,
    t: float,
    viewport: Viewport = SIMULATOR_VIEWPORT,
) -> list[DrawCommand]:
    """
    Draw instructions for one frame of the live simulator at time ``t``.

    Collision scenes draw two labelled blocks; circular scenes draw the orbit
    and the centripetal acceleration; every other scene draws the ground,
    the dashed path and the body with its velocity arrow.
    """
    s = RecordingSurface(viewport.width, viewport.height)
    mapper = CoordinateMapper.fit(motion.bounds(params), viewport, uniform=motion.uniform_scale)
    bodies = motion.compute_state(params, t)

    s.clear_rect(0, 0, viewport.width, viewport.height)
    s.set_fill_style(SIM_BACKGROUND)
    s.fill_rect(0, 0, viewport.width, viewport.height)

    if isinstance(motion, Circular):
        _draw_orbit(s, mapper, params, bodies[0])
    else:
        _, ground_y = mapper.world_to_canvas(0.0, 0.0)
        s.set_stroke_style(GROUND_COLOR)
        s.set_line_width(1)
        _line(s, 0, ground_y, viewport.width, ground_y)

    if isinstance(motion, Collision1D):
        _draw_blocks(s, mapper, bodies, motion.layout.block_size)
    else:
        if not isinstance(motion, Circular):
            _draw_path(s, mapper, motion, params)
        x, y = _draw_ball(s, mapper, bodies[0])
        ax, ay = motion.acceleration(params, t)
        if ax or ay:
            tip_x, tip_y = _vector_tip(x, y, ax, ay, ACCEL_ARROW_SCALE, cap=MAX_ACCEL_ARROW_LENGTH)
            _arrow(s, x, y, tip_x, tip_y, GRAVITY_COLOR, width=2.0, head=8.0)

    _text(s, f"t = {t:.2f} s", 10, 20, LABEL_COLOR, "12px monospace")
    return s.commands


def draw_trajectory(
    surface: Surface | None,
    motion: Motion,
    params: LiveParameters,
    viewport: Viewport | None = None,
    selected_point: int | None = None,
) -> int:
    """Paint the trajectory view onto ``surface``; no-op when it is None."""
    if surface is None:
        return 0
    vp = viewport or Viewport(surface.width, surface.height, TRAJECTORY_VIEWPORT.padding)
    return replay(render_trajectory(motion, params, vp, selected_point), surface)


def draw_frame(
    surface: Surface | None,
    motion: Motion,
    params: LiveParameters,
    t: float,
    viewport: Viewport | None = None,
) -> int:
    """Paint one simulator frame onto ``surface``; no-op when it is None."""
    if surface is None:
        return 0
    vp = viewport or Viewport(surface.width, surface.height, SIMULATOR_VIEWPORT.padding)
    return replay(render_frame(motion, params, t, vp), surface)
