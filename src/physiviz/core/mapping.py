"""
World-to-pixel coordinate mapping.

World coordinates are meters with y pointing up; pixel coordinates have the
origin at the top-left corner of the surface and y pointing down. The
mapping is affine::

    px = origin_x + x·scale_x
    py = origin_y − y·scale_y

Scales are chosen so the world region fills the padded viewport with a 10%
margin, so a curve never touches the frame edge.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from physiviz.kinematics.motion import WorldBounds

DEFAULT_PADDING = 60.0  # [px]
MARGIN_FACTOR = 1.1
DEFAULT_WORLD_EXTENT = 1.0  # Substituted for empty or unbounded extents [m]

Coord = TypeVar("Coord", float, NDArray[np.float64])


@dataclass(frozen=True)
class Viewport:
    """Fixed-size pixel surface with a padding margin on every side."""

    width: int = 800
    height: int = 600
    padding: float = DEFAULT_PADDING

    def __post_init__(self) -> None:
        if self.width <= 2 * self.padding or self.height <= 2 * self.padding:
            raise ValueError(
                f"Viewport {self.width}x{self.height} leaves no drawing area "
                f"with padding {self.padding}"
            )

    @property
    def graph_width(self) -> float:
        return self.width - 2 * self.padding

    @property
    def graph_height(self) -> float:
        return self.height - 2 * self.padding


TRAJECTORY_VIEWPORT = Viewport(800, 600, 60.0)
SIMULATOR_VIEWPORT = Viewport(800, 400, 50.0)


def _extent(lo: float, hi: float) -> float:
    span = hi - lo
    if not math.isfinite(span) or span <= 0.0:
        return DEFAULT_WORLD_EXTENT
    return span


class CoordinateMapper:
    """
    Bidirectional affine transform between world and canvas coordinates.

    Parameters
    ----------
    scale_x, scale_y : float
        Pixels per meter along each axis. Must be positive and finite.
    origin_x, origin_y : float
        Pixel position of the world origin.
    viewport : Viewport
        Surface the mapping targets.

    Examples
    --------
    >>> m = CoordinateMapper.from_bounds(100.0, 50.0, Viewport(800, 600))
    >>> m.world_to_canvas(0.0, 0.0)
    (60.0, 540.0)
    """

    def __init__(
        self,
        scale_x: float,
        scale_y: float,
        origin_x: float,
        origin_y: float,
        viewport: Viewport,
    ) -> None:
        for name, value in (("scale_x", scale_x), ("scale_y", scale_y)):
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"{name} must be positive and finite, got {value}")
        self.scale_x = float(scale_x)
        self.scale_y = float(scale_y)
        self.origin_x = float(origin_x)
        self.origin_y = float(origin_y)
        self.viewport = viewport

    @classmethod
    def from_bounds(
        cls,
        max_x: float,
        max_y: float,
        viewport: Viewport,
        min_x: float = 0.0,
        min_y: float = 0.0,
    ) -> CoordinateMapper:
        """
        Fit the world rectangle ``[min_x, max_x] × [min_y, max_y]`` to the viewport.

        ``scale_x = graph_width / (extent_x · 1.1)`` and likewise for y.
        Degenerate extents (zero, negative, NaN or infinite) are replaced by
        ``DEFAULT_WORLD_EXTENT`` so the scales stay positive and finite.
        """
        scale_x = viewport.graph_width / (_extent(min_x, max_x) * MARGIN_FACTOR)
        scale_y = viewport.graph_height / (_extent(min_y, max_y) * MARGIN_FACTOR)
        lo_x = min_x if math.isfinite(min_x) else 0.0
        lo_y = min_y if math.isfinite(min_y) else 0.0
        origin_x = viewport.padding - lo_x * scale_x
        origin_y = viewport.height - viewport.padding + lo_y * scale_y
        return cls(scale_x, scale_y, origin_x, origin_y, viewport)

    @classmethod
    def fit(
        cls, bounds: WorldBounds, viewport: Viewport, uniform: bool = False
    ) -> CoordinateMapper:
        """
        Mapper for a scene's world bounds.

        With ``uniform=True`` both axes share the smaller scale and the scene
        is centered horizontally (bottom-aligned), so shapes keep their
        aspect ratio.
        """
        mapper = cls.from_bounds(
            bounds.max_x, bounds.max_y, viewport, bounds.min_x, bounds.min_y
        )
        if not uniform:
            return mapper

        scale = min(mapper.scale_x, mapper.scale_y)
        used = _extent(bounds.min_x, bounds.max_x) * scale
        lo_x = bounds.min_x if math.isfinite(bounds.min_x) else 0.0
        lo_y = bounds.min_y if math.isfinite(bounds.min_y) else 0.0
        origin_x = viewport.padding + (viewport.graph_width - used) / 2.0 - lo_x * scale
        origin_y = viewport.height - viewport.padding + lo_y * scale
        return cls(scale, scale, origin_x, origin_y, viewport)

    def world_to_canvas(self, x: Coord, y: Coord) -> tuple[Coord, Coord]:
        """Map world meters to canvas pixels. Accepts scalars or arrays."""
        return self.origin_x + x * self.scale_x, self.origin_y - y * self.scale_y

    def canvas_to_world(self, px: Coord, py: Coord) -> tuple[Coord, Coord]:
        """Inverse of ``world_to_canvas``."""
        return (px - self.origin_x) / self.scale_x, (self.origin_y - py) / self.scale_y

    def path_to_canvas(self, points: NDArray[np.float64]) -> NDArray[np.float64]:
        """Map an (N, 2) array of world points to pixels."""
        pts = np.asarray(points, dtype=np.float64)
        px, py = self.world_to_canvas(pts[:, 0], pts[:, 1])
        return np.column_stack([px, py])

    def __repr__(self) -> str:
        return (
            f"CoordinateMapper(scale=({self.scale_x:.4g}, {self.scale_y:.4g}), "
            f"origin=({self.origin_x:.1f}, {self.origin_y:.1f}))"
        )
