"""
Scene rendering for PhysiViz.

Scenes are built as lists of draw instructions by pure functions and painted
onto any object implementing the ``Surface`` protocol.

Example
-------
>>> from physiviz.render import MatplotlibSurface, draw_frame
>>> surface = MatplotlibSurface(800, 400)
>>> draw_frame(surface, motion, params, t=0.5)  # doctest: +SKIP
"""

from .force_diagram import render_force_diagram
from .matplotlib_surface import MatplotlibSurface
from .scene import draw_frame, draw_trajectory, render_frame, render_trajectory
from .surface import DrawCommand, RecordingSurface, Surface, replay

__all__ = [
    "Surface",
    "DrawCommand",
    "RecordingSurface",
    "replay",
    "render_trajectory",
    "render_frame",
    "draw_trajectory",
    "draw_frame",
    "render_force_diagram",
    "MatplotlibSurface",
]
