"""
Surface implementation backed by a matplotlib Axes.

The axes is set up in pixel space with the origin at the top-left corner and
y pointing down, so draw instructions replay without any coordinate changes.
Frames can then be saved as PNG or shown in the dashboard with
``st.pyplot``.
"""
from __future__ import annotations

import math
import re
from collections.abc import Sequence
from typing import Any

import numpy as np
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Polygon

ARC_SEGMENTS = 64  # Segments per full circle

_FONT_RE = re.compile(r"(?P<bold>bold\s+)?(?P<size>\d+(?:\.\d+)?)px\s*(?P<family>.*)")
_ALIGN = {"left": "left", "start": "left", "center": "center", "right": "right", "end": "right"}


class MatplotlibSurface:
    """
    Immediate-mode surface drawing into a matplotlib figure.

    Parameters
    ----------
    width, height : int
        Surface size [px]
    ax : Axes | None
        Axes to draw into. A new borderless figure is created if omitted.
    dpi : int
        Figure resolution; one surface pixel is one output pixel.

    Examples
    --------
    >>> from physiviz.render.scene import draw_frame
    >>> surface = MatplotlibSurface(800, 400)
    >>> draw_frame(surface, motion, params, t=1.0)  # doctest: +SKIP
    >>> surface.savefig("frame.png")  # doctest: +SKIP
    """

    def __init__(
        self, width: int = 800, height: int = 600, ax: Axes | None = None, dpi: int = 100
    ) -> None:
        self.width = width
        self.height = height
        self.dpi = dpi
        if ax is None:
            fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
            ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax = ax
        self.figure = ax.figure
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_axis_off()

        self._style: dict[str, Any] = {
            "fill": "#000000",
            "stroke": "#000000",
            "line_width": 1.0,
            "dash": (),
            "font_size": 10.0,
            "font_weight": "normal",
            "font_family": "sans-serif",
            "align": "left",
            "alpha": 1.0,
        }
        self._matrix = np.eye(3)
        self._stack: list[tuple[dict[str, Any], np.ndarray]] = []
        self._subpaths: list[list[tuple[float, float]]] = []

    # ------------------------------------------------------------------ state

    def set_fill_style(self, color: str) -> None:
        self._style["fill"] = color

    def set_stroke_style(self, color: str) -> None:
        self._style["stroke"] = color

    def set_line_width(self, width: float) -> None:
        self._style["line_width"] = float(width)

    def set_line_dash(self, pattern: Sequence[float]) -> None:
        self._style["dash"] = tuple(float(p) for p in pattern)

    def set_font(self, font: str) -> None:
        m = _FONT_RE.match(font.strip())
        if m is None:
            return
        self._style["font_size"] = float(m.group("size"))
        self._style["font_weight"] = "bold" if m.group("bold") else "normal"
        self._style["font_family"] = "monospace" if "monospace" in m.group("family") else "sans-serif"

    def set_text_align(self, align: str) -> None:
        self._style["align"] = _ALIGN.get(align, "left")

    def set_global_alpha(self, alpha: float) -> None:
        self._style["alpha"] = float(alpha)

    def save(self) -> None:
        self._stack.append((dict(self._style), self._matrix.copy()))

    def restore(self) -> None:
        if self._stack:
            self._style, self._matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        t = np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ t

    def rotate(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        r = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ r

    def _xy(self, x: float, y: float) -> tuple[float, float]:
        p = self._matrix @ np.array([x, y, 1.0])
        return float(p[0]), float(p[1])

    def _pt(self, size: float) -> float:
        # pixels -> points
        return size * 72.0 / self.dpi

    # ------------------------------------------------------------------ paths

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([self._xy(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].append(self._xy(x, y))

    def arc(self, x: float, y: float, r: float, start: float, end: float) -> None:
        sweep = end - start
        n = max(int(ARC_SEGMENTS * abs(sweep) / (2.0 * math.pi)), 2)
        pts = [self._xy(x + r * math.cos(a), y + r * math.sin(a)) for a in np.linspace(start, end, n + 1)]
        if not self._subpaths:
            self._subpaths.append([])
        self._subpaths[-1].extend(pts)

    def close_path(self) -> None:
        if self._subpaths and self._subpaths[-1]:
            self._subpaths[-1].append(self._subpaths[-1][0])

    def stroke(self) -> None:
        st = self._style
        linestyle: Any = (0, st["dash"]) if st["dash"] else "-"
        for sub in self._subpaths:
            if len(sub) < 2:
                continue
            xs, ys = zip(*sub)
            self.ax.plot(
                xs,
                ys,
                color=st["stroke"],
                linewidth=self._pt(st["line_width"]),
                linestyle=linestyle,
                alpha=st["alpha"],
                solid_capstyle="round",
            )

    def fill(self) -> None:
        for sub in self._subpaths:
            if len(sub) < 3:
                continue
            self._polygon(sub, self._style["fill"])

    def _polygon(self, pts: Sequence[tuple[float, float]], color: str) -> None:
        self.ax.add_patch(
            Polygon(pts, closed=True, facecolor=color, edgecolor="none", alpha=self._style["alpha"])
        )

    # ------------------------------------------------------------------ shapes

    def _rect(self, x: float, y: float, w: float, h: float) -> list[tuple[float, float]]:
        return [self._xy(x, y), self._xy(x + w, y), self._xy(x + w, y + h), self._xy(x, y + h)]

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._polygon(self._rect(x, y, w, h), self._style["fill"])

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.ax.add_patch(Polygon(self._rect(x, y, w, h), closed=True, facecolor="white", edgecolor="none"))

    def fill_text(self, text: str, x: float, y: float) -> None:
        st = self._style
        px, py = self._xy(x, y)
        # y is flipped on screen, so a clockwise canvas rotation is negative here
        rotation = -math.degrees(math.atan2(self._matrix[1, 0], self._matrix[0, 0]))
        self.ax.text(
            px,
            py,
            text,
            color=st["fill"],
            fontsize=self._pt(st["font_size"]),
            fontweight=st["font_weight"],
            family=st["font_family"],
            ha=st["align"],
            va="baseline",
            rotation=rotation,
            rotation_mode="anchor",
            alpha=st["alpha"],
        )

    # ------------------------------------------------------------------ output

    def savefig(self, path: str) -> str:
        """Write the figure to ``path`` (format from the extension)."""
        self.figure.savefig(path, dpi=self.dpi)
        return path
