"""Free-body diagram of a single body with its active forces."""
from __future__ import annotations

import math
from collections.abc import Iterable

from .surface import DrawCommand, RecordingSurface

FORCE_ARROW_LENGTH = 0.3  # Fraction of the diagram size

# tag -> (direction in pixel space, color, label)
FORCE_STYLES: dict[str, tuple[tuple[float, float], str, str]] = {
    "gravity": ((0.0, 1.0), "#ef4444", "F_g (mg)"),
    "normal": ((0.0, -1.0), "#10b981", "F_n"),
    "applied": ((1.0, 0.0), "#7c3aed", "F_a"),
    "tension": ((1.0, 0.0), "#7c3aed", "F_a"),
    "friction": ((-1.0, 0.0), "#f59e0b", "F_f"),
}


def render_force_diagram(forces: Iterable[str], size: int = 200) -> list[DrawCommand]:
    """
    Draw instructions for a free-body diagram.

    The body sits at the center; each recognised force tag adds one arrow
    (gravity down, normal up, applied or tension right, friction left).
    Applied and tension share the same arrow. Unknown tags are ignored.

    Parameters
    ----------
    forces : Iterable[str]
        Force tags of the problem
    size : int
        Edge length of the square diagram [px]

    Returns
    -------
    list[DrawCommand]
    """
    s = RecordingSurface(size, size)
    c = size / 2.0
    length = FORCE_ARROW_LENGTH * size

    s.set_fill_style("#f8fafc")
    s.fill_rect(0, 0, size, size)

    drawn: set[str] = set()
    for tag in forces:
        tag = tag.strip().lower()
        if tag not in FORCE_STYLES:
            continue
        (dx, dy), color, label = FORCE_STYLES[tag]
        if label in drawn:
            continue
        drawn.add(label)

        x1, y1 = c + dx * length, c + dy * length
        s.set_stroke_style(color)
        s.set_line_width(2)
        s.begin_path()
        s.move_to(c, c)
        s.line_to(x1, y1)
        s.stroke()

        ang = math.atan2(dy, dx)
        s.set_fill_style(color)
        s.begin_path()
        s.move_to(x1, y1)
        s.line_to(x1 - 10 * math.cos(ang - math.pi / 6), y1 - 10 * math.sin(ang - math.pi / 6))
        s.line_to(x1 - 10 * math.cos(ang + math.pi / 6), y1 - 10 * math.sin(ang + math.pi / 6))
        s.close_path()
        s.fill()

        s.set_font("bold 10px Arial")
        s.set_text_align("left")
        s.fill_text(label, x1 + 5 if dx >= 0 else x1 - 25, y1 - 5)

    s.set_fill_style("#2563eb")
    s.begin_path()
    s.arc(c, c, 10, 0.0, 2.0 * math.pi)
    s.fill()
    s.set_fill_style("#334155")
    s.set_font("bold 10px Arial")
    s.set_text_align("left")
    s.fill_text("m", c + 15, c + 5)
    return s.commands
