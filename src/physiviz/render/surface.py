"""
Drawable surface contract and draw instructions.

Scenes are described as a list of ``DrawCommand`` objects, each naming one
call on a 2-D immediate-mode surface. Commands are replayed onto any object
that implements ``Surface``: a ``RecordingSurface`` in tests, a matplotlib
axes in ``matplotlib_surface``, or a browser canvas behind the dashboard.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol


class Surface(Protocol):
    """Immediate-mode 2-D drawing surface (pixel space, y down)."""

    width: int
    height: int

    def set_fill_style(self, color: str) -> None: ...
    def set_stroke_style(self, color: str) -> None: ...
    def set_line_width(self, width: float) -> None: ...
    def set_line_dash(self, pattern: Sequence[float]) -> None: ...
    def set_font(self, font: str) -> None: ...
    def set_text_align(self, align: str) -> None: ...
    def set_global_alpha(self, alpha: float) -> None: ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...
    def begin_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def arc(self, x: float, y: float, r: float, start: float, end: float) -> None: ...
    def close_path(self) -> None: ...
    def stroke(self) -> None: ...
    def fill(self) -> None: ...
    def fill_text(self, text: str, x: float, y: float) -> None: ...

    def save(self) -> None: ...
    def restore(self) -> None: ...
    def translate(self, dx: float, dy: float) -> None: ...
    def rotate(self, angle: float) -> None: ...


SURFACE_OPS = frozenset(
    {
        "set_fill_style",
        "set_stroke_style",
        "set_line_width",
        "set_line_dash",
        "set_font",
        "set_text_align",
        "set_global_alpha",
        "clear_rect",
        "fill_rect",
        "begin_path",
        "move_to",
        "line_to",
        "arc",
        "close_path",
        "stroke",
        "fill",
        "fill_text",
        "save",
        "restore",
        "translate",
        "rotate",
    }
)


def _plain(value: Any) -> Any:
    # numpy scalars compare equal to floats but print noisily
    if isinstance(value, (list, tuple)):
        return tuple(_plain(v) for v in value)
    if isinstance(value, str):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return value


@dataclass(frozen=True)
class DrawCommand:
    """One surface call: method name and positional arguments."""

    op: str
    args: tuple = ()

    def apply(self, surface: Surface) -> None:
        getattr(surface, self.op)(*self.args)


class RecordingSurface:
    """
    Surface that records every call as a ``DrawCommand``.

    Used by the scene functions to build instruction lists and by tests as a
    mock surface.

    Examples
    --------
    >>> s = RecordingSurface(200, 100)
    >>> s.fill_rect(0, 0, 200, 100)
    >>> s.commands
    [DrawCommand(op='fill_rect', args=(0.0, 0.0, 200.0, 100.0))]
    """

    def __init__(self, width: int = 800, height: int = 600) -> None:
        self.width = width
        self.height = height
        self.commands: list[DrawCommand] = []

    def __getattr__(self, name: str):
        if name not in SURFACE_OPS:
            raise AttributeError(name)

        def record(*args: Any) -> None:
            self.commands.append(DrawCommand(name, tuple(_plain(a) for a in args)))

        return record

    def texts(self) -> list[str]:
        """Text labels drawn so far, in order."""
        return [c.args[0] for c in self.commands if c.op == "fill_text"]


def replay(commands: Iterable[DrawCommand], surface: Surface | None) -> int:
    """
    Paint commands onto a surface.

    A missing surface (not mounted yet) is a normal transient state: nothing
    is drawn and 0 is returned.

    Returns
    -------
    int
        Number of commands applied.
    """
    if surface is None:
        return 0
    n = 0
    for cmd in commands:
        cmd.apply(surface)
        n += 1
    return n
