"""
CSV logging of animation frames.

Buffers rows in memory and writes in batches. Implements the context manager
protocol so the file is always closed.
"""
from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from physiviz.kinematics.motion import BodyState

FIELDS = ("x", "y", "vx", "vy")


class TrajectoryLogger:
    """
    Buffered CSV logger for body states.

    One row per logged frame: ``t`` followed by ``<body>.x``, ``<body>.y``,
    ``<body>.vx`` and ``<body>.vy`` for every body in frame order.

    Parameters
    ----------
    filepath : str | Path
        Output CSV file path
    buffer_size : int
        Number of rows to buffer before writing.

    Notes
    -----
    The header is written from the body names of the first logged frame;
    later frames must carry the same bodies in the same order.

    Examples
    --------
    >>> with TrajectoryLogger("frames.csv") as log:
    ...     log.log(0.0, motion.compute_state(params, 0.0))  # doctest: +SKIP
    """

    def __init__(self, filepath: str | Path, buffer_size: int = 500) -> None:
        if buffer_size < 1:
            raise ValueError(f"buffer_size must be at least 1, got {buffer_size}")
        self.filepath = Path(filepath)
        self.buffer_size = buffer_size
        self.rows_written = 0

        self._buffer: list[list[str]] = []
        self._file: TextIO | None = None
        self._writer: Any = None
        self._header: list[str] | None = None

        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def __enter__(self) -> TrajectoryLogger:
        self._file = open(self.filepath, "w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._file)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def header(self) -> list[str] | None:
        return self._header

    def _write_header(self, bodies: Sequence[BodyState]) -> None:
        hdr = ["t"]
        for b in bodies:
            hdr.extend(f"{b.name}.{f}" for f in FIELDS)
        self._writer.writerow(hdr)
        if self._file:
            self._file.flush()
        self._header = hdr

    def log(self, t: float, bodies: Sequence[BodyState]) -> None:
        """
        Buffer one frame.

        Opens the file on first use when not used as a context manager.

        Raises
        ------
        ValueError
            If the number of bodies differs from the header.
        """
        if self._file is None:
            self.__enter__()

        if self._header is None:
            self._write_header(bodies)
        elif len(self._header) != 1 + len(FIELDS) * len(bodies):
            raise ValueError(
                f"Frame has {len(bodies)} bodies, header expects "
                f"{(len(self._header) - 1) // len(FIELDS)}"
            )

        row = [f"{t:.6f}"]
        for b in bodies:
            row.extend(f"{getattr(b, f):.10e}" for f in FIELDS)
        self._buffer.append(row)

        if len(self._buffer) >= self.buffer_size:
            self.flush()

    def flush(self) -> None:
        """Write buffered rows to disk."""
        if self._writer and self._buffer:
            self._writer.writerows(self._buffer)
            self.rows_written += len(self._buffer)
            if self._file:
                self._file.flush()
            self._buffer.clear()

    def close(self) -> None:
        """Flush remaining rows and close the file."""
        self.flush()
        if self._file:
            self._file.close()
            self._file = None
            self._writer = None
