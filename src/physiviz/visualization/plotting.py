from __future__ import annotations

import math
import os
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from matplotlib.figure import Figure
from plotly.subplots import make_subplots

from physiviz.kinematics.motion import Motion, Projectile
from physiviz.kinematics.projectile import DEFAULT_TIME_HORIZON
from physiviz.problem import LiveParameters

GRAPH_SAMPLES = 21  # Points per graph series
ENGINES = ("matplotlib", "plotly")

COLORS = {
    "y": "#1a73e8",
    "vy": "#34a853",
    "vx": "#fbbc05",
    "path": "#06b6d4",
    "marker": "#ea4335",
}


def _check_engine(engine: str) -> None:
    if engine not in ENGINES:
        raise ValueError(f"Unknown engine {engine!r}. Valid options: {list(ENGINES)}")


def _finish_matplotlib(fig: Figure, save_path: str | None, show: bool) -> Figure:
    fig.tight_layout()
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path, dpi=180, bbox_inches="tight")
    if show:
        plt.show()
    return fig


def _finish_plotly(fig: go.Figure, save_path: str | None, show: bool) -> go.Figure:
    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        if Path(save_path).suffix.lower() == ".html":
            fig.write_html(save_path, include_plotlyjs="cdn")
        else:
            fig.write_image(save_path)  # static export needs kaleido
    if show:
        fig.show()
    return fig


def sample_time_series(
    motion: Motion,
    params: LiveParameters,
    samples: int = GRAPH_SAMPLES,
    horizon: float = DEFAULT_TIME_HORIZON,
    body: int = 0,
) -> pd.DataFrame:
    """
    Sample position and velocity of one body over the scene duration.

    Parameters
    ----------
    motion : Motion
        Motion variant
    params : LiveParameters
        Scene parameters
    samples : int
        Number of rows (evenly spaced, both ends included)
    horizon : float
        Upper time limit for scenes that never end [s]
    body : int
        Index of the body in the frame

    Returns
    -------
    DataFrame
        Columns ``t, x, y, vx, vy``. Positions are clamped at ground level by
        the kinematics, so ``y`` never goes negative.
    """
    if samples < 2:
        raise ValueError(f"samples must be at least 2, got {samples}")
    t_end = min(motion.duration(params), horizon)
    rows = []
    for t in np.linspace(0.0, t_end, samples):
        s = motion.compute_state(params, float(t))[body]
        rows.append({"t": float(t), "x": s.x, "y": s.y, "vx": s.vx, "vy": s.vy})
    return pd.DataFrame(rows, columns=["t", "x", "y", "vx", "vy"])


def plot_time_series(
    df: pd.DataFrame,
    engine: str = "matplotlib",
    save_path: str | None = None,
    show: bool = False,
    title: str | None = None,
) -> Any:
    """
    Plot height and velocity against time.

    Top panel: ``y(t)``. Bottom panel: ``vy(t)`` and ``vx(t)``.

    Parameters
    ----------
    df : DataFrame
        Output of ``sample_time_series`` (or any frame with the same columns)
    engine : str
        "matplotlib" or "plotly"
    save_path : str | None
        If given, save the figure there (png/svg; html for plotly).
    show : bool
        Whether to display the figure.

    Returns
    -------
    Figure | plotly.graph_objects.Figure
    """
    _check_engine(engine)
    title = title or "Motion over time"

    if engine == "plotly":
        fig = make_subplots(rows=2, cols=1, shared_xaxes=True, subplot_titles=("Height", "Velocity"))
        fig.add_trace(go.Scatter(x=df["t"], y=df["y"], name="y", line=dict(color=COLORS["y"])), row=1, col=1)
        fig.add_trace(go.Scatter(x=df["t"], y=df["vy"], name="v_y", line=dict(color=COLORS["vy"])), row=2, col=1)
        fig.add_trace(
            go.Scatter(x=df["t"], y=df["vx"], name="v_x", line=dict(color=COLORS["vx"], dash="dash")),
            row=2,
            col=1,
        )
        fig.update_xaxes(title_text="t [s]", row=2, col=1)
        fig.update_yaxes(title_text="y [m]", row=1, col=1)
        fig.update_yaxes(title_text="velocity [m/s]", row=2, col=1)
        fig.update_layout(title=title, template="plotly_white")
        return _finish_plotly(fig, save_path, show)

    fig, axes = plt.subplots(2, 1, figsize=(10, 7), sharex=True)
    axes[0].plot(df["t"], df["y"], color=COLORS["y"], lw=2, label="y")
    axes[0].set_ylabel("y [m]")
    axes[0].grid(True, alpha=0.3)
    axes[0].set_title(title)

    axes[1].plot(df["t"], df["vy"], color=COLORS["vy"], lw=2, label="v_y")
    axes[1].plot(df["t"], df["vx"], color=COLORS["vx"], lw=2, ls="--", label="v_x")
    axes[1].axhline(0.0, color="#94a3b8", lw=1)
    axes[1].set_xlabel("t [s]")
    axes[1].set_ylabel("velocity [m/s]")
    axes[1].grid(True, alpha=0.3)
    axes[1].legend(loc="best")
    return _finish_matplotlib(fig, save_path, show)


def plot_trajectory(
    motion: Motion,
    params: LiveParameters,
    engine: str = "matplotlib",
    save_path: str | None = None,
    show: bool = False,
) -> Any:
    """
    Plot the path ``y(x)`` with the apex and landing point marked.

    Returns
    -------
    Figure | plotly.graph_objects.Figure
    """
    _check_engine(engine)
    path = motion.path(params)
    x, y = path[:, 0], path[:, 1]

    marks: list[tuple[float, float, str]] = []
    if isinstance(motion, Projectile):
        sol = motion.solution(params)
        if math.isfinite(sol.max_height):
            marks.append((sol.vx * sol.peak_time, sol.max_height, f"h = {sol.max_height:.2f} m"))
        if math.isfinite(sol.range):
            marks.append((sol.range, 0.0, f"R = {sol.range:.2f} m"))

    title = f"Trajectory - {params.name} ({motion.motion_type.value})"
    if engine == "plotly":
        fig = go.Figure()
        fig.add_trace(go.Scatter(x=x, y=y, mode="lines", name="path", line=dict(color=COLORS["path"], width=3)))
        for mx, my, label in marks:
            fig.add_trace(
                go.Scatter(
                    x=[mx], y=[my], mode="markers+text", text=[label], textposition="top center",
                    marker=dict(color=COLORS["marker"], size=9), showlegend=False,
                )
            )
        fig.update_layout(title=title, xaxis_title="x [m]", yaxis_title="y [m]", template="plotly_white")
        return _finish_plotly(fig, save_path, show)

    fig, ax = plt.subplots(1, 1, figsize=(10, 6))
    ax.plot(x, y, color=COLORS["path"], lw=3)
    ax.scatter(x[0], y[0], color="#34a853", s=40, label="start", zorder=3)
    for mx, my, label in marks:
        ax.scatter(mx, my, color=COLORS["marker"], s=40, zorder=3)
        ax.annotate(label, (mx, my), textcoords="offset points", xytext=(0, 8), ha="center")
    ax.set_xlabel("x [m]")
    ax.set_ylabel("y [m]")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")
    return _finish_matplotlib(fig, save_path, show)


def load_frames_csv(csv_path: str) -> pd.DataFrame:
    """
    Load a CSV written by ``TrajectoryLogger``.

    Raises
    ------
    ValueError
        If the first column is not time ``t``.
    """
    df = pd.read_csv(csv_path)
    if len(df.columns) == 0 or df.columns[0] != "t":
        raise ValueError("First column must be time 't'.")
    return df


def frame_bodies(df: pd.DataFrame) -> list[str]:
    """Body names found in a frame log, in column order."""
    names: list[str] = []
    for col in df.columns:
        if col.endswith(".x"):
            names.append(col[: -len(".x")])
    return names


def plot_frames_csv(
    csv_path: str,
    body: str,
    engine: str = "matplotlib",
    save_path: str | None = None,
    show: bool = False,
) -> Any:
    """
    Plot a logged playback: path of ``body`` and its velocity over time.

    Raises
    ------
    KeyError
        If the log has no columns for ``body``.
    """
    _check_engine(engine)
    df = load_frames_csv(csv_path)
    cols = [f"{body}.{f}" for f in ("x", "y", "vx", "vy")]
    for name in cols:
        if name not in df.columns:
            raise KeyError(f"Column '{name}' not found in CSV.")
    t = df["t"]
    x, y, vx, vy = (df[c] for c in cols)

    if engine == "plotly":
        fig = make_subplots(rows=1, cols=2, subplot_titles=(f"Path - {body}", "Velocity"))
        fig.add_trace(go.Scatter(x=x, y=y, name="path", line=dict(color=COLORS["path"])), row=1, col=1)
        fig.add_trace(go.Scatter(x=t, y=vx, name="v_x", line=dict(color=COLORS["vx"])), row=1, col=2)
        fig.add_trace(go.Scatter(x=t, y=vy, name="v_y", line=dict(color=COLORS["vy"])), row=1, col=2)
        fig.update_xaxes(title_text="x [m]", row=1, col=1)
        fig.update_yaxes(title_text="y [m]", row=1, col=1)
        fig.update_xaxes(title_text="t [s]", row=1, col=2)
        fig.update_yaxes(title_text="velocity [m/s]", row=1, col=2)
        fig.update_layout(template="plotly_white")
        return _finish_plotly(fig, save_path, show)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].plot(x, y, color=COLORS["path"], lw=2)
    axes[0].scatter(x.iloc[0], y.iloc[0], color="#34a853", s=40, label="start")
    axes[0].scatter(x.iloc[-1], y.iloc[-1], color="#ea4335", s=40, label="end")
    axes[0].set_xlabel("x [m]")
    axes[0].set_ylabel("y [m]")
    axes[0].set_title(f"Path - {body}")
    axes[0].grid(True, alpha=0.3)
    axes[0].legend(loc="best")

    axes[1].plot(t, vx, color=COLORS["vx"], label="v_x")
    axes[1].plot(t, vy, color=COLORS["vy"], label="v_y")
    axes[1].set_xlabel("t [s]")
    axes[1].set_ylabel("velocity [m/s]")
    axes[1].set_title("Velocity")
    axes[1].grid(True, alpha=0.3)
    axes[1].legend(loc="best")
    return _finish_matplotlib(fig, save_path, show)
