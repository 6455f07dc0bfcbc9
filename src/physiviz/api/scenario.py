"""
Scenario API: fluent interface for headless playback and export.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path

import matplotlib.pyplot as plt

from physiviz.core.animation import AnimationDriver, ManualScheduler
from physiviz.kinematics.motion import BodyState, Motion, motion_for
from physiviz.logger import TrajectoryLogger
from physiviz.problem import LiveParameters, MotionType, ProblemDescription
from physiviz.render.matplotlib_surface import MatplotlibSurface
from physiviz.render.scene import draw_frame, draw_trajectory
from physiviz.utils.validation import warn_degenerate
from physiviz.visualization import plotting

PLAYBACK_PRESETS = {
    "default": {"time_step": 0.05, "time_horizon": 60.0},
    "smooth": {"time_step": 0.01, "time_horizon": 60.0},
    "fast": {"time_step": 0.1, "time_horizon": 60.0},
    "long": {"time_step": 0.05, "time_horizon": 600.0},
}


class Scenario:
    """
    One motion scene, run without a UI.

    Examples
    --------
    >>> scenario = (
    ...     Scenario.from_problem(problem, name="ledge_throw")
    ...     .set_parameters(angle=30)
    ...     .configure_playback("smooth")
    ... )
    >>> scenario.enable_logging()  # doctest: +SKIP
    >>> scenario.run().save_graphs()  # doctest: +SKIP
    """

    def __init__(
        self,
        name: str,
        motion_type: MotionType | str,
        params: LiveParameters | None = None,
        output_dir: str | Path = "output",
    ) -> None:
        self.name = name
        self.motion: Motion = motion_for(motion_type)
        self.params = params if params is not None else LiveParameters()
        self.output_dir = Path(output_dir)
        self.output_path: Path | None = None
        self.logger: TrajectoryLogger | None = None
        self.final_time: float | None = None
        self._playback = PLAYBACK_PRESETS["default"].copy()

    @classmethod
    def from_problem(
        cls, problem: ProblemDescription, name: str | None = None, output_dir: str | Path = "output"
    ) -> Scenario:
        scenario_name = name or problem.motion_type.value
        return cls(scenario_name, problem.motion_type, LiveParameters.from_problem(problem), output_dir)

    @property
    def motion_type(self) -> MotionType:
        return self.motion.motion_type

    def set_parameters(self, **changes: float) -> Scenario:
        """Edit the scene parameters (e.g. ``angle=30, gravity=1.6``)."""
        self.params = self.params.replace(**changes)
        return self

    def configure_playback(self, preset: str = "default", **kwargs: float) -> Scenario:
        """
        Choose a playback preset and optional overrides.

        Presets: 'default', 'smooth', 'fast', 'long'
        Kwargs: time_step, time_horizon
        """
        if preset not in PLAYBACK_PRESETS:
            raise ValueError(f"Unknown preset {preset!r}. Valid options: {list(PLAYBACK_PRESETS)}")
        self._playback = PLAYBACK_PRESETS[preset].copy()
        self._playback.update(kwargs)
        return self

    def enable_logging(self, auto_timestamp: bool = True) -> Path:
        """
        Create the output folders and log every frame to CSV.

        Notes
        -----
        Creates directory structure:
            output/<name>_<timestamp>/
                logs/frames.csv
                plots/
        """
        folder = self.name
        if auto_timestamp:
            folder = f"{self.name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
        self.output_path = self.output_dir / folder
        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)

        self.logger = TrajectoryLogger(logs_dir / "frames.csv")

        print(f"[Scenario] Logging enabled: {self.output_path}")
        print(f"           Logs: {logs_dir}")
        print(f"           Plots: {plots_dir}")
        return self.output_path

    def frame(self, t: float) -> list[BodyState]:
        return self.motion.compute_state(self.params, t)

    def run(self, duration: float | None = None, log_interval: float = 1.0) -> Scenario:
        """Play the scene to its natural end (or ``duration``)."""
        print(f"Running Scenario: {self.name}")
        warn_degenerate(self.motion_type, self.params)
        print(
            f"[Scenario] Playback: dt={self._playback['time_step']}s, "
            f"horizon={self._playback['time_horizon']}s"
        )
        driver = AnimationDriver(
            self.motion,
            self.params,
            scheduler=ManualScheduler(),
            time_step=self._playback["time_step"],
            time_horizon=self._playback["time_horizon"],
            logger=self.logger,
        )
        try:
            self.final_time = driver.run(duration, log_interval=log_interval)
        finally:
            if self.logger is not None:
                self.logger.close()
        return self

    def _plots_dir(self, directory: str | Path | None) -> Path:
        if directory is not None:
            path = Path(directory)
        elif self.output_path is not None:
            path = self.output_path / "plots"
        else:
            path = self.output_dir / self.name / "plots"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def save_frame(self, path: str | Path, t: float | None = None, view: str = "frame") -> Path:
        """
        Render one view to an image file.

        Parameters
        ----------
        path : str | Path
            Output file (png/svg)
        t : float | None
            Simulation time of the frame. Defaults to the last run time (or 0).
        view : str
            "frame" for the live simulator frame, "trajectory" for the
            annotated trajectory view.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if view == "frame":
            surface = MatplotlibSurface(800, 400)
            t = t if t is not None else (self.final_time or 0.0)
            draw_frame(surface, self.motion, self.params, t)
        elif view == "trajectory":
            surface = MatplotlibSurface(800, 600)
            draw_trajectory(surface, self.motion, self.params)
        else:
            raise ValueError(f"Unknown view {view!r}. Valid options: ['frame', 'trajectory']")
        surface.savefig(str(path))
        plt.close(surface.figure)
        return path

    def save_graphs(self, directory: str | Path | None = None) -> list[Path]:
        """Write the time-series and trajectory graphs (and the frame-log plot when logged)."""
        plots_dir = self._plots_dir(directory)
        print(f"[Scenario] Generating plots in: {plots_dir}")

        saved = []
        df = plotting.sample_time_series(self.motion, self.params)
        series = plots_dir / "time_series.png"
        plt.close(plotting.plot_time_series(df, save_path=str(series), title=self.name))
        saved.append(series)

        traj = plots_dir / "trajectory.png"
        plt.close(plotting.plot_trajectory(self.motion, self.params, save_path=str(traj)))
        saved.append(traj)

        if self.logger is not None and self.logger.filepath.exists() and self.logger.rows_written:
            frames = plots_dir / "frames.png"
            body = self.frame(0.0)[0].name
            plt.close(plotting.plot_frames_csv(str(self.logger.filepath), body, save_path=str(frames)))
            saved.append(frames)

        print(f"[Scenario] Plots saved to: {plots_dir}")
        return saved
