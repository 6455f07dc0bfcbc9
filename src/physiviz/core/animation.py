"""
Frame-by-frame playback of a motion.

The driver owns the simulation clock and the play/pause state. Each tick
advances the clock by a fixed step, hands the new frame to a callback and asks
the scheduler for the next tick only while still playing:

    STOPPED --play--> PLAYING --pause/landing/horizon--> STOPPED
    any --reset--> STOPPED at t = 0

Frame pacing is delegated to an injected ``Scheduler`` so the same driver runs
under a UI timer or synchronously in tests and headless runs
(``ManualScheduler``).
"""
from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from physiviz.kinematics.motion import BodyState, Motion
from physiviz.logger import TrajectoryLogger
from physiviz.problem import LiveParameters
from physiviz.render.scene import draw_frame
from physiviz.render.surface import Surface
from physiviz.utils.validation import validate_positive, validate_timestep

DEFAULT_TIME_STEP = 0.05  # Simulation seconds per tick [s]
PLAYBACK_HORIZON = 60.0  # Playback never runs past this [s]


class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"


class Scheduler(Protocol):
    """Requests a callback before the next display refresh."""

    def schedule(self, callback: Callable[[], None]) -> Hashable: ...
    def cancel(self, handle: Hashable) -> None: ...


class ManualScheduler:
    """
    Scheduler that queues callbacks until they are run explicitly.

    Examples
    --------
    >>> sched = ManualScheduler()
    >>> handle = sched.schedule(lambda: None)
    >>> sched.pending
    1
    >>> sched.run_next()
    True
    """

    def __init__(self) -> None:
        self._queue: dict[int, Callable[[], None]] = {}
        self._counter = 0

    def schedule(self, callback: Callable[[], None]) -> int:
        self._counter += 1
        self._queue[self._counter] = callback
        return self._counter

    def cancel(self, handle: Hashable) -> None:
        self._queue.pop(handle, None)  # type: ignore[arg-type]

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_next(self) -> bool:
        """Run the oldest queued callback. Returns False if none was queued."""
        if not self._queue:
            return False
        handle = next(iter(self._queue))
        callback = self._queue.pop(handle)
        callback()
        return True

    def run_pending(self, max_ticks: int = 100_000) -> int:
        """Run callbacks (including newly scheduled ones) until the queue drains."""
        n = 0
        while n < max_ticks and self.run_next():
            n += 1
        return n


@dataclass(frozen=True)
class Frame:
    """What the driver hands to the frame callback."""

    t: float
    params: LiveParameters
    bodies: list[BodyState]


class AnimationDriver:
    """
    Play, pause and reset a motion on a fixed simulation time step.

    Parameters
    ----------
    motion : Motion
        Motion variant to animate
    params : LiveParameters
        Parameters of the current scene
    scheduler : Scheduler | None
        Frame pacing source. Defaults to a ``ManualScheduler``.
    on_frame : Callable[[Frame], None] | None
        Called with every frame (ticks and resets)
    time_step : float
        Simulation time advanced per tick [s]
    time_horizon : float
        Hard cap on the simulation time [s]
    logger : TrajectoryLogger | None
        Receives every emitted frame

    Notes
    -----
    The clock is kept as an integer tick count so repeated steps do not
    accumulate rounding error. Landing scenes stop exactly at the flight time
    (the last frame shows the body on the ground); collision scenes stop once
    both blocks have left the view.
    """

    def __init__(
        self,
        motion: Motion,
        params: LiveParameters,
        scheduler: Scheduler | None = None,
        on_frame: Callable[[Frame], None] | None = None,
        time_step: float = DEFAULT_TIME_STEP,
        time_horizon: float = PLAYBACK_HORIZON,
        logger: TrajectoryLogger | None = None,
    ) -> None:
        validate_timestep(time_step)
        validate_positive(time_horizon, "time_horizon")
        self.motion = motion
        self.params = params
        self.scheduler: Any = scheduler if scheduler is not None else ManualScheduler()
        self.on_frame = on_frame
        self.time_step = float(time_step)
        self.time_horizon = float(time_horizon)
        self.logger = logger

        self.state = PlaybackState.STOPPED
        self.simulation_time = 0.0
        self._steps = 0
        self._handle: Hashable | None = None
        self._disposed = False

    def __repr__(self) -> str:
        return (
            f"AnimationDriver({self.motion!r}, t={self.simulation_time:.3f}, "
            f"state={self.state.value})"
        )

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    @property
    def disposed(self) -> bool:
        return self._disposed

    def end_time(self) -> float:
        """Time at which playback stops on its own [s]."""
        return min(self.motion.duration(self.params), self.time_horizon)

    def is_finished(self) -> bool:
        t = self.simulation_time
        return t >= self.end_time() or self.motion.is_terminal(self.params, t)

    def frame(self) -> list[BodyState]:
        """Body states at the current simulation time."""
        return self.motion.compute_state(self.params, self.simulation_time)

    def render(self, surface: Surface | None) -> int:
        """Paint the current frame onto ``surface`` (no-op when None)."""
        return draw_frame(surface, self.motion, self.params, self.simulation_time)

    # -- state transitions --------------------------------------------------

    def play(self) -> None:
        """
        Start playback.

        Playing a finished scene restarts it from t = 0.
        """
        if self._disposed or self.is_playing:
            return
        if self.is_finished():
            self._steps = 0
            self.simulation_time = 0.0
        self.state = PlaybackState.PLAYING
        self._schedule()

    def pause(self) -> None:
        self.state = PlaybackState.STOPPED
        self._cancel()

    def toggle(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def reset(self) -> None:
        """Stop and return to t = 0, emitting the first frame."""
        self.pause()
        self._steps = 0
        self.simulation_time = 0.0
        if not self._disposed:
            self._emit()

    def set_parameters(self, params: LiveParameters) -> None:
        """Swap in edited parameters; playback restarts from a stopped t = 0."""
        self.params = params
        self.reset()

    def dispose(self) -> None:
        """Cancel any pending tick. Later ticks and play requests are ignored."""
        self.pause()
        self._disposed = True

    # -- ticking ------------------------------------------------------------

    def tick(self) -> None:
        """Advance one step, emit the frame and schedule the next tick if still playing."""
        self._handle = None
        if self._disposed or not self.is_playing:
            return

        self._steps += 1
        t = self._steps * self.time_step
        end = self.end_time()
        if t >= end:
            t = end
            self.state = PlaybackState.STOPPED
        self.simulation_time = t
        if self.motion.is_terminal(self.params, t):
            self.state = PlaybackState.STOPPED

        self._emit()
        if self.is_playing:
            self._schedule()

    def _emit(self) -> None:
        bodies = self.frame()
        if self.logger is not None:
            self.logger.log(self.simulation_time, bodies)
        if self.on_frame is not None:
            self.on_frame(Frame(self.simulation_time, self.params, bodies))

    def _schedule(self) -> None:
        self._cancel()
        self._handle = self.scheduler.schedule(self.tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    # -- headless -----------------------------------------------------------

    def run(self, duration: float | None = None, log_interval: float = 1.0) -> float:
        """
        Play synchronously until the scene stops on its own or ``duration`` elapses.

        Only available with a ``ManualScheduler``.

        Parameters
        ----------
        duration : float | None
            Simulation time to play [s]. Defaults to the playback horizon.
        log_interval : float
            Interval [s] between progress prints. Set to <= 0 to disable.

        Returns
        -------
        float
            Simulation time at which playback stopped [s].
        """
        if not isinstance(self.scheduler, ManualScheduler):
            raise TypeError("run() needs a ManualScheduler; UI schedulers drive tick() themselves")
        limit = self.time_horizon if duration is None else min(float(duration), self.time_horizon)

        print(
            f"[Driver] Starting playback: {self.motion.motion_type.value}, "
            f"dt={self.time_step}s, limit={limit}s"
        )
        if self._steps == 0:
            self._emit()
        self.play()
        last_log = self.simulation_time
        try:
            while self.is_playing and self.scheduler.run_next():
                if log_interval > 0 and self.simulation_time - last_log >= log_interval:
                    body = self.frame()[0]
                    print(
                        f"[Driver] t={self.simulation_time:6.2f}s | {body.name} "
                        f"x={body.x:8.2f}m, y={body.y:8.2f}m"
                    )
                    last_log = self.simulation_time
                if self.simulation_time >= limit - 1e-12:
                    self.pause()
        finally:
            if self.logger is not None:
                self.logger.flush()

        print(f"[Driver] Playback stopped at t={self.simulation_time:.6f}s")
        return self.simulation_time
