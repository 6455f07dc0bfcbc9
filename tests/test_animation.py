import pytest

from physiviz.core.animation import (
    AnimationDriver,
    Frame,
    ManualScheduler,
    PlaybackState,
)
from physiviz.kinematics.motion import Circular, Collision1D, FreeFall, Projectile
from physiviz.problem import LiveParameters
from physiviz.render.surface import RecordingSurface


@pytest.fixture
def frames():
    return []


@pytest.fixture
def driver(ledge_params, frames):
    return AnimationDriver(FreeFall(), ledge_params, scheduler=ManualScheduler(), on_frame=frames.append)


class TestScheduler:
    def test_fifo_and_cancel(self):
        sched = ManualScheduler()
        calls = []
        h1 = sched.schedule(lambda: calls.append(1))
        sched.schedule(lambda: calls.append(2))
        sched.cancel(h1)
        assert sched.pending == 1
        assert sched.run_pending() == 1
        assert calls == [2]
        assert sched.run_next() is False


class TestStateMachine:
    def test_starts_stopped(self, driver):
        assert driver.state is PlaybackState.STOPPED
        assert driver.simulation_time == 0.0

    def test_play_schedules_one_tick(self, driver):
        driver.play()
        assert driver.is_playing
        assert driver.scheduler.pending == 1
        driver.play()
        assert driver.scheduler.pending == 1

    def test_tick_advances_time_and_emits(self, driver, frames):
        driver.play()
        driver.scheduler.run_next()
        assert driver.simulation_time == pytest.approx(0.05)
        assert isinstance(frames[-1], Frame)
        assert frames[-1].t == pytest.approx(0.05)
        assert driver.scheduler.pending == 1

    def test_pause_cancels_pending_tick(self, driver):
        driver.play()
        driver.pause()
        assert driver.state is PlaybackState.STOPPED
        assert driver.scheduler.pending == 0

    def test_toggle(self, driver):
        driver.toggle()
        assert driver.is_playing
        driver.toggle()
        assert not driver.is_playing

    def test_reset_returns_to_start(self, driver, frames):
        driver.play()
        driver.scheduler.run_next()
        driver.scheduler.run_next()
        driver.reset()
        assert driver.simulation_time == 0.0
        assert driver.state is PlaybackState.STOPPED
        assert driver.scheduler.pending == 0
        assert frames[-1].t == 0.0

    def test_set_parameters_resets(self, driver, ledge_params):
        driver.play()
        driver.scheduler.run_next()
        driver.set_parameters(ledge_params.replace(velocity=30.0))
        assert driver.simulation_time == 0.0
        assert not driver.is_playing
        assert driver.params.velocity == 30.0

    def test_invalid_timestep(self, ledge_params):
        with pytest.raises(ValueError):
            AnimationDriver(FreeFall(), ledge_params, time_step=0.0)


class TestAutomaticStop:
    def test_stops_exactly_at_landing(self, driver, frames):
        driver.play()
        driver.scheduler.run_pending()
        t_f = FreeFall().duration(driver.params)
        assert driver.state is PlaybackState.STOPPED
        assert driver.simulation_time == pytest.approx(t_f)
        last = frames[-1].bodies[0]
        assert last.y == pytest.approx(0.0, abs=1e-9)
        assert last.x == pytest.approx(15.0 * t_f)
        assert driver.scheduler.pending == 0

    def test_play_after_landing_restarts(self, driver):
        driver.play()
        driver.scheduler.run_pending()
        driver.play()
        assert driver.simulation_time == 0.0
        assert driver.is_playing

    def test_collision_stops_when_blocks_leave_view(self):
        params = LiveParameters(v1=-20.0, v2=20.0)
        d = AnimationDriver(Collision1D(), params)
        d.play()
        d.scheduler.run_pending()
        assert not d.is_playing
        assert Collision1D().is_terminal(params, d.simulation_time)
        assert d.simulation_time < 2.0

    def test_open_ended_scene_stops_at_horizon(self, circular_params):
        d = AnimationDriver(Circular(), circular_params, time_horizon=3.0)
        d.play()
        d.scheduler.run_pending()
        assert d.simulation_time == pytest.approx(3.0)
        assert not d.is_playing

    def test_never_landing_projectile_is_bounded(self):
        params = LiveParameters(velocity=10.0, angle=45.0, gravity=0.0)
        d = AnimationDriver(Projectile(), params, time_horizon=2.0)
        d.play()
        ticks = d.scheduler.run_pending()
        assert ticks == 40
        assert d.simulation_time == pytest.approx(2.0)


class TestDispose:
    def test_dispose_cancels_pending(self, driver):
        driver.play()
        driver.dispose()
        assert driver.scheduler.pending == 0
        assert driver.disposed

    def test_stale_tick_is_ignored(self, driver, frames):
        driver.play()
        driver.dispose()
        n = len(frames)
        driver.tick()
        assert len(frames) == n
        assert driver.simulation_time == 0.0

    def test_play_after_dispose_is_ignored(self, driver):
        driver.dispose()
        driver.play()
        assert not driver.is_playing


class TestHeadless:
    def test_run_to_landing(self, driver, capsys):
        t = driver.run()
        assert t == pytest.approx(FreeFall().duration(driver.params))
        out = capsys.readouterr().out
        assert "[Driver] Starting playback" in out
        assert "[Driver] Playback stopped" in out

    def test_run_for_duration(self, circular_params):
        d = AnimationDriver(Circular(), circular_params)
        assert d.run(duration=1.0, log_interval=0) == pytest.approx(1.0)

    def test_run_needs_manual_scheduler(self, ledge_params):
        class Timer:
            def schedule(self, cb):
                return 1

            def cancel(self, handle):
                pass

        d = AnimationDriver(FreeFall(), ledge_params, scheduler=Timer())
        with pytest.raises(TypeError):
            d.run()

    def test_render_current_frame(self, driver):
        s = RecordingSurface(800, 400)
        assert driver.render(s) == len(s.commands) > 0
        assert driver.render(None) == 0
