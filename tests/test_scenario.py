import csv

import pytest

from physiviz.api.scenario import PLAYBACK_PRESETS, Scenario
from physiviz.kinematics.motion import FreeFall
from physiviz.problem import MotionType


@pytest.fixture
def scenario(tmp_path, ledge_problem):
    return Scenario.from_problem(ledge_problem, name="ledge", output_dir=tmp_path)


def test_from_problem(scenario):
    assert scenario.motion_type is MotionType.FREE_FALL
    assert scenario.params.velocity == 15.0
    assert scenario.params.name == "Ball"
    assert scenario.params.mass == 0.5


def test_set_parameters_is_chainable(scenario):
    assert scenario.set_parameters(height=45.0, gravity=9.8) is scenario
    assert scenario.params.height == 45.0


def test_unknown_preset(scenario):
    with pytest.raises(ValueError, match="Unknown preset"):
        scenario.configure_playback("turbo")


def test_preset_overrides(scenario):
    scenario.configure_playback("smooth", time_horizon=5.0)
    assert scenario._playback == {**PLAYBACK_PRESETS["smooth"], "time_horizon": 5.0}


def test_run_stops_at_landing(scenario, capsys):
    scenario.run()
    assert scenario.final_time == pytest.approx(FreeFall().duration(scenario.params))
    out = capsys.readouterr().out
    assert "Running Scenario: ledge" in out
    assert "[Driver]" in out


def test_run_for_duration(scenario):
    scenario.configure_playback("fast").run(duration=1.0)
    assert scenario.final_time == pytest.approx(1.0)


def test_logging_writes_every_frame(scenario, tmp_path):
    out = scenario.enable_logging(auto_timestamp=False)
    assert out == tmp_path / "ledge"
    scenario.run()

    with open(out / "logs" / "frames.csv", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][:3] == ["t", "Ball.x", "Ball.y"]
    # Initial frame plus one per tick (46 ticks to land with dt = 0.05)
    assert len(rows) - 1 == 47
    assert float(rows[-1][2]) == pytest.approx(0.0, abs=1e-9)


def test_degenerate_parameters_warn(scenario):
    scenario.set_parameters(gravity=0.0).configure_playback(time_horizon=1.0)
    with pytest.warns(RuntimeWarning, match="never lands"):
        scenario.run()
    assert scenario.final_time == pytest.approx(1.0)


@pytest.mark.parametrize("view", ["frame", "trajectory"])
def test_save_frame(scenario, tmp_path, view):
    path = scenario.save_frame(tmp_path / "img" / f"{view}.png", t=1.0, view=view)
    assert path.exists()


def test_save_frame_unknown_view(scenario, tmp_path):
    with pytest.raises(ValueError, match="Unknown view"):
        scenario.save_frame(tmp_path / "x.png", view="side")


def test_save_graphs_without_logging(scenario, tmp_path):
    written = scenario.save_graphs(tmp_path / "graphs")
    assert [p.name for p in written] == ["time_series.png", "trajectory.png"]
    assert all(p.exists() for p in written)
