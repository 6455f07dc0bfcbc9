import csv

import pytest

from physiviz.kinematics.motion import BodyState, Collision1D
from physiviz.logger import TrajectoryLogger


def _ball(x=1.0, y=2.0):
    return BodyState("ball", x, y, 0.5, -0.25)


def _read(path):
    with open(path, newline="") as f:
        return list(csv.reader(f))


def test_logger_basic_io(tmp_path):
    """Logger creates the file and writes header + data."""
    log_path = tmp_path / "frames.csv"
    with TrajectoryLogger(log_path, buffer_size=1) as logger:
        logger.log(0.0, [_ball()])

    rows = _read(log_path)
    assert rows[0] == ["t", "ball.x", "ball.y", "ball.vx", "ball.vy"]
    assert len(rows) == 2
    assert float(rows[1][0]) == 0.0
    assert float(rows[1][2]) == pytest.approx(2.0)


def test_logger_buffering(tmp_path):
    """Rows are only written when the buffer fills or on flush."""
    log_path = tmp_path / "buffer.csv"
    logger = TrajectoryLogger(log_path, buffer_size=5)

    for i in range(4):
        logger.log(float(i), [_ball()])
    assert len(_read(log_path)) == 1  # header only

    logger.log(4.0, [_ball()])
    assert len(_read(log_path)) == 6
    assert logger.rows_written == 5

    logger.log(5.0, [_ball()])
    logger.close()
    assert len(_read(log_path)) == 7


def test_multiple_bodies(tmp_path, collision_params):
    log_path = tmp_path / "collision.csv"
    with TrajectoryLogger(log_path) as logger:
        logger.log(0.0, Collision1D().compute_state(collision_params, 0.0))
        assert logger.header[1:5] == ["m1.x", "m1.y", "m1.vx", "m1.vy"]
        assert logger.header[5] == "m2.x"


def test_body_count_mismatch(tmp_path):
    logger = TrajectoryLogger(tmp_path / "bad.csv")
    logger.log(0.0, [_ball()])
    with pytest.raises(ValueError, match="bodies"):
        logger.log(0.1, [_ball(), _ball()])
    logger.close()


def test_creates_parent_directories(tmp_path):
    log_path = tmp_path / "a" / "b" / "frames.csv"
    with TrajectoryLogger(log_path) as logger:
        logger.log(0.0, [_ball()])
    assert log_path.exists()


def test_invalid_buffer_size(tmp_path):
    with pytest.raises(ValueError):
        TrajectoryLogger(tmp_path / "x.csv", buffer_size=0)
