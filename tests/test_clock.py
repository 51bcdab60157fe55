import pytest

from rocketevo.exceptions import ConfigurationError
from rocketevo.simulation import SimulationClock


def test_tick_reports_exhaustion_on_last_frame():
    clock = SimulationClock(life_time=3, dt=0.5)
    assert clock.tick() is False
    assert clock.tick() is False
    assert clock.tick() is True
    assert clock.exhausted
    assert clock.frames_left == 0
    assert clock.elapsed == pytest.approx(1.5)


def test_reset_keeps_total():
    clock = SimulationClock(life_time=2, dt=0.1)
    clock.tick()
    clock.tick()
    clock.reset()
    assert clock.frame == 0
    assert clock.frames_left == 2
    assert not clock.exhausted
    assert clock.total_frames == 2


@pytest.mark.parametrize("life_time, dt", [(0, 0.1), (-1, 0.1), (10, 0.0), (10, -0.5)])
def test_rejects_invalid_settings(life_time, dt):
    with pytest.raises(ConfigurationError):
        SimulationClock(life_time=life_time, dt=dt)
