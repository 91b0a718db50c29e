"""
Tests for the Rainbow pattern.
"""

import pytest

from conftest import TICK
from patterns.rainbow import RainbowOptions, RainbowPattern


@pytest.fixture
def rainbow(channel):
    pattern = RainbowPattern("rainbow", "Taste the Rainbow", 0, channel, 4, TICK)
    pattern.init()
    return pattern


def run_tick(pattern, channel):
    assert channel.start_frame()
    pattern.tick()
    return channel.last_frame


class TestRainbow:

    def test_hue_circle_across_strip(self, rainbow, channel):
        frame = run_tick(rainbow, channel)
        assert [p.h for p in frame] == pytest.approx([0.0, 0.25, 0.5, 0.75])
        assert all(p.s == 1.0 and p.v == 1.0 for p in frame)

    def test_rotates_each_tick(self, rainbow, channel):
        run_tick(rainbow, channel)
        frame = run_tick(rainbow, channel)
        assert frame[0].h == pytest.approx(TICK)

    def test_start_hue_wraps(self, rainbow, channel):
        for _ in range(31):
            run_tick(rainbow, channel)
        assert 0 <= rainbow.start_hue < 1
        assert rainbow.start_hue == pytest.approx(31 * TICK - 1)

    def test_init_resets(self, rainbow, channel):
        for _ in range(5):
            run_tick(rainbow, channel)
        rainbow.init()
        assert run_tick(rainbow, channel)[0].h == 0.0

    def test_cycle_length_option(self, channel):
        pattern = RainbowPattern("r", "R", 0, channel, 4, TICK, options=RainbowOptions(cycle_sec=2.0))
        assert pattern.hue_increment == pytest.approx(TICK / 2)
