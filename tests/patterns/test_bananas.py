"""
Tests for the Bananas pattern.
"""

import pytest

from conftest import ScriptedRandom, TICK
from patterns.bananas import BananasOptions, BananasPattern

PIXELS = 14


@pytest.fixture
def bananas(channel):
    pattern = BananasPattern("bananas", "Bojangles's Bananas", 1, channel, PIXELS, TICK, ScriptedRandom(default=0.5))
    pattern.init()
    return pattern


def lit(frame):
    return [i for i, p in enumerate(frame) if p.v > 0]


def run_tick(pattern, channel):
    assert channel.start_frame()
    pattern.tick()
    return channel.last_frame


class TestBananas:

    def test_blink_interval_in_ticks(self, bananas):
        # 0.12 s at 33 ms
        assert bananas.blink_ticks == 4

    def test_first_frame_layout(self, bananas, channel):
        frame = run_tick(bananas, channel)
        # Positions 0..banana_width of every 7-pixel period are lit
        assert lit(frame) == [0, 1, 2, 3, 7, 8, 9, 10]

    def test_banana_color(self, bananas, channel):
        frame = run_tick(bananas, channel)
        assert frame[0].h == pytest.approx(0.16)
        assert frame[0].s == 1.0

    def test_blinks_off_then_shifts(self, bananas, channel):
        for _ in range(4):
            frame = run_tick(bananas, channel)
        assert lit(frame) == [0, 1, 2, 3, 7, 8, 9, 10]

        for _ in range(4):
            frame = run_tick(bananas, channel)
            assert lit(frame) == []

        frame = run_tick(bananas, channel)
        assert bananas.offset == 2
        assert lit(frame) == [0, 1, 5, 6, 7, 8, 12, 13]

    def test_init_restarts(self, bananas, channel):
        for _ in range(6):
            run_tick(bananas, channel)
        bananas.init()

        assert bananas.offset == 0
        assert bananas.bananas_on is True
        assert lit(run_tick(bananas, channel)) == [0, 1, 2, 3, 7, 8, 9, 10]

    def test_ripeness_varies(self, channel):
        rng = ScriptedRandom(values=[0.0, 1.0])
        pattern = BananasPattern("bananas", "Bananas", 1, channel, PIXELS, TICK, rng)
        pattern.init()

        frame = run_tick(pattern, channel)

        assert frame[0].h == pytest.approx(0.13)
        assert frame[7].h == pytest.approx(0.19)

    def test_invalid_gap_rejected(self):
        with pytest.raises(ValueError):
            BananasOptions(gap_width=0)
