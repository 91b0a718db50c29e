"""
Tests for PatternEngine: registry, fallback, tick isolation and the
scheduler loop.
"""

import asyncio

import pytest

from conftest import TICK
from engine.pattern_engine import PatternEngine
from models.color import HSV
from patterns.base import BasePattern, PatternInfo
from patterns.registry import build_patterns

PIXELS = 8


class CountingPattern(BasePattern):
    """Writes a solid frame and counts lifecycle calls."""

    def __init__(self, pattern_id, sort_index, channel, fail=False):
        super().__init__(pattern_id, pattern_id.title(), sort_index, channel, PIXELS, TICK)
        self.fail = fail
        self.inits = 0
        self.ticks = 0

    def init(self):
        self.inits += 1
        self.ticks = 0

    def tick(self):
        self.ticks += 1
        for i in range(PIXELS):
            if self.fail and i == 3:
                raise ZeroDivisionError("boom")
            self.channel.write_pixel(HSV(0.5, 1, 1))


@pytest.fixture
def patterns(channel):
    return [
        CountingPattern("rainbow", 0, channel),
        CountingPattern("rain", 2, channel),
        CountingPattern("orange", 3, channel),
        CountingPattern("bananas", 1, channel),
        CountingPattern("also_two", 2, channel),
    ]


@pytest.fixture
def engine(channel, patterns):
    return PatternEngine(channel, patterns, tick_interval=TICK)


class TestRegistry:

    def test_nothing_active_before_load(self, engine):
        assert engine.get_active_pattern() is None
        assert engine.tick() is False

    def test_load_activates_and_inits(self, engine, patterns):
        assert engine.load("rain") == "rain"
        assert engine.get_active_pattern() == "rain"
        assert patterns[1].inits == 1

    def test_unknown_id_falls_back_to_default(self, engine, patterns):
        assert engine.load("nonexistent-id") == "rainbow"
        assert engine.get_active_pattern() == "rainbow"
        assert patterns[0].inits == 1

    def test_reload_resets_state(self, engine, patterns):
        engine.load("rain")
        engine.tick()
        engine.tick()
        engine.load("rain")
        assert patterns[1].inits == 2
        assert patterns[1].ticks == 0

    def test_list_sorted_by_order_stable(self, engine):
        assert [p.id for p in engine.list_patterns()] == [
            "rainbow", "bananas", "rain", "also_two", "orange",
        ]
        assert engine.list_patterns()[0] == PatternInfo("rainbow", "Rainbow")

    def test_duplicate_ids_rejected(self, channel):
        with pytest.raises(ValueError):
            PatternEngine(channel, [CountingPattern("rainbow", 0, channel)] * 2, TICK)

    def test_missing_default_rejected(self, channel):
        with pytest.raises(ValueError):
            PatternEngine(channel, [CountingPattern("rain", 0, channel)], TICK)


class TestTick:

    def test_tick_renders_full_frame(self, engine, channel):
        engine.load("rain")
        assert engine.tick() is True
        assert len(channel.last_frame) == PIXELS
        assert engine.frames_rendered == 1

    def test_refused_frame_skips_pattern(self, engine, channel, patterns):
        engine.load("rain")
        channel.accept = False

        assert engine.tick() is False
        assert patterns[1].ticks == 0
        assert engine.frames_skipped == 1

    def test_failing_pattern_drops_one_frame(self, channel):
        broken = CountingPattern("rainbow", 0, channel, fail=True)
        engine = PatternEngine(channel, [broken], TICK)
        engine.load("rainbow")

        assert engine.tick() is False
        assert engine.tick() is False
        assert engine.tick_errors == 2
        assert channel.aborted == 2
        assert len(channel.frames[0]) == 3

    def test_metrics(self, engine):
        engine.load("bananas")
        engine.tick()
        metrics = engine.get_metrics()
        assert metrics["active_pattern"] == "bananas"
        assert metrics["frames_rendered"] == 1
        assert metrics["channel"] == {"frames": 1}


class TestScheduler:

    async def test_start_and_stop(self, channel, patterns):
        engine = PatternEngine(channel, patterns, tick_interval=0.005)
        engine.load("rainbow")

        await engine.start()
        assert engine.is_running
        await asyncio.sleep(0.05)
        await engine.stop()

        assert not engine.is_running
        assert engine.frames_rendered >= 3
        assert engine.get_active_pattern() == "rainbow"

    async def test_loop_survives_pattern_errors(self, channel):
        broken = CountingPattern("rainbow", 0, channel, fail=True)
        engine = PatternEngine(channel, [broken], tick_interval=0.005)
        engine.load("rainbow")

        await engine.start()
        await asyncio.sleep(0.05)
        assert engine.render_task is not None and not engine.render_task.done()
        await engine.stop()

        assert engine.tick_errors >= 3

    async def test_switch_takes_effect_on_next_tick(self, channel, patterns):
        engine = PatternEngine(channel, patterns, tick_interval=0.005)
        engine.load("rainbow")
        await engine.start()
        await asyncio.sleep(0.02)

        engine.load("orange")
        await asyncio.sleep(0.02)
        await engine.stop()

        assert patterns[2].ticks > 0


class TestWithRealPatterns:

    def test_builtin_registry(self, channel, pattern_configs):
        patterns = build_patterns(pattern_configs, channel, pixel_count=32, tick_interval=TICK)
        engine = PatternEngine(channel, patterns, TICK)

        assert [(p.id, p.friendly_name) for p in engine.list_patterns()] == [
            ("rainbow", "Taste the Rainbow"),
            ("bananas", "Bojangles's Bananas"),
            ("rain", "Digital Rain"),
            ("orange", "Orange Haze"),
            ("blackbody", "Black Body Rain"),
        ]

        for info in engine.list_patterns():
            engine.load(info.id)
            for _ in range(40):
                assert engine.tick() is True
                assert len(channel.last_frame) == 32
