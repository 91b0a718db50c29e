"""
Rain Pattern

Colored drops land on random pixels, flash white, spread sideways and fade.
One class covers the whole family ("Digital Rain", "Orange Haze", ...);
the variants only differ in RainOptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from models.color import HSV
from models.enums import PatternType
from patterns.base import BasePattern, parse_options, ticks_for
from patterns.drops import DropHandle, DropPool, RainDrop, covered_pixels
from utils.colors import hue_to_name
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.PATTERN)


@dataclass(frozen=True)
class RainOptions:
    """
    base_hue: 0-1, drops are randomized around it. Hues are not wrapped
        when averaged, so stay clear of the 0/1 boundary.
    hue_variance: drops get base_hue +/- this amount
    base_as_background: paint uncovered pixels with base_hue instead of off
    background_value: brightness of that background
    white_decay_sec: seconds for a drop's white flash to fade
    decay_sec: seconds for a drop to fade out completely
    spread_rate: pixels/second a drop spreads sideways until it is gone
    drop_interval_sec: mean seconds between new drops
    """
    base_hue: float = 0.65
    hue_variance: float = 0.3
    base_as_background: bool = False
    background_value: float = 0.3
    white_decay_sec: float = 0.3
    decay_sec: float = 1.0
    spread_rate: float = 6.0
    drop_interval_sec: float = 0.75

    def __post_init__(self):
        for name in ("white_decay_sec", "decay_sec", "drop_interval_sec"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")


class RainCanvas:
    """Per-tick accumulation buffers, one slot per pixel."""

    def __init__(self, pixel_count: int):
        self.hue_sums: List[float] = [0.0] * pixel_count
        self.hue_counts: List[int] = [0] * pixel_count
        self.whites: List[float] = [0.0] * pixel_count
        self.values: List[float] = [0.0] * pixel_count

    def reset(self, base_hue: Optional[float] = None, base_value: float = 0.0) -> None:
        count = len(self.values)
        if base_hue is None:
            self.hue_sums = [0.0] * count
            self.hue_counts = [0] * count
        else:
            self.hue_sums = [base_hue] * count
            self.hue_counts = [1] * count
        self.whites = [0.0] * count
        self.values = [base_value] * count

    def add(self, i: int, hue: float, whiteness: float, value: float) -> None:
        self.hue_sums[i] += hue
        self.hue_counts[i] += 1
        self.whites[i] += whiteness
        self.values[i] += value

    def pixel(self, i: int) -> HSV:
        # Arithmetic mean: drops near hue 0 and hue 1 average toward 0.5
        hue = self.hue_sums[i] / self.hue_counts[i] if self.hue_counts[i] else 0.0
        return HSV(hue, max(0.0, 1.0 - self.whites[i]), min(1.0, self.values[i]))


class RainPattern(BasePattern):
    """
    Drop simulation with hue compositing.

    Each tick: clear canvas -> maybe spawn a drop -> every drop paints and
    ages -> spent drops are removed -> canvas is written out.
    """
    TYPE = PatternType.RAIN

    def __init__(self, *args, options: RainOptions = RainOptions(), **kwargs):
        super().__init__(*args, **kwargs)
        self.options = options

        # Per-tick rates
        self.white_decay = self.tick_interval / options.white_decay_sec
        self.value_decay = self.tick_interval / options.decay_sec
        self.spread = options.spread_rate * self.tick_interval
        self.drop_lifetime = ticks_for(options.decay_sec, self.tick_interval)
        self.spawn_chance = self.chance_per_tick(options.drop_interval_sec)

        self.drops: DropPool[RainDrop] = DropPool()
        self.canvas = RainCanvas(self.pixel_count)

    @classmethod
    def from_config(cls, config, channel, pixel_count, tick_interval, rng=None):
        return cls(
            config.id, config.name, config.order, channel, pixel_count, tick_interval, rng,
            options=parse_options(RainOptions, config.options, config.id),
        )

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def init(self) -> None:
        self.drops.clear()
        self.canvas = RainCanvas(self.pixel_count)
        log.info(
            "Can you feel the rain?",
            pattern=self.id,
            base=f"{self.options.base_hue:.2f} ({hue_to_name(self.options.base_hue)})",
            drop_lifetime_ticks=self.drop_lifetime,
        )
        self.spawn_drop()

    def tick(self) -> None:
        if self.options.base_as_background:
            self.canvas.reset(self.options.base_hue, self.options.background_value)
        else:
            self.canvas.reset()

        if self.rng.random() < self.spawn_chance:
            self.spawn_drop()

        for handle, drop in self.drops.items():
            self._paint(drop)
            drop.advance()
            if drop.spent:
                self.drops.remove(handle)

        for i in range(self.pixel_count):
            self.channel.write_pixel(self.canvas.pixel(i))

    # ------------------------------------------------------------
    # Drops
    # ------------------------------------------------------------

    def spawn_drop(self, pixel: Optional[int] = None, hue: Optional[float] = None) -> DropHandle:
        """Add a drop at a pixel/hue, random where not given."""
        if pixel is None:
            pixel = self.rng.randrange(self.pixel_count)
        if hue is None:
            variance = self.options.hue_variance
            hue = self.options.base_hue + (self.rng.random() * variance * 2 - variance)

        drop = RainDrop(
            pixel=pixel,
            hue=hue,
            white_decay=self.white_decay,
            value_decay=self.value_decay,
            spread=self.spread,
            lifetime=self.drop_lifetime,
        )
        return self.drops.insert(drop)

    def _paint(self, drop: RainDrop) -> None:
        whiteness = drop.whiteness
        value = drop.value
        for i in covered_pixels(drop.pixel, drop.width, self.pixel_count):
            self.canvas.add(i, drop.hue, whiteness, value)
