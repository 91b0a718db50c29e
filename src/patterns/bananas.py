"""
Bananas Pattern

Blinking bunches of yellow bananas marching down the strip. Every banana
gets its own ripeness (hue between a ripe orange and an unripe green).
"""

from dataclasses import dataclass

from models.color import HSV
from models.enums import PatternType
from patterns.base import BasePattern, parse_options, ticks_for
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.PATTERN)


@dataclass(frozen=True)
class BananasOptions:
    banana_width: int = 3
    gap_width: int = 4
    ripe_hue: float = 0.16          # Middle of the ripeness range
    ripeness_variance: float = 0.03 # .13 very ripe orange, .19 almost green
    blink_interval_sec: float = 0.12

    def __post_init__(self):
        if self.banana_width < 0 or self.gap_width < 1:
            raise ValueError("banana_width must be >= 0 and gap_width >= 1")
        if self.blink_interval_sec <= 0:
            raise ValueError("blink_interval_sec must be positive")


class BananasPattern(BasePattern):
    """
    Bananas blink on and off; each blink shifts them one pixel along.

    Pixel i is part of a banana when (offset + i) mod (banana + gap) is at
    most banana_width.
    """
    TYPE = PatternType.BANANAS

    def __init__(self, *args, options: BananasOptions = BananasOptions(), **kwargs):
        super().__init__(*args, **kwargs)
        self.options = options
        self.period = options.banana_width + options.gap_width
        self.blink_ticks = ticks_for(options.blink_interval_sec, self.tick_interval)

        self.offset = 0
        self.bananas_on = True
        self.blink_tick_count = 0
        self.banana_hue = options.ripe_hue

    @classmethod
    def from_config(cls, config, channel, pixel_count, tick_interval, rng=None):
        return cls(
            config.id, config.name, config.order, channel, pixel_count, tick_interval, rng,
            options=parse_options(BananasOptions, config.options, config.id),
        )

    def init(self) -> None:
        self.offset = 0
        self.bananas_on = True
        self.blink_tick_count = 0
        self.banana_hue = self.options.ripe_hue
        log.info("Bananas!", pattern=self.id, blink_ticks=self.blink_ticks)

    def _random_ripeness(self) -> float:
        variance = self.options.ripeness_variance
        return self.options.ripe_hue + self.rng.random() * variance * 2 - variance

    def tick(self) -> None:
        for i in range(self.pixel_count):
            if not self.bananas_on:
                self.channel.write_pixel(HSV.off())
                continue

            position = (self.offset + i) % self.period
            if position == 0:
                # Starting a new banana
                self.banana_hue = self._random_ripeness()

            if position <= self.options.banana_width:
                self.channel.write_pixel(HSV(self.banana_hue, 1, 1))
            else:
                self.channel.write_pixel(HSV.off())

        self.blink_tick_count += 1
        if self.blink_tick_count >= self.blink_ticks:
            self.blink_tick_count = 0
            self.offset += 1
            self.bananas_on = not self.bananas_on
