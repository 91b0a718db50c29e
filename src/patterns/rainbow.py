"""
Rainbow Pattern

The full hue circle spread across the strip, rotating once per cycle.
"""

from dataclasses import dataclass

from models.color import HSV
from models.enums import PatternType
from patterns.base import BasePattern, parse_options
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.PATTERN)


@dataclass(frozen=True)
class RainbowOptions:
    cycle_sec: float = 1.0   # Seconds for one full rotation

    def __post_init__(self):
        if self.cycle_sec <= 0:
            raise ValueError("cycle_sec must be positive")


class RainbowPattern(BasePattern):
    """Rotating rainbow across all pixels."""
    TYPE = PatternType.RAINBOW

    def __init__(self, *args, options: RainbowOptions = RainbowOptions(), **kwargs):
        super().__init__(*args, **kwargs)
        self.options = options
        self.hue_increment = self.tick_interval / options.cycle_sec
        self.start_hue = 0.0

    @classmethod
    def from_config(cls, config, channel, pixel_count, tick_interval, rng=None):
        return cls(
            config.id, config.name, config.order, channel, pixel_count, tick_interval, rng,
            options=parse_options(RainbowOptions, config.options, config.id),
        )

    def init(self) -> None:
        self.start_hue = 0.0
        log.info("Taste the rainbow", pattern=self.id)

    def tick(self) -> None:
        for i in range(self.pixel_count):
            self.channel.write_pixel(HSV(self.start_hue + i / self.pixel_count, 1, 1))
        self.start_hue = (self.start_hue + self.hue_increment) % 1.0
