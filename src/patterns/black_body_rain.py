"""
Black Body Rain Pattern

Like Rain, but every drop is a black-body radiator that lands blue-white hot
and cools to a deep orange while spreading. Overlapping drops add their heat.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from models.color import RGB
from models.enums import PatternType
from patterns.base import BasePattern, parse_options, ticks_for
from patterns.drops import DropHandle, DropPool, HeatDrop, covered_pixels
from utils.colors import color_temperature_to_rgb
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.PATTERN)


@dataclass(frozen=True)
class BlackBodyRainOptions:
    start_temperature: float = 20000.0  # K at impact
    end_temperature: float = 1000.0     # K when the drop is gone
    decay_sec: float = 1.5
    spread_rate: float = 4.0            # pixels/second
    drop_interval_sec: float = 0.75

    def __post_init__(self):
        if self.decay_sec <= 0 or self.drop_interval_sec <= 0:
            raise ValueError("decay_sec and drop_interval_sec must be positive")
        if self.end_temperature > self.start_temperature:
            raise ValueError("end_temperature must not exceed start_temperature")


class BlackBodyRainPattern(BasePattern):
    TYPE = PatternType.BLACK_BODY_RAIN

    def __init__(self, *args, options: BlackBodyRainOptions = BlackBodyRainOptions(), **kwargs):
        super().__init__(*args, **kwargs)
        self.options = options

        self.spread = options.spread_rate * self.tick_interval
        self.drop_lifetime = ticks_for(options.decay_sec, self.tick_interval)
        self.spawn_chance = self.chance_per_tick(options.drop_interval_sec)
        # Hottest a pixel may get when drops overlap
        self.max_heat = options.start_temperature * 2

        self.drops: DropPool[HeatDrop] = DropPool()
        self.heat: List[float] = [0.0] * self.pixel_count

    @property
    def temperature_decay(self) -> float:
        """Kelvin lost per tick."""
        span = self.options.start_temperature - self.options.end_temperature
        return span * self.tick_interval / self.options.decay_sec

    @classmethod
    def from_config(cls, config, channel, pixel_count, tick_interval, rng=None):
        return cls(
            config.id, config.name, config.order, channel, pixel_count, tick_interval, rng,
            options=parse_options(BlackBodyRainOptions, config.options, config.id),
        )

    def init(self) -> None:
        self.drops.clear()
        self.heat = [0.0] * self.pixel_count
        log.info(
            "Black body rain",
            pattern=self.id,
            range=f"{self.options.start_temperature:.0f}K -> {self.options.end_temperature:.0f}K",
            drop_lifetime_ticks=self.drop_lifetime,
        )
        self.spawn_drop()

    def tick(self) -> None:
        self.heat = [0.0] * self.pixel_count

        if self.rng.random() < self.spawn_chance:
            self.spawn_drop()

        for handle, drop in self.drops.items():
            temperature = drop.temperature
            for i in covered_pixels(drop.pixel, drop.width, self.pixel_count):
                self.heat[i] = min(self.max_heat, self.heat[i] + temperature)
            drop.advance()
            if drop.spent:
                self.drops.remove(handle)

        for temperature in self.heat:
            if temperature <= 0:
                self.channel.write_pixel(RGB.black())
            else:
                self.channel.write_pixel(RGB(*color_temperature_to_rgb(temperature)))

    def spawn_drop(self, pixel: Optional[int] = None) -> DropHandle:
        if pixel is None:
            pixel = self.rng.randrange(self.pixel_count)
        return self.drops.insert(HeatDrop(
            pixel=pixel,
            start_temperature=self.options.start_temperature,
            end_temperature=self.options.end_temperature,
            temperature_decay=self.temperature_decay,
            spread=self.spread,
            lifetime=self.drop_lifetime,
        ))
