"""
Base Pattern Class

All patterns inherit from BasePattern and implement init() and tick().
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Type, TypeVar, TYPE_CHECKING

from models.config import ConfigError, PatternConfig
from models.enums import PatternType

if TYPE_CHECKING:
    from hardware.led.strip_interface import IPixelChannel

O = TypeVar("O")


@dataclass(frozen=True)
class PatternInfo:
    """What the presentation layer sees of a pattern"""
    id: str
    friendly_name: str


def ticks_for(duration_sec: float, tick_interval: float) -> int:
    """Whole ticks needed to cover a duration (at least one)."""
    # Tolerance keeps 1.0 / (1 / 30) from rounding up to 31
    return max(1, math.ceil(duration_sec / tick_interval - 1e-9))


def parse_options(options_cls: Type[O], data: Optional[Dict[str, Any]], pattern_id: str) -> O:
    """
    Build a frozen options dataclass from the raw YAML dict.

    Raises:
        ConfigError: unknown key or a value that does not convert
    """
    data = data or {}
    known = {f.name: f for f in fields(options_cls)}
    kwargs: Dict[str, Any] = {}

    for key, raw in data.items():
        config_key = f"patterns.{pattern_id}.options.{key}"
        option = known.get(key)
        if option is None:
            raise ConfigError(config_key, f"unknown option for {options_cls.__name__}")

        default = option.default
        try:
            if isinstance(default, bool):
                if not isinstance(raw, bool):
                    raise TypeError("expected true/false")
                kwargs[key] = raw
            elif isinstance(default, (int, float)):
                kwargs[key] = type(default)(raw)
            else:
                kwargs[key] = raw
        except (TypeError, ValueError) as ex:
            raise ConfigError(config_key, str(ex)) from ex

    try:
        return options_cls(**kwargs)
    except ValueError as ex:
        raise ConfigError(f"patterns.{pattern_id}.options", str(ex)) from ex


class BasePattern:
    """
    Base class for all strip patterns

    A pattern is built once when the registry is created and lives for the
    whole process. init() resets its private state every time it becomes
    active; tick() advances one frame and writes exactly pixel_count pixels
    to the channel.

    Subclasses MUST implement:
        init(self)
        tick(self)
    """
    TYPE: PatternType

    def __init__(
        self,
        pattern_id: str,
        friendly_name: str,
        sort_index: int,
        channel: "IPixelChannel",
        pixel_count: int,
        tick_interval: float,
        rng: Optional[random.Random] = None,
    ):
        if pixel_count <= 0:
            raise ValueError(f"pixel_count must be positive, got {pixel_count}")
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")

        self.id = pattern_id
        self.friendly_name = friendly_name
        self.sort_index = sort_index

        self.channel = channel
        self.pixel_count = pixel_count
        self.tick_interval = tick_interval
        self.rng = rng or random.Random()

    @classmethod
    def from_config(
        cls,
        config: PatternConfig,
        channel: "IPixelChannel",
        pixel_count: int,
        tick_interval: float,
        rng: Optional[random.Random] = None,
    ) -> "BasePattern":
        raise NotImplementedError

    # ------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------

    def init(self) -> None:
        raise NotImplementedError

    def tick(self) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------

    def chance_per_tick(self, mean_interval_sec: float) -> float:
        """Bernoulli probability giving one event per mean interval on average."""
        if mean_interval_sec <= 0:
            return 1.0
        return min(1.0, self.tick_interval / mean_interval_sec)

    def describe(self) -> PatternInfo:
        return PatternInfo(id=self.id, friendly_name=self.friendly_name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id!r}, sort_index={self.sort_index})"
