"""
Pattern registry - builds the ordered set of pattern instances from config
"""

import random
from typing import Dict, List, Optional, Type, TYPE_CHECKING

from models.config import ConfigError, PatternConfig
from models.enums import PatternType
from patterns.bananas import BananasPattern
from patterns.base import BasePattern
from patterns.black_body_rain import BlackBodyRainPattern
from patterns.rain import RainPattern
from patterns.rainbow import RainbowPattern
from utils.logger import get_category_logger, LogCategory

if TYPE_CHECKING:
    from hardware.led.strip_interface import IPixelChannel

log = get_category_logger(LogCategory.PATTERN)

PATTERN_CLASSES: Dict[PatternType, Type[BasePattern]] = {
    PatternType.RAINBOW: RainbowPattern,
    PatternType.BANANAS: BananasPattern,
    PatternType.RAIN: RainPattern,
    PatternType.BLACK_BODY_RAIN: BlackBodyRainPattern,
}


def build_patterns(
    configs: List[PatternConfig],
    channel: "IPixelChannel",
    pixel_count: int,
    tick_interval: float,
    rng: Optional[random.Random] = None,
) -> List[BasePattern]:
    """
    Construct one pattern per enabled config entry, in config order.

    All patterns share the channel and the random source.

    Raises:
        ConfigError: duplicate id or options that do not parse
    """
    rng = rng or random.Random()
    patterns: List[BasePattern] = []
    seen = set()

    for config in configs:
        if not config.enabled:
            log.debug(f"Skipping disabled pattern: {config.id}")
            continue
        if config.id in seen:
            raise ConfigError(f"patterns.{config.id}", "duplicate pattern id")
        seen.add(config.id)

        pattern_cls = PATTERN_CLASSES[config.type]
        patterns.append(pattern_cls.from_config(config, channel, pixel_count, tick_interval, rng))
        log.debug(f"Built pattern: {config.id}", type=config.type.value, order=config.order)

    log.info(f"Pattern registry built with {len(patterns)} patterns")
    return patterns
