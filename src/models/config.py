"""
Configuration Models

Pure data models that mirror config.yaml. ConfigManager fills them from the
raw YAML dict; nothing here loads files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from models.enums import ChannelOrder, LogLevel, PatternType


class ConfigError(ValueError):
    """Configuration value is missing or invalid"""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")


# ============================================================
#  LED strip
# ============================================================

@dataclass(frozen=True)
class StripConfig:
    """Output device and strip geometry."""
    device: str = "/dev/spidev0.0"
    pixel_count: int = 32
    channel_order: ChannelOrder = ChannelOrder.GRB
    virtual: bool = False                   # Render into memory, no device
    write_buffer_high_water: int = 1024     # Bytes buffered before backpressure


# ============================================================
#  Engine
# ============================================================

@dataclass(frozen=True)
class EngineConfig:
    tick_interval_ms: int = 33      # ~30 FPS
    default_pattern: str = "rainbow"
    initial_pattern: str = "rainbow"

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds"""
        return self.tick_interval_ms / 1000.0


# ============================================================
#  API / logging
# ============================================================

@dataclass(frozen=True)
class ApiConfig:
    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 3001


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    colors: bool = True


# ============================================================
#  Patterns
# ============================================================

@dataclass(frozen=True)
class PatternConfig:
    """One registry entry: which variant to build and with what options."""
    id: str
    type: PatternType
    name: str
    order: int = 10
    enabled: bool = True
    options: Dict[str, Any] = field(default_factory=dict)


def default_pattern_configs() -> List[PatternConfig]:
    """Built-in pattern table, used when config.yaml has no patterns section."""
    return [
        PatternConfig(id="rainbow", type=PatternType.RAINBOW, name="Taste the Rainbow", order=0),
        PatternConfig(id="bananas", type=PatternType.BANANAS, name="Bojangles's Bananas", order=1),
        PatternConfig(id="rain", type=PatternType.RAIN, name="Digital Rain", order=2),
        PatternConfig(
            id="orange",
            type=PatternType.RAIN,
            name="Orange Haze",
            order=3,
            options={
                "base_hue": 0.13,
                "hue_variance": 0.13,
                "base_as_background": True,
                "white_decay_sec": 0.1,
            },
        ),
        PatternConfig(id="blackbody", type=PatternType.BLACK_BODY_RAIN, name="Black Body Rain", order=10),
    ]


# ============================================================
#  Root
# ============================================================

@dataclass(frozen=True)
class AppConfig:
    strip: StripConfig = field(default_factory=StripConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    patterns: List[PatternConfig] = field(default_factory=default_pattern_configs)
