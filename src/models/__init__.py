"""
Models package - Data models for the pixel rain controller
"""

from .enums import ColorModel, ChannelOrder, PatternType, LogLevel, LogCategory
from .color import RGB, HSV, PixelValue
from .config import (
    AppConfig,
    StripConfig,
    EngineConfig,
    ApiConfig,
    LoggingConfig,
    PatternConfig,
    ConfigError,
)

__all__ = [
    'ColorModel',
    'ChannelOrder',
    'PatternType',
    'LogLevel',
    'LogCategory',
    'RGB',
    'HSV',
    'PixelValue',
    'AppConfig',
    'StripConfig',
    'EngineConfig',
    'ApiConfig',
    'LoggingConfig',
    'PatternConfig',
    'ConfigError',
]
