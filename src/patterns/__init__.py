"""
Strip patterns
"""

from .base import BasePattern, PatternInfo
from .bananas import BananasPattern, BananasOptions
from .black_body_rain import BlackBodyRainPattern, BlackBodyRainOptions
from .rain import RainPattern, RainOptions
from .rainbow import RainbowPattern, RainbowOptions
from .registry import PATTERN_CLASSES, build_patterns

__all__ = [
    'BasePattern', 'PatternInfo',
    'BananasPattern', 'BananasOptions',
    'BlackBodyRainPattern', 'BlackBodyRainOptions',
    'RainPattern', 'RainOptions',
    'RainbowPattern', 'RainbowOptions',
    'PATTERN_CLASSES', 'build_patterns',
]
