"""
Utility functions for the pixel rain controller
"""

from .colors import (
    hsv_to_rgb,
    color_temperature_to_rgb,
    hue_to_name,
)

__all__ = [
    'hsv_to_rgb',
    'color_temperature_to_rgb',
    'hue_to_name',
]
