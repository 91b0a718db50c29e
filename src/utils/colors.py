"""
Color conversion utilities

Pure functions for color space conversions. Nothing here touches the device;
gamma encoding lives next to the output channel (hardware.led.gamma).
"""

import math
from typing import Tuple

MIN_TEMPERATURE_K = 1000.0
MAX_TEMPERATURE_K = 40000.0


def hsv_to_rgb(h: float, s: float, v: float) -> Tuple[float, float, float]:
    """
    Convert HSV to linear RGB (0-255)

    Standard sector conversion: hue is split into 6 sectors by
    floor(h * 6) mod 6 and each sector picks its (r, g, b) assignment from
    v, p, q, t.

    Args:
        h: Hue, wraps modulo 1.0
        s: Saturation, clamped to 0-1
        v: Value, clamped to 0-1

    Returns:
        (r, g, b) tuple with float values 0-255

    Example:
        hsv_to_rgb(0.0, 1, 1)    # (255, 0, 0) red
        hsv_to_rgb(1/3, 1, 1)    # (0, 255, 0) green
        hsv_to_rgb(0.5, 0, 1)    # (255, 255, 255) white
    """
    h = h % 1.0
    s = max(0.0, min(1.0, s))
    v = max(0.0, min(1.0, v))

    scaled = h * 6.0
    sector = int(math.floor(scaled)) % 6
    f = scaled - math.floor(scaled)
    p = v * (1.0 - s)
    q = v * (1.0 - f * s)
    t = v * (1.0 - (1.0 - f) * s)

    if sector == 0:
        r, g, b = v, t, p
    elif sector == 1:
        r, g, b = q, v, p
    elif sector == 2:
        r, g, b = p, v, t
    elif sector == 3:
        r, g, b = p, q, v
    elif sector == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return (r * 255.0, g * 255.0, b * 255.0)


def color_temperature_to_rgb(kelvin: float) -> Tuple[int, int, int]:
    """
    Convert a black-body color temperature to RGB (0-255)

    Piecewise best-fit curves over the CIE 1964 black-body data
    (Tanner Helland's approximation). Input is clamped to 1000-40000 K.

    Args:
        kelvin: Color temperature in degrees K

    Returns:
        (r, g, b) integer tuple, each rounded and clamped to 0-255

    Example:
        color_temperature_to_rgb(1000)    # (255, 68, 0) deep orange
        color_temperature_to_rgb(6600)    # (255, 255, 255) near white
        color_temperature_to_rgb(20000)   # bluish white, b == 255
    """
    kelvin = max(MIN_TEMPERATURE_K, min(MAX_TEMPERATURE_K, kelvin))
    t = kelvin / 100.0

    if t <= 66:
        red = 255.0
    else:
        red = 329.698727446 * math.pow(t - 60, -0.1332047592)

    if t <= 66:
        green = 99.4708025861 * math.log(t) - 161.1195681661
    else:
        green = 288.1221695283 * math.pow(t - 60, -0.0755148492)

    if t >= 66:
        blue = 255.0
    elif t <= 19:
        blue = 0.0
    else:
        blue = 138.5177312231 * math.log(t - 10) - 305.0447927307

    return (_round_channel(red), _round_channel(green), _round_channel(blue))


def _round_channel(value: float) -> int:
    return int(math.floor(max(0.0, min(255.0, value)) + 0.5))


def hue_to_name(hue: float) -> str:
    """
    Convert hue (0-1) to approximate color name (for logging)

    Example:
        hue_to_name(0.0)    # "red"
        hue_to_name(0.1)    # "orange"
        hue_to_name(0.6)    # "blue"
    """
    degrees = (hue % 1.0) * 360
    if degrees < 15 or degrees >= 345:
        return "red"
    elif degrees < 45:
        return "orange"
    elif degrees < 75:
        return "yellow"
    elif degrees < 105:
        return "lime"
    elif degrees < 135:
        return "green"
    elif degrees < 165:
        return "cyan"
    elif degrees < 195:
        return "sky blue"
    elif degrees < 225:
        return "blue"
    elif degrees < 255:
        return "indigo"
    elif degrees < 285:
        return "violet"
    elif degrees < 315:
        return "magenta"
    else:
        return "pink"
