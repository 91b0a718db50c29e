"""
Enums for the pixel rain controller
"""

from enum import Enum, auto


class ColorModel(Enum):
    """Pixel value representations accepted by the output channel"""
    RGB = auto()   # Linear intensities 0-255
    HSV = auto()   # Hue (wraps at 1.0), saturation and value 0-1


class ChannelOrder(Enum):
    """Byte order of a pixel group on the wire"""
    RGB = "RGB"
    RBG = "RBG"
    GRB = "GRB"   # Adafruit LPD8806 strips
    GBR = "GBR"
    BRG = "BRG"
    BGR = "BGR"


class PatternType(Enum):
    """Pattern variants that can be built from config"""
    RAINBOW = "rainbow"
    BANANAS = "bananas"
    RAIN = "rain"
    BLACK_BODY_RAIN = "black_body_rain"


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # Device open/close
    OUTPUT = auto()      # Frames, backpressure
    PATTERN = auto()     # Pattern init/tick
    ENGINE = auto()      # Scheduler, pattern switching
    API = auto()
    SYSTEM = auto()      # Startup, shutdown, errors
    SHUTDOWN = auto()

    GENERAL = auto()    # Default general category
