"""
Hardware Layer

Low-level output only:

- LED strip device channel (OutputChannel + IPixelChannel)
- gamma table and wire encoding
"""
from .led.strip_interface import IPixelChannel
from .led.output_channel import OutputChannel
from .led.virtual_strip import VirtualOutputChannel
from .led.channel_factory import create_output_channel

__all__ = [
    "IPixelChannel",
    "OutputChannel",
    "VirtualOutputChannel",
    "create_output_channel",
]
