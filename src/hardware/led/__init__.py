from .strip_interface import IPixelChannel
from .virtual_strip import VirtualOutputChannel
from .output_channel import OutputChannel, StripWriteProtocol
from .channel_factory import create_output_channel

__all__ = [
    "IPixelChannel",
    "VirtualOutputChannel",
    "OutputChannel",
    "StripWriteProtocol",
    "create_output_channel",
]
