# hardware/led/channel_factory.py

from models.config import StripConfig
from hardware.led.strip_interface import IPixelChannel
from hardware.led.output_channel import OutputChannel
from hardware.led.virtual_strip import VirtualOutputChannel


def create_output_channel(config: StripConfig) -> IPixelChannel:
    """
    Pick the channel implementation for the configured strip.

    The real channel is returned unopened; a device that cannot be opened
    surfaces from open(), not from here.
    """
    if config.virtual:
        return VirtualOutputChannel(config)
    return OutputChannel(config)
