"""
Tests for the in-memory output channel.
"""

from hardware.led.gamma import RESET_BYTE, encode_pixel
from hardware.led.virtual_strip import VirtualOutputChannel
from models.color import HSV, RGB
from models.config import StripConfig
from models.enums import ChannelOrder


async def test_refuses_frames_until_open():
    channel = VirtualOutputChannel(StripConfig(pixel_count=2))
    assert channel.start_frame() is False

    await channel.open()
    assert channel.start_frame() is True


async def test_frame_bytes_match_wire_encoding():
    channel = VirtualOutputChannel(StripConfig(pixel_count=2, channel_order=ChannelOrder.GRB))
    await channel.open()
    channel.start_frame()
    channel.write_pixel(RGB(255, 0, 0))
    channel.write_pixel(HSV(2 / 3, 1, 1))

    assert channel.frame_bytes() == (
        RESET_BYTE
        + encode_pixel(RGB(255, 0, 0), ChannelOrder.GRB)
        + encode_pixel(HSV(2 / 3, 1, 1), ChannelOrder.GRB)
    )
    assert channel.frame_bytes()[1:4] == bytes((0x80, 0xFF, 0x80))


async def test_aborted_frame_ignores_writes():
    channel = VirtualOutputChannel(StripConfig(pixel_count=2))
    await channel.open()
    channel.start_frame()
    channel.write_pixel(RGB(1, 2, 3))
    channel.abort_frame()
    channel.write_pixel(RGB(4, 5, 6))

    assert channel.frame == [RGB(1, 2, 3)]
    assert channel.frame_bytes() == RESET_BYTE + encode_pixel(RGB(1, 2, 3))

    channel.start_frame()
    assert channel.last_frame == [RGB(1, 2, 3)]
    assert channel.get_metrics()["frames_started"] == 2
