"""
Gamma table and pixel encoding for LPD8806-style strips
=======================================================

Every data byte on the wire has its top bit set and carries a 7-bit
gamma-corrected intensity. A lone 0x00 byte is the frame reset / latch.

    GAMMA[i] = 0x80 | round(127 * (i / 255) ** 2.5)
"""

from __future__ import annotations

import math
from typing import Dict, Tuple

from models.color import PixelValue
from models.enums import ChannelOrder

RESET_BYTE = b"\x00"
BYTES_PER_PIXEL = 3
GAMMA_EXPONENT = 2.5


def _build_gamma_table() -> Tuple[int, ...]:
    return tuple(
        0x80 | int(math.floor(math.pow(i / 255.0, GAMMA_EXPONENT) * 127 + 0.5))
        for i in range(256)
    )


GAMMA: Tuple[int, ...] = _build_gamma_table()

# Channel order -> indices into (r, g, b)
CHANNEL_INDICES: Dict[ChannelOrder, Tuple[int, int, int]] = {
    ChannelOrder.RGB: (0, 1, 2),
    ChannelOrder.RBG: (0, 2, 1),
    ChannelOrder.GRB: (1, 0, 2),
    ChannelOrder.GBR: (1, 2, 0),
    ChannelOrder.BRG: (2, 0, 1),
    ChannelOrder.BGR: (2, 1, 0),
}


def gamma_byte(intensity: int) -> int:
    """Device byte for a linear intensity; out-of-range input is clamped."""
    return GAMMA[max(0, min(255, int(intensity)))]


def encode_pixel(value: PixelValue, order: ChannelOrder = ChannelOrder.GRB) -> bytes:
    """
    Encode one pixel into its 3-byte device group.

    HSV values go through the sector conversion first, then every channel
    is rounded, clamped and looked up in the gamma table.
    """
    channels = value.to_rgb().to_bytes_tuple()
    first, second, third = CHANNEL_INDICES[order]
    return bytes((
        gamma_byte(channels[first]),
        gamma_byte(channels[second]),
        gamma_byte(channels[third]),
    ))
