"""
Tests for the LPD8806 gamma table and pixel encoding.
"""

import pytest

from hardware.led.gamma import GAMMA, RESET_BYTE, encode_pixel, gamma_byte
from models.color import HSV, RGB
from models.enums import ChannelOrder


class TestGammaTable:

    def test_every_entry_has_high_bit(self):
        assert len(GAMMA) == 256
        assert all(entry & 0x80 for entry in GAMMA)

    def test_endpoints(self):
        assert GAMMA[0] == 0x80
        assert GAMMA[255] == 0xFF

    def test_monotonic(self):
        assert all(a <= b for a, b in zip(GAMMA, GAMMA[1:]))

    def test_midpoint_follows_curve(self):
        # (128/255)^2.5 * 127 = 22.6 -> 23
        assert GAMMA[128] == 0x80 | 23

    def test_reset_byte_is_the_only_zero(self):
        assert RESET_BYTE == b"\x00"
        assert 0 not in GAMMA

    @pytest.mark.parametrize("raw, expected", [(-20, 0x80), (300, 0xFF)])
    def test_out_of_range_is_clamped(self, raw, expected):
        assert gamma_byte(raw) == expected


class TestEncodePixel:

    def test_default_order_is_grb(self):
        assert encode_pixel(RGB(255, 0, 0)) == bytes((0x80, 0xFF, 0x80))
        assert encode_pixel(RGB(0, 255, 0)) == bytes((0xFF, 0x80, 0x80))

    def test_configured_order(self):
        assert encode_pixel(RGB(255, 0, 0), ChannelOrder.RGB) == bytes((0xFF, 0x80, 0x80))
        assert encode_pixel(RGB(0, 0, 255), ChannelOrder.BGR) == bytes((0xFF, 0x80, 0x80))

    def test_hsv_red_matches_rgb_red(self):
        assert encode_pixel(HSV(0.0, 1, 1)) == encode_pixel(RGB(255, 0, 0))

    def test_hsv_off_is_all_dark(self):
        assert encode_pixel(HSV.off()) == bytes((0x80, 0x80, 0x80))

    def test_three_bytes_per_pixel(self):
        assert len(encode_pixel(HSV(0.3, 0.5, 0.7))) == 3
