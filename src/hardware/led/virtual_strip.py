from __future__ import annotations
from typing import Any, Dict, List

from hardware.led.gamma import RESET_BYTE, encode_pixel
from hardware.led.strip_interface import IPixelChannel
from models.color import PixelValue
from models.config import StripConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class VirtualOutputChannel(IPixelChannel):
    """
    In-memory pixel channel for machines without the strip attached.

    Never applies backpressure. Keeps the pixels of the frame being written
    and of the last started frame so they can be inspected.
    """

    def __init__(self, config: StripConfig):
        self.config = config
        self.is_open = False
        self.frame_dropped = False
        self.frame: List[PixelValue] = []
        self.last_frame: List[PixelValue] = []
        self.frames_started = 0

    async def open(self) -> None:
        self.is_open = True
        log.info("Virtual output channel open", pixels=self.config.pixel_count)

    async def close(self) -> None:
        self.is_open = False

    def start_frame(self) -> bool:
        if not self.is_open:
            self.frame_dropped = True
            return False
        self.last_frame = self.frame
        self.frame = []
        self.frame_dropped = False
        self.frames_started += 1
        return True

    def write_pixel(self, value: PixelValue) -> None:
        if self.frame_dropped:
            return
        self.frame.append(value)

    def abort_frame(self) -> None:
        self.frame_dropped = True

    def frame_bytes(self) -> bytes:
        """Wire encoding of the frame being written."""
        order = self.config.channel_order
        return RESET_BYTE + b"".join(encode_pixel(value, order) for value in self.frame)

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "open": self.is_open,
            "virtual": True,
            "frames_started": self.frames_started,
        }
