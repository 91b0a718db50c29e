from __future__ import annotations

from hardware.led.strip_interface import IPixelChannel
from lifecycle.shutdown_protocol import IShutdownHandler, PRIORITY_OUTPUT
from models.color import RGB
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class OutputChannelShutdownHandler(IShutdownHandler):
    """
    Blanks the strip and closes the device.

    The blank frame is best effort: if the channel refuses it (still
    draining) the strip keeps its last frame. close() flushes whatever is
    buffered either way.

    Priority: 80 (last, after the engine stopped)
    """

    def __init__(self, channel: IPixelChannel, pixel_count: int, blank_on_exit: bool = True):
        self.channel = channel
        self.pixel_count = pixel_count
        self.blank_on_exit = blank_on_exit

    @property
    def shutdown_priority(self) -> int:
        return PRIORITY_OUTPUT

    async def shutdown(self) -> None:
        if self.blank_on_exit and self.channel.start_frame():
            for _ in range(self.pixel_count):
                self.channel.write_pixel(RGB.black())
            log.info("LED strip blanked")
        elif self.blank_on_exit:
            log.warn("Output channel busy, strip not blanked")

        await self.channel.close()
        log.info("Output channel closed")
