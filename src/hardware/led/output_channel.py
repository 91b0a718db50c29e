# hardware/led/output_channel.py
"""
OutputChannel - LPD8806 strip over a character device
======================================================
Owns the device byte stream and the frame-level flow control.

The device (e.g. /dev/spidev0.0) is driven through an asyncio write-pipe
transport, so writes never block the event loop:

- pause_writing()  -> "stream full":    drain_pending = True
- resume_writing() -> "stream drained": drain_pending = False

Policy:
- start_frame() refuses (returns False, frame dropped) while draining, or
  while the reset byte of an earlier frame is still sitting in the
  transport buffer. Falling behind by one frame is enough to shed load;
  waiting for the buffer to fill would lag several frame periods.
- write_pixel() that fills the buffer drops the rest of the frame. A drained
  notification never resumes a dropped frame, only the next start_frame()
  can.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Deque, Dict, Optional

from hardware.led.gamma import RESET_BYTE, encode_pixel
from hardware.led.strip_interface import IPixelChannel
from models.color import PixelValue
from models.config import StripConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.OUTPUT)
hw_log = log.with_category(LogCategory.HARDWARE)


class StripWriteProtocol(asyncio.BaseProtocol):
    """Forwards transport flow-control callbacks to the owning channel."""

    def __init__(self, channel: "OutputChannel"):
        self._channel = channel

    def connection_made(self, transport) -> None:
        self._channel._attach(transport)

    def pause_writing(self) -> None:
        self._channel._on_stream_full()

    def resume_writing(self) -> None:
        self._channel._on_stream_drained()

    def connection_lost(self, exc: Optional[Exception]) -> None:
        self._channel._on_connection_lost(exc)


class OutputChannel(IPixelChannel):
    """
    Frame-oriented writer for the LED device.

    Usage:
        channel = OutputChannel(StripConfig(device="/dev/spidev0.0"))
        await channel.open()
        if channel.start_frame():
            for value in pixels:
                channel.write_pixel(value)
        await channel.close()
    """

    def __init__(self, config: StripConfig, close_timeout: float = 2.0):
        self.config = config
        self.close_timeout = close_timeout

        self._transport: Optional[asyncio.WriteTransport] = None
        self._closed: Optional[asyncio.Future] = None

        # Flow control state
        self.drain_pending = False
        self.frame_dropped = False

        # Stream offsets of reset bytes not yet handed to the device
        self._pending_resets: Deque[int] = deque()
        self._bytes_written = 0
        self._pixels_in_frame = 0

        # Metrics
        self.frames_started = 0
        self.frames_refused = 0
        self.frames_cut = 0

    # ==================== Lifecycle ====================

    @property
    def is_open(self) -> bool:
        return self._transport is not None and not self._transport.is_closing()

    async def open(self) -> None:
        """
        Open the device for writing and latch it into a known state.

        Raises:
            OSError: device missing, permission denied, or not a pipe or
                character device. Nothing can render without it.
        """
        if self.is_open:
            hw_log.warn("Output channel already open", device=self.config.device)
            return

        loop = asyncio.get_running_loop()
        try:
            device = open(self.config.device, "wb", buffering=0)
        except OSError as ex:
            hw_log.error("Could not open LED device", device=self.config.device, error=str(ex))
            raise

        self._closed = loop.create_future()
        try:
            await loop.connect_write_pipe(lambda: StripWriteProtocol(self), device)
        except ValueError as ex:
            device.close()
            hw_log.error("LED device is not writable as a stream", device=self.config.device, error=str(ex))
            raise OSError(f"{self.config.device}: {ex}") from ex

        self._transport.set_write_buffer_limits(high=self.config.write_buffer_high_water)

        # Initial reset so the strip starts from a clean latch
        self._write(RESET_BYTE)

        hw_log.info(
            "Output channel open",
            device=self.config.device,
            pixels=self.config.pixel_count,
            order=self.config.channel_order.value,
            high_water=self.config.write_buffer_high_water,
        )

    async def close(self) -> None:
        """Flush whatever is buffered and release the device."""
        if self._transport is None:
            return

        hw_log.info("Closing output channel", buffered=self._transport.get_write_buffer_size())
        self._transport.close()

        if self._closed is not None and not self._closed.done():
            try:
                await asyncio.wait_for(asyncio.shield(self._closed), timeout=self.close_timeout)
            except asyncio.TimeoutError:
                hw_log.warn("Device did not drain before close timeout, aborting")
                if self._transport is not None:
                    self._transport.abort()

    # ==================== Frame API ====================

    @property
    def unflushed_reset_count(self) -> int:
        """Reset bytes written but not yet confirmed handed to the device."""
        self._prune_flushed_resets()
        return len(self._pending_resets)

    def start_frame(self) -> bool:
        """
        Begin a new frame.

        Returns:
            True if the reset byte went out and pixels may follow, False if
            the frame is dropped (every write_pixel until the next
            start_frame() is a no-op).
        """
        if not self.is_open:
            self.frame_dropped = True
            self.frames_refused += 1
            return False

        if self.drain_pending or self.unflushed_reset_count > 0:
            self.frame_dropped = True
            self.frames_refused += 1
            log.debug(
                "Frame refused",
                draining=self.drain_pending,
                unflushed_resets=len(self._pending_resets),
            )
            return False

        self.frame_dropped = False
        self._pixels_in_frame = 0

        self._pending_resets.append(self._bytes_written)
        self._write(RESET_BYTE)
        self.frames_started += 1

        if self.drain_pending:
            # The reset byte alone filled the buffer
            self._cut_frame()
        return True

    def write_pixel(self, value: PixelValue) -> None:
        """
        Encode and send one pixel of the current frame.

        No-op while the frame is dropped. If this write fills the device
        buffer, the rest of the frame is dropped.
        """
        if self.frame_dropped:
            return
        if self._transport is None:
            raise RuntimeError("Output channel is not open")

        self._write(encode_pixel(value, self.config.channel_order))
        self._pixels_in_frame += 1

        if self.drain_pending:
            self._cut_frame()

    def abort_frame(self) -> None:
        """Drop the remainder of the current frame."""
        self.frame_dropped = True

    # ==================== Metrics ====================

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "open": self.is_open,
            "frames_started": self.frames_started,
            "frames_refused": self.frames_refused,
            "frames_cut": self.frames_cut,
            "bytes_written": self._bytes_written,
            "drain_pending": self.drain_pending,
            "unflushed_resets": self.unflushed_reset_count,
        }

    # ==================== Internals ====================

    def _write(self, data: bytes) -> None:
        self._transport.write(data)
        self._bytes_written += len(data)

    def _cut_frame(self) -> None:
        self.frame_dropped = True
        self.frames_cut += 1
        log.debug("Backpressure, dropping rest of frame", pixels_written=self._pixels_in_frame)

    def _prune_flushed_resets(self) -> None:
        if self._transport is None:
            return
        flushed = self._bytes_written - self._transport.get_write_buffer_size()
        while self._pending_resets and self._pending_resets[0] < flushed:
            self._pending_resets.popleft()

    # ==================== Transport callbacks ====================

    def _attach(self, transport) -> None:
        self._transport = transport
        self.drain_pending = False
        self.frame_dropped = False
        self._pending_resets.clear()
        self._bytes_written = 0

    def _on_stream_full(self) -> None:
        self.drain_pending = True
        log.debug("Device buffer full", buffered=self._transport.get_write_buffer_size())

    def _on_stream_drained(self) -> None:
        self.drain_pending = False
        log.debug("Device buffer drained")

    def _on_connection_lost(self, exc: Optional[Exception]) -> None:
        if exc is not None:
            hw_log.error("LED device stream lost", device=self.config.device, error=str(exc))
        else:
            hw_log.info("Output channel closed", bytes_written=self._bytes_written)

        self._transport = None
        self.drain_pending = False
        self.frame_dropped = True
        self._pending_resets.clear()

        if self._closed is not None and not self._closed.done():
            self._closed.set_result(None)
