# hardware/led/strip_interface.py
"""
IPixelChannel Protocol
======================
Minimal contract between patterns and whatever carries their pixels
(the real device channel or the in-memory one).
"""

from __future__ import annotations
from typing import Any, Dict, Protocol
from models.color import PixelValue


class IPixelChannel(Protocol):
    """
    Protocol defining the frame-oriented pixel output.

    All implementations must provide:
    - open / close: acquire and release the output
    - start_frame: begin a frame, False when the frame must be skipped
    - write_pixel: next pixel of the current frame (no-op once dropped)
    - abort_frame: drop the remainder of the current frame
    """

    async def open(self) -> None:
        ...

    async def close(self) -> None:
        ...

    def start_frame(self) -> bool:
        """Write the reset byte. False means the whole frame is dropped."""
        ...

    def write_pixel(self, value: PixelValue) -> None:
        """Send the next pixel of the frame."""
        ...

    def abort_frame(self) -> None:
        """Drop whatever is left of the current frame."""
        ...

    def get_metrics(self) -> Dict[str, Any]:
        ...
