"""
PatternEngine shutdown handler.
"""

from __future__ import annotations

from engine.pattern_engine import PatternEngine
from lifecycle.shutdown_protocol import IShutdownHandler, PRIORITY_ENGINE
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class EngineShutdownHandler(IShutdownHandler):
    """
    Stops the scheduler so no pattern writes to the channel while it closes.

    Priority: 90 (after API, before the output channel)
    """

    def __init__(self, engine: PatternEngine):
        self.engine = engine

    @property
    def shutdown_priority(self) -> int:
        return PRIORITY_ENGINE

    async def shutdown(self) -> None:
        log.info("Stopping pattern engine...")
        await self.engine.stop()
