from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler, PRIORITY_API
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from lifecycle.api_server_wrapper import APIServerWrapper

log = get_logger().for_category(LogCategory.SHUTDOWN)


class APIServerShutdownHandler(IShutdownHandler):
    """Closes the REST API before the engine stops, so no request can switch patterns mid-teardown."""

    def __init__(self, server: "APIServerWrapper"):
        self.server = server

    @property
    def shutdown_priority(self) -> int:
        return PRIORITY_API

    async def shutdown(self) -> None:
        if not self.server.is_running:
            log.debug("API server already stopped")
            return

        log.info("Stopping API server", port=self.server.port)
        await self.server.stop()
