"""
What the ShutdownCoordinator needs from a component it tears down.
"""

from typing import Protocol

# Teardown order: stop taking requests, stop rendering, release the device.
PRIORITY_API = 100
PRIORITY_ENGINE = 90
PRIORITY_OUTPUT = 80


class IShutdownHandler(Protocol):
    """
    A component taking part in graceful shutdown.

    Handlers with a larger shutdown_priority run earlier. A handler that
    raises or overruns its timeout is logged and the sequence moves on.
    """

    @property
    def shutdown_priority(self) -> int:
        ...

    async def shutdown(self) -> None:
        ...
