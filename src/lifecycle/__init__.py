"""
Lifecycle subsystem
-------------------

Exports the public API for:
- graceful shutdown
- shutdown handlers
- the in-loop API server

External code should import from:
    from lifecycle import ShutdownCoordinator
    from lifecycle.handlers import EngineShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .shutdown_protocol import IShutdownHandler
from .api_server_wrapper import APIServerWrapper
from . import handlers

__all__ = [
    "ShutdownCoordinator",
    "IShutdownHandler",
    "APIServerWrapper",
    "handlers",
]
