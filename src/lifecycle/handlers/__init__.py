from .api_server_shutdown_handler import APIServerShutdownHandler
from .engine_shutdown_handler import EngineShutdownHandler
from .output_channel_shutdown_handler import OutputChannelShutdownHandler

__all__ = [
    "APIServerShutdownHandler",
    "EngineShutdownHandler",
    "OutputChannelShutdownHandler",
]
