"""
main_asyncio.py: application entry point for Pixel Rain
--------------------------------------------------------

Responsible for:
- loading configuration and configuring the logger
- opening the LED output channel (fatal if the device is unavailable)
- building the pattern registry and engine, loading the initial pattern
- serving the REST API in the same event loop
- graceful shutdown on Ctrl+C / SIGTERM
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (important for Raspberry Pi)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import argparse
import asyncio
from typing import List, Optional

from api.dependencies import set_engine
from api.main import create_app
from engine.pattern_engine import PatternEngine
from hardware.led.channel_factory import create_output_channel
from lifecycle import APIServerWrapper, ShutdownCoordinator
from lifecycle.handlers import (
    APIServerShutdownHandler,
    EngineShutdownHandler,
    OutputChannelShutdownHandler,
)
from managers import ConfigManager
from models.config import ConfigError
from models.enums import LogCategory
from patterns.registry import build_patterns
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LPD8806 LED strip pattern engine")
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="Main config file (relative to src/ or absolute)",
    )
    parser.add_argument("--device", help="Override strip.device")
    parser.add_argument(
        "--virtual",
        action="store_true",
        help="Render into memory instead of the LED device",
    )
    return parser.parse_args(argv)


async def main(args: argparse.Namespace) -> int:
    """Main async entry point. Returns the process exit status."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config_manager = ConfigManager(config_path=args.config)
    try:
        config_manager.load()
    except ConfigError as ex:
        log.error("Invalid configuration", key=ex.key, error=str(ex))
        return 1
    config = config_manager.apply_overrides(device=args.device, virtual=args.virtual)

    configure_logger(config.logging.level, config.logging.colors)
    log.info("Starting Pixel Rain...")

    # ========================================================================
    # 2. OUTPUT CHANNEL
    # ========================================================================

    channel = create_output_channel(config.strip)
    try:
        await channel.open()
    except OSError as ex:
        log.error("Cannot render without the LED device", device=config.strip.device, error=str(ex))
        return 1

    # ========================================================================
    # 3. PATTERN ENGINE
    # ========================================================================

    try:
        patterns = build_patterns(
            config.patterns,
            channel,
            pixel_count=config.strip.pixel_count,
            tick_interval=config.engine.tick_interval,
        )
        engine = PatternEngine(
            channel,
            patterns,
            tick_interval=config.engine.tick_interval,
            default_pattern_id=config.engine.default_pattern,
        )
    except ConfigError as ex:
        log.error("Invalid pattern configuration", key=ex.key, error=str(ex))
        await channel.close()
        return 1

    engine.load(config.engine.initial_pattern)
    await engine.start()

    # ========================================================================
    # 4. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(EngineShutdownHandler(engine))
    coordinator.register(OutputChannelShutdownHandler(channel, config.strip.pixel_count))
    coordinator.watch(engine.render_task, "Pattern engine render loop")

    loop = asyncio.get_running_loop()
    coordinator.setup_signal_handlers(loop)

    # ========================================================================
    # 5. API SERVER
    # ========================================================================

    if config.api.enabled:
        set_engine(engine)
        api = APIServerWrapper(create_app(), host=config.api.host, port=config.api.port)
        coordinator.register(APIServerShutdownHandler(api))
        try:
            await api.start()
            coordinator.watch(api.task, "FastAPI/Uvicorn server")
        except RuntimeError as ex:
            log.error(f"API server unavailable: {ex}")
            coordinator.request_shutdown("API server failed to start")
    else:
        log.info("API disabled by config")

    log.info("🏁 Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()
    set_engine(None)

    log.info("👋 Pixel Rain shut down cleanly.")
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        return asyncio.run(main(args))
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        return 0


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(run())
