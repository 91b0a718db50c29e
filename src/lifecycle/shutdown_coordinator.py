"""
ShutdownCoordinator - one place that decides when and in what order the
application tears down.

Shutdown is requested by SIGINT/SIGTERM or by a watched task dying with an
exception (the render loop, the uvicorn server). main_asyncio.py waits for
that request and then runs every registered handler, highest priority first.
"""

import asyncio
import signal
from typing import Dict, List, Optional
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ShutdownCoordinator:
    """
    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(EngineShutdownHandler(engine))
        coordinator.register(OutputChannelShutdownHandler(channel, pixel_count))
        coordinator.watch(engine.render_task, "render loop")
        coordinator.setup_signal_handlers(loop)

        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Seconds one handler may take before it is abandoned
            total_timeout: Seconds after which remaining handlers are skipped
        """
        self.timeout_per_handler = timeout_per_handler
        self.total_timeout = total_timeout
        self.reason: Optional[str] = None

        self._handlers: List[IShutdownHandler] = []
        self._watched: Dict[asyncio.Task, str] = {}
        self._requested = asyncio.Event()

    def register(self, handler: IShutdownHandler) -> None:
        for attr in ("shutdown_priority", "shutdown"):
            if not hasattr(handler, attr):
                raise ValueError(f"{handler!r} is not a shutdown handler (no {attr})")

        self._handlers.append(handler)
        log.debug(f"Shutdown handler registered: {type(handler).__name__}", priority=handler.shutdown_priority)

    def watch(self, task: Optional[asyncio.Task], name: str) -> None:
        """Request shutdown if this task ends with an exception."""
        if task is None:
            return
        self._watched[task] = name
        task.add_done_callback(self._on_watched_task_done)

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(f"Signal {s.name}"))
        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """First caller's reason wins; later requests are ignored."""
        if self._requested.is_set():
            return
        self.reason = reason
        log.info(f"{reason} → triggering shutdown")
        self._requested.set()

    @property
    def shutdown_requested(self) -> bool:
        return self._requested.is_set()

    def _on_watched_task_done(self, task: asyncio.Task) -> None:
        name = self._watched.pop(task, task.get_name())
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error(f"Critical task failed: {name}", error=f"{type(exc).__name__}: {exc}")
            self.request_shutdown(f"Task failure: {name}")

    async def wait_for_shutdown(self) -> None:
        await self._requested.wait()

    async def shutdown_all(self) -> None:
        """
        Run every handler, highest shutdown_priority first.

        A handler that raises or overruns timeout_per_handler is logged and
        the next one still runs. Once total_timeout has passed the remaining
        handlers are skipped.
        """
        log.info("Shutting down...", reason=self.reason or "UNKNOWN")

        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.total_timeout
        ordered = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)

        for index, handler in enumerate(ordered):
            name = type(handler).__name__

            if loop.time() > deadline:
                skipped = ", ".join(type(h).__name__ for h in ordered[index:])
                log.error(f"Shutdown took longer than {self.total_timeout}s", skipped=skipped)
                break

            try:
                await asyncio.wait_for(handler.shutdown(), timeout=self.timeout_per_handler)
                log.debug(f"✓ {name} done")
            except asyncio.TimeoutError:
                log.error(f"{name} did not finish within {self.timeout_per_handler}s")
            except Exception as e:
                log.error(f"{name} failed during shutdown: {e}", exc_info=True)

        log.info("✓ Shutdown sequence complete")
