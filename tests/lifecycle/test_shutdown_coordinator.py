"""
Tests for ShutdownCoordinator ordering, failure isolation and task watching,
plus the output channel handler.
"""

import asyncio

import pytest

from lifecycle.handlers import OutputChannelShutdownHandler
from lifecycle.shutdown_coordinator import ShutdownCoordinator
from models.color import RGB

from conftest import RecordingChannel


class FakeHandler:

    def __init__(self, name, priority, calls, delay=0.0, fail=False):
        self.name = name
        self.shutdown_priority = priority
        self.calls = calls
        self.delay = delay
        self.fail = fail

    async def shutdown(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError(f"{self.name} failed")
        self.calls.append(self.name)


async def test_handlers_run_highest_priority_first():
    calls = []
    coordinator = ShutdownCoordinator()
    coordinator.register(FakeHandler("channel", 80, calls))
    coordinator.register(FakeHandler("api", 100, calls))
    coordinator.register(FakeHandler("engine", 90, calls))

    await coordinator.shutdown_all()

    assert calls == ["api", "engine", "channel"]


async def test_failing_and_slow_handlers_do_not_block_the_rest():
    calls = []
    coordinator = ShutdownCoordinator(timeout_per_handler=0.05)
    coordinator.register(FakeHandler("api", 100, calls, fail=True))
    coordinator.register(FakeHandler("engine", 90, calls, delay=1.0))
    coordinator.register(FakeHandler("channel", 80, calls))

    await coordinator.shutdown_all()

    assert calls == ["channel"]


async def test_register_rejects_incomplete_handler():
    with pytest.raises(ValueError):
        ShutdownCoordinator().register(object())


async def test_failed_watched_task_requests_shutdown():
    coordinator = ShutdownCoordinator()

    async def crash():
        raise RuntimeError("render loop died")

    task = asyncio.create_task(crash())
    coordinator.watch(task, "render loop")

    await asyncio.wait_for(coordinator.wait_for_shutdown(), timeout=1.0)
    assert coordinator.shutdown_requested
    assert coordinator.reason == "Task failure: render loop"


async def test_cancelled_watched_task_is_ignored():
    coordinator = ShutdownCoordinator()
    task = asyncio.create_task(asyncio.sleep(10))
    coordinator.watch(task, "api")

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    await asyncio.sleep(0)

    assert not coordinator.shutdown_requested


async def test_first_reason_wins():
    coordinator = ShutdownCoordinator()
    coordinator.request_shutdown("Signal SIGTERM")
    coordinator.request_shutdown("Task failure: api")

    assert coordinator.reason == "Signal SIGTERM"


class TestOutputChannelShutdownHandler:

    async def test_blanks_then_closes(self):
        channel = RecordingChannel()

        await OutputChannelShutdownHandler(channel, pixel_count=3).shutdown()

        assert channel.last_frame == [RGB.black()] * 3
        assert channel.is_open is False

    async def test_busy_channel_still_closes(self):
        channel = RecordingChannel()
        channel.accept = False

        await OutputChannelShutdownHandler(channel, pixel_count=3).shutdown()

        assert channel.frames == []
        assert channel.is_open is False
