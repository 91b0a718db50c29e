"""
PatternEngine - pattern registry, active pattern and the render scheduler.

Each scheduler tick:
  channel.start_frame() -> active_pattern.tick() (writes pixel_count pixels)

A refused frame skips the tick entirely, so patterns only advance when their
output can reach the strip. A pattern that raises drops its frame and the
loop carries on.

State: Unloaded -> Active. load() switches from any state; there is no
stopped pattern, only a stopped scheduler.
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Any, Deque, Dict, List, Optional

from hardware.led.strip_interface import IPixelChannel
from patterns.base import BasePattern, PatternInfo
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ENGINE)


class PatternEngine:
    """
    Owns every pattern instance and decides which one renders.

    Usage:
        engine = PatternEngine(channel, build_patterns(...), tick_interval=0.033)
        engine.load("rain")
        await engine.start()
        ...
        await engine.stop()
    """

    def __init__(
        self,
        channel: IPixelChannel,
        patterns: List[BasePattern],
        tick_interval: float,
        default_pattern_id: str = "rainbow",
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")

        self.channel = channel
        self.tick_interval = tick_interval
        self.default_pattern_id = default_pattern_id

        self.patterns: Dict[str, BasePattern] = {}
        for pattern in patterns:
            if pattern.id in self.patterns:
                raise ValueError(f"Duplicate pattern id: {pattern.id}")
            self.patterns[pattern.id] = pattern

        if default_pattern_id not in self.patterns:
            raise ValueError(f"Default pattern '{default_pattern_id}' is not registered")

        self.active_pattern: Optional[BasePattern] = None

        # Scheduler
        self.running = False
        self.render_task: Optional[asyncio.Task] = None

        # Metrics
        self.frame_times: Deque[float] = deque(maxlen=300)
        self.ticks = 0
        self.frames_rendered = 0
        self.frames_skipped = 0
        self.tick_errors = 0

        log.info(
            "PatternEngine initialized",
            patterns=len(self.patterns),
            default=default_pattern_id,
            tick=f"{tick_interval * 1000:.0f}ms",
        )

    # === Registry ===

    def load(self, pattern_id: str) -> str:
        """
        Activate a pattern and reset its state.

        Unknown ids fall back to the default pattern.

        Returns:
            Id of the pattern that is now active
        """
        pattern = self.patterns.get(pattern_id)
        if pattern is None:
            log.warn(
                "Unknown pattern, falling back to default",
                requested=pattern_id,
                default=self.default_pattern_id,
            )
            pattern = self.patterns[self.default_pattern_id]

        pattern.init()
        self.active_pattern = pattern
        log.info(f"Pattern loaded: {pattern.friendly_name}", pattern=pattern.id)
        return pattern.id

    def get_active_pattern(self) -> Optional[str]:
        """Id of the active pattern, None before the first load()."""
        return self.active_pattern.id if self.active_pattern else None

    def list_patterns(self) -> List[PatternInfo]:
        """All patterns ordered by sort index, registry order among ties."""
        ordered = sorted(self.patterns.values(), key=lambda p: p.sort_index)
        return [pattern.describe() for pattern in ordered]

    # === Rendering ===

    def tick(self) -> bool:
        """
        Run one scheduler tick.

        Returns:
            True if the active pattern rendered a frame
        """
        self.ticks += 1
        pattern = self.active_pattern
        if pattern is None:
            return False

        if not self.channel.start_frame():
            self.frames_skipped += 1
            return False

        try:
            pattern.tick()
        except Exception as e:
            self.tick_errors += 1
            self.channel.abort_frame()
            log.error(f"Pattern tick failed: {e}", pattern=pattern.id, exc_info=True)
            return False

        self.frames_rendered += 1
        self.frame_times.append(time.perf_counter())
        return True

    # === Lifecycle ===

    @property
    def is_running(self) -> bool:
        return self.running

    async def start(self) -> None:
        """Start the scheduler loop."""
        if self.running:
            log.warn("PatternEngine already running")
            return

        self.running = True
        self.render_task = asyncio.create_task(self._run_loop())
        log.info(f"Scheduler started @ {1.0 / self.tick_interval:.1f} FPS")

    async def stop(self) -> None:
        """Stop the scheduler loop. The active pattern stays loaded."""
        if not self.running:
            return
        self.running = False
        if self.render_task:
            self.render_task.cancel()
            try:
                await self.render_task
            except asyncio.CancelledError:
                pass
            self.render_task = None

        log.info(
            "PatternEngine stopped",
            frames_rendered=self.frames_rendered,
            frames_skipped=self.frames_skipped,
            tick_errors=self.tick_errors,
        )

    async def _run_loop(self) -> None:
        """Fixed-cadence loop; late ticks run immediately, they never pile up."""
        next_tick = time.perf_counter()

        while self.running:
            self.tick()

            next_tick += self.tick_interval
            delay = next_tick - time.perf_counter()
            if delay < 0:
                # Fell behind; restart the cadence from now
                next_tick = time.perf_counter()
                delay = 0
            await asyncio.sleep(delay)

    # === Metrics ===

    def get_actual_fps(self) -> float:
        """Measured FPS over recent frames."""
        if len(self.frame_times) < 2:
            return 0.0
        duration = self.frame_times[-1] - self.frame_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.frame_times) - 1) / duration

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "fps_target": round(1.0 / self.tick_interval, 2),
            "fps_actual": round(self.get_actual_fps(), 2),
            "running": self.running,
            "active_pattern": self.get_active_pattern(),
            "ticks": self.ticks,
            "frames_rendered": self.frames_rendered,
            "frames_skipped": self.frames_skipped,
            "tick_errors": self.tick_errors,
            "channel": self.channel.get_metrics(),
        }
