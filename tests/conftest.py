"""
Shared fixtures and test doubles.

src/ is on sys.path through the pytest `pythonpath` setting.
"""

import random
from typing import Any, Dict, List, Optional

import pytest

from models.color import PixelValue
from models.config import PatternConfig, StripConfig, default_pattern_configs


class RecordingChannel:
    """
    IPixelChannel double that keeps every frame it was given.

    `accept` decides what start_frame() answers.
    """

    def __init__(self):
        self.accept = True
        self.frames: List[List[PixelValue]] = []
        self.frame_dropped = False
        self.aborted = 0
        self.is_open = True

    async def open(self) -> None:
        self.is_open = True

    async def close(self) -> None:
        self.is_open = False

    def start_frame(self) -> bool:
        if not self.accept:
            self.frame_dropped = True
            return False
        self.frames.append([])
        self.frame_dropped = False
        return True

    def write_pixel(self, value: PixelValue) -> None:
        if not self.frame_dropped:
            self.frames[-1].append(value)

    def abort_frame(self) -> None:
        self.frame_dropped = True
        self.aborted += 1

    def get_metrics(self) -> Dict[str, Any]:
        return {"frames": len(self.frames)}

    @property
    def last_frame(self) -> List[PixelValue]:
        return self.frames[-1]


class ScriptedRandom(random.Random):
    """
    random() returns the scripted values in order, then `default` forever.
    randrange() always returns `pixel` (when set).
    """

    def __init__(self, values=(), default: float = 0.99, pixel: Optional[int] = None):
        super().__init__(0)
        self.values = list(values)
        self.default = default
        self.pixel = pixel

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default

    def randrange(self, *args, **kwargs) -> int:
        if self.pixel is not None:
            return self.pixel
        return super().randrange(*args, **kwargs)


TICK = 0.033


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def no_spawn_rng() -> ScriptedRandom:
    """Never passes a spawn trial."""
    return ScriptedRandom(default=0.99)


@pytest.fixture
def strip_config() -> StripConfig:
    return StripConfig(device="/dev/null", pixel_count=4, write_buffer_high_water=8)


@pytest.fixture
def pattern_configs() -> List[PatternConfig]:
    return default_pattern_configs()
