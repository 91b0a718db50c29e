"""
Drops - transient light/heat sources used by the rain patterns

A drop lands on one pixel, spreads sideways and fades out. Drop state is a
pure function of its age in ticks, so a drop is spent after exactly
`lifetime` advances and never reports a negative intensity.

Drops live in a DropPool owned by their pattern. The pool hands out
generation-checked handles: a handle to a removed drop stays invalid even
after its slot is reused.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, NamedTuple, Optional, Tuple, TypeVar

T = TypeVar("T")


class DropHandle(NamedTuple):
    index: int
    generation: int


class DropPool(Generic[T]):
    """
    Slot arena for the drops of one pattern.

    Example:
        pool = DropPool()
        handle = pool.insert(drop)
        for handle, drop in pool.items():   # snapshot, safe to remove
            if drop.spent:
                pool.remove(handle)
    """

    def __init__(self):
        self._slots: List[Optional[T]] = []
        self._generations: List[int] = []
        self._free: List[int] = []
        self._count = 0

    def insert(self, drop: T) -> DropHandle:
        if self._free:
            index = self._free.pop()
            self._slots[index] = drop
        else:
            index = len(self._slots)
            self._slots.append(drop)
            self._generations.append(0)
        self._count += 1
        return DropHandle(index, self._generations[index])

    def get(self, handle: DropHandle) -> Optional[T]:
        if not self._is_live(handle):
            return None
        return self._slots[handle.index]

    def remove(self, handle: DropHandle) -> bool:
        """Free the slot. Returns False for a stale or unknown handle."""
        if not self._is_live(handle):
            return False
        self._slots[handle.index] = None
        self._generations[handle.index] += 1
        self._free.append(handle.index)
        self._count -= 1
        return True

    def items(self) -> List[Tuple[DropHandle, T]]:
        """Snapshot of live (handle, drop) pairs in slot order."""
        return [
            (DropHandle(i, self._generations[i]), drop)
            for i, drop in enumerate(self._slots)
            if drop is not None
        ]

    def clear(self) -> None:
        for i, drop in enumerate(self._slots):
            if drop is not None:
                self._slots[i] = None
                self._generations[i] += 1
        self._free = list(range(len(self._slots)))
        self._count = 0

    def _is_live(self, handle: DropHandle) -> bool:
        index, generation = handle
        return (
            0 <= index < len(self._slots)
            and self._generations[index] == generation
            and self._slots[index] is not None
        )

    def __contains__(self, handle: DropHandle) -> bool:
        return self._is_live(handle)

    def __len__(self) -> int:
        return self._count


def covered_pixels(center: int, width: float, pixel_count: int) -> range:
    """
    Pixels strictly within `width` of the center, clipped to the strip.

    The cover is symmetric: a fresh drop of width 1 lights only its own
    pixel, not the pixel to its left as a half-open [c - w, c + w) cover
    would.
    """
    low = max(0, math.floor(center - width) + 1)
    high = min(pixel_count - 1, math.ceil(center + width) - 1)
    return range(low, high + 1)


@dataclass
class RainDrop:
    """
    Colored drop: starts white and full bright, fades to its hue, then out.

    Rates are per tick. Hue is fixed at spawn.
    """
    pixel: int
    hue: float
    white_decay: float
    value_decay: float
    spread: float
    lifetime: int
    age: int = 0

    @property
    def spent(self) -> bool:
        return self.age >= self.lifetime

    @property
    def whiteness(self) -> float:
        return max(0.0, 1.0 - self.age * self.white_decay)

    @property
    def value(self) -> float:
        if self.spent:
            return 0.0
        return max(0.0, 1.0 - self.age * self.value_decay)

    @property
    def width(self) -> float:
        return 1.0 + self.age * self.spread

    def advance(self) -> None:
        self.age += 1


@dataclass
class HeatDrop:
    """
    Black-body drop: a single temperature cooling linearly from
    start_temperature to end_temperature.
    """
    pixel: int
    start_temperature: float
    end_temperature: float
    temperature_decay: float
    spread: float
    lifetime: int
    age: int = 0

    @property
    def spent(self) -> bool:
        return self.age >= self.lifetime

    @property
    def temperature(self) -> float:
        if self.spent:
            return self.end_temperature
        return max(self.end_temperature, self.start_temperature - self.age * self.temperature_decay)

    @property
    def width(self) -> float:
        return 1.0 + self.age * self.spread

    def advance(self) -> None:
        self.age += 1
