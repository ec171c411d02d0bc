"""
Periodic redraw scheduling.

The frame clock does not own a timer; it asks a :class:`Scheduler` to call
it back repeatedly.  The host decides how ticks are produced (Qt timer,
test harness, ...).  Each tick carries the fraction of the current loop
that has elapsed, in ``[0, 1)``.
"""
from __future__ import annotations

import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

_IS_PI = (
    platform.system() == "Linux"
    and platform.machine().startswith(("aarch64", "arm"))
)

INFINITE = -1

TickCallback = Callable[[float], None]


@dataclass(frozen=True)
class IntervalPolicy:
    """How a scheduler should repeat its callback."""
    duration_ms: int = 3000                       # one loop
    repeat_count: int = INFINITE                  # extra loops after the first
    frame_interval_ms: int = 33 if _IS_PI else 16

    @property
    def repeats_forever(self) -> bool:
        return self.repeat_count == INFINITE


class Scheduler(ABC):
    """Starts and cancels a repeating tick callback."""

    @abstractmethod
    def start(self, policy: IntervalPolicy, on_tick: TickCallback) -> None:
        """Begin calling *on_tick* according to *policy*."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop calling back.  Safe to call when not running."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        ...
