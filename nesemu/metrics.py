"""Collection of emulator speed metrics."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metrics:
    recorded_time: timedelta
    clock_speed_mhz: int
    frames_per_second: int


class Collector:
    """Accumulates clocks and frames and turns them into rates."""

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock
        self._reset()

    def _reset(self) -> None:
        self._record_start = self._clock()
        self._clocks = 0
        self._frames_rendered = 0

    def collect(self) -> Metrics:
        """Compute metrics since the last collection and start over."""
        logger.debug(
            "Raw metrics: clocks=%d frames=%d", self._clocks, self._frames_rendered
        )
        elapsed_us = (self._clock() - self._record_start) // 1_000
        divisor = max(elapsed_us, 1)
        metrics = Metrics(
            recorded_time=timedelta(microseconds=elapsed_us),
            clock_speed_mhz=self._clocks * 1_000_000 // divisor // 1_000_000,
            frames_per_second=self._frames_rendered * 1_000_000 // divisor,
        )
        logger.debug("Metrics: %s", metrics)
        self._reset()
        return metrics

    def observe_system_clocks(self, clocks: int) -> None:
        self._clocks += clocks

    def observe_frame_ready(self) -> None:
        self._frames_rendered += 1