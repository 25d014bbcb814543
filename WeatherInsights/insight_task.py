"""Delayed insight derivation for display surfaces.

The dashboard shows a loading state while an insight is "being computed".
Only the most recent request per surface matters, so older handles are
marked stale and their results dropped instead of rendered.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from insight_engine import Insight, derive_insight
from weather_data import WeatherSnapshot

DEFAULT_INSIGHT_DELAY = 1.5


async def derive_insight_later(snapshot: WeatherSnapshot, delay_seconds: float = DEFAULT_INSIGHT_DELAY) -> Insight:
    """Wait ``delay_seconds`` then derive the insight for ``snapshot``."""
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    return derive_insight(snapshot)


@dataclass
class InsightHandle:
    generation: int
    task: "asyncio.Task[Insight]"


class InsightScheduler:
    """
    Tracks the single outstanding insight request of one display surface.

    Each ``submit`` supersedes every earlier handle. Superseded tasks still
    run to completion; their results are simply discarded by ``resolve``.
    """

    def __init__(self, delay_seconds: float = DEFAULT_INSIGHT_DELAY):
        self.delay_seconds = delay_seconds
        self._generation = 0
        self._latest: Optional[Insight] = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def latest(self) -> Optional[Insight]:
        """Last insight resolved from a handle that was current at the time."""
        return self._latest

    def submit(self, snapshot: WeatherSnapshot) -> InsightHandle:
        """Schedule a derivation. Must be called with a running event loop."""
        self._generation += 1
        task = asyncio.ensure_future(derive_insight_later(snapshot, self.delay_seconds))
        logging.debug(f"Insight request #{self._generation} submitted (delay: {self.delay_seconds}s)")
        return InsightHandle(generation=self._generation, task=task)

    def is_stale(self, handle: InsightHandle) -> bool:
        return handle.generation != self._generation

    async def resolve(self, handle: InsightHandle) -> Optional[Insight]:
        """
        Wait for a handle's insight.

        Returns:
            The insight, or None if a newer request superseded this one
        """
        insight = await handle.task
        if self.is_stale(handle):
            logging.debug(f"Discarding stale insight #{handle.generation} (current: #{self._generation})")
            return None
        self._latest = insight
        return insight
