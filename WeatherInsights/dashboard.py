"""Dashboard controller - one display surface's fetch/insight lifecycle."""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from insight_engine import Insight
from insight_task import InsightScheduler
from layout import weather_theme
from weather_data import WeatherReport
from weather_provider import WeatherProviderError
from weather_service import WeatherService

FETCH_ERROR_MESSAGE = "Unable to fetch weather data. Please try again."


@dataclass
class Notification:
    title: str
    message: str
    level: str = "info"  # "info" or "error"


@dataclass
class DashboardState:
    report: WeatherReport
    insight: Insight
    theme: str


class Dashboard:
    """
    Loads weather for a city or position and derives its insight.

    Loads supersede each other: when a newer load starts before an older one
    finishes, the older one's result is dropped and ``load`` returns None.
    """

    def __init__(
        self,
        service: WeatherService,
        scheduler: Optional[InsightScheduler] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.service = service
        self.scheduler = scheduler or InsightScheduler()
        self.clock = clock
        self.state: Optional[DashboardState] = None
        self.notifications: List[Notification] = []
        self._generation = 0

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def notify(self, title: str, message: str, level: str = "info") -> None:
        logging.log(logging.ERROR if level == "error" else logging.INFO, f"{title}: {message}")
        self.notifications.append(Notification(title=title, message=message, level=level))

    async def load(
        self,
        city: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None
    ) -> Optional[DashboardState]:
        """
        Load a city by name, or the given position (default city if unknown).

        A blank city search is ignored: nothing is fetched and the current
        state is kept.

        Returns:
            The new dashboard state, or None if the load was skipped, failed or was superseded
        """
        if city is not None and not city.strip():
            logging.info("Ignoring blank city search")
            return None

        self._generation += 1
        generation = self._generation

        try:
            if city is not None:
                report = await asyncio.to_thread(self.service.get_by_city, city.strip())
            else:
                report = await asyncio.to_thread(self.service.locate, lat, lon)
        except WeatherProviderError:
            if self._is_current(generation):
                self.notify("Error", FETCH_ERROR_MESSAGE, level="error")
            return None

        if not self._is_current(generation):
            logging.info(f"Discarding superseded weather load #{generation} ({report.location.name})")
            return None

        handle = self.scheduler.submit(report.current)
        insight = await self.scheduler.resolve(handle)
        if insight is None or not self._is_current(generation):
            return None

        self.state = DashboardState(
            report=report,
            insight=insight,
            theme=weather_theme(report.current.condition, self.clock().hour),
        )
        if city is not None:
            self.notify("Location Updated", f"Weather for {report.location.name} loaded successfully.")
        return self.state
