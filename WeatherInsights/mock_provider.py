"""Mock weather provider - random but plausible data for demos and offline dev."""
import logging
import random
import time
from datetime import datetime, timedelta
from typing import List, Optional

from weather_data import ForecastDay, Location, WeatherReport, WeatherSnapshot
from weather_provider import WeatherProviderBase, WeatherProviderError

CONDITIONS = ["clear", "clouds", "rain", "snow"]
DESCRIPTIONS = {
    "clear": ["sunny", "clear sky", "bright sunshine"],
    "clouds": ["partly cloudy", "overcast", "scattered clouds"],
    "rain": ["light rain", "heavy rain", "drizzle"],
    "snow": ["light snow", "heavy snow", "snow showers"],
}
# Stand-in for reverse geocoding when looking up by coordinates
CITY_NAMES = ["London", "New York", "Tokyo", "Paris", "Sydney"]

DEFAULT_LAT = 51.5074
DEFAULT_LON = -0.1278


class MockWeatherProvider(WeatherProviderBase):
    """
    Weather provider that invents data instead of calling an API.

    Pass a seed for reproducible output (useful in tests and screenshots).
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        delay_seconds: float = 1.0,
        forecast_days: int = 7,
        now: Optional[datetime] = None
    ):
        """
        Initialize mock provider.

        Args:
            seed: Random seed (None for non-deterministic data)
            delay_seconds: Simulated network latency per request
            forecast_days: Number of forecast days to generate
            now: Fixed "current" time (defaults to the wall clock per request)
        """
        self._rng = random.Random(seed)
        self.delay_seconds = delay_seconds
        self.forecast_days = forecast_days
        self._now = now

    def get_by_coordinates(self, lat: float, lon: float) -> WeatherReport:
        self._simulate_latency()
        city = self._rng.choice(CITY_NAMES)
        logging.info(f"Mock reverse geocode ({lat}, {lon}) -> {city}")
        return self._generate(city, lat, lon)

    def get_by_city(self, city: str) -> WeatherReport:
        if not city or not city.strip():
            raise WeatherProviderError("City name must not be empty")
        self._simulate_latency()
        return self._generate(city.strip())

    def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            logging.debug(f"Simulating {self.delay_seconds}s of network latency")
            time.sleep(self.delay_seconds)

    def _generate(self, name: str, lat: Optional[float] = None, lon: Optional[float] = None) -> WeatherReport:
        rng = self._rng
        now = self._now or datetime.now()

        condition = rng.choice(CONDITIONS)
        temp = rng.randint(-5, 34)
        sunrise = now.replace(hour=6, minute=30, second=0, microsecond=0)
        sunset = now.replace(hour=18, minute=45, second=0, microsecond=0)

        current = WeatherSnapshot(
            temperature=temp,
            condition=condition,
            humidity=rng.randint(40, 79),
            wind_speed=rng.randint(5, 34),
            uv_index=rng.randint(0, 10),
            description=rng.choice(DESCRIPTIONS[condition]),
            feels_like=temp + rng.randint(-3, 2),
            temp_min=temp - 5,
            temp_max=temp + 5,
            pressure=rng.randint(1000, 1099),
            wind_direction=rng.randint(0, 359),
            visibility=rng.randint(5, 24),
            sunrise=int(sunrise.timestamp()),
            sunset=int(sunset.timestamp()),
            timestamp=int(now.timestamp()),
        )

        report = WeatherReport(
            location=Location(
                name=name,
                country="Demo",
                lat=lat if lat is not None else DEFAULT_LAT,
                lon=lon if lon is not None else DEFAULT_LON,
            ),
            current=current,
            forecast=self._generate_forecast(temp, now),
        )
        logging.info(f"Generated mock weather for {name}: {temp}°C, {condition}")
        return report

    def _generate_forecast(self, base_temp: int, now: datetime) -> List[ForecastDay]:
        rng = self._rng
        days = []
        for offset in range(self.forecast_days):
            condition = rng.choice(CONDITIONS)
            temp = base_temp + rng.randint(-5, 4)
            days.append(ForecastDay(
                date=(now + timedelta(days=offset)).date(),
                condition=condition,
                temperature=temp,
                temp_min=temp - rng.randint(0, 7) - 2,
                temp_max=temp + rng.randint(0, 7) + 2,
                humidity=rng.randint(40, 79),
                description=DESCRIPTIONS[condition][0],
            ))
        return days
