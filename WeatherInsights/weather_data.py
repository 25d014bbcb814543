"""Weather domain model - pure data structures independent of any API."""
import time
from dataclasses import dataclass, field
from typing import List, Optional
from datetime import date


@dataclass
class WeatherSnapshot:
    """Current conditions for one location at one point in time."""
    temperature: float  # Celsius
    condition: str  # e.g., "clear", "clouds", "rain", "snow"
    humidity: float  # percent
    wind_speed: float  # km/h
    uv_index: Optional[float] = None

    # Display-only fields
    description: str = ""  # e.g., "light rain", "scattered clouds"
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[float] = None  # hPa
    wind_direction: Optional[float] = None  # degrees
    visibility: Optional[float] = None  # km
    sunrise: Optional[int] = None  # UNIX timestamp (UTC)
    sunset: Optional[int] = None  # UNIX timestamp (UTC)
    timestamp: int = 0  # UNIX timestamp (UTC)

    def age_seconds(self) -> float:
        """Seconds since the observation was taken."""
        return time.time() - self.timestamp

    def is_stale(self, max_age_seconds: int = 900) -> bool:
        """Check if this data is stale (older than max_age_seconds)."""
        return self.age_seconds() > max_age_seconds


@dataclass
class ForecastDay:
    """One day of the multi-day forecast."""
    date: date
    condition: str
    temperature: float
    temp_min: float
    temp_max: float
    humidity: float
    description: str = ""


@dataclass
class Location:
    name: str
    country: str
    lat: float
    lon: float


@dataclass
class WeatherReport:
    """Everything a provider returns for a single lookup."""
    location: Location
    current: WeatherSnapshot
    forecast: List[ForecastDay] = field(default_factory=list)
