"""Weather service with caching, retries and a default-city fallback."""
import logging
import time
from typing import Callable, Dict, Hashable, Optional, Tuple
from weather_provider import WeatherProviderBase, WeatherProviderError
from weather_data import WeatherReport

DEFAULT_CITY = "London"
# Quick picks offered next to the free-text city search
POPULAR_CITIES = [
    "London", "New York", "Tokyo", "Paris", "Sydney", "Dubai", "Singapore", "Los Angeles",
]


class WeatherService:
    """
    Service that wraps a weather provider with caching and rate limiting.

    Prevents hammering the API by caching results per query and only fetching
    new data when the cache is stale (default: 10 minutes).
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        default_city: str = DEFAULT_CITY,
        cache_ttl_seconds: int = 600,  # 10 minutes default
        max_retries: int = 3,
        retry_delay_seconds: float = 1.0
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to use
            default_city: City queried when a location lookup is impossible
            cache_ttl_seconds: How long to cache results before fetching new data
            max_retries: Maximum number of retries on transient errors
            retry_delay_seconds: Delay between retries
        """
        self.provider = provider
        self.default_city = default_city
        self.cache_ttl_seconds = cache_ttl_seconds
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds

        self._cache: Dict[Hashable, Tuple[WeatherReport, float]] = {}

    def get_by_city(self, city: str) -> WeatherReport:
        key = ("city", city.strip().lower())
        return self._get(key, lambda: self.provider.get_by_city(city), city)

    def get_by_coordinates(self, lat: float, lon: float) -> WeatherReport:
        key = ("coords", round(lat, 4), round(lon, 4))
        return self._get(key, lambda: self.provider.get_by_coordinates(lat, lon), f"({lat}, {lon})")

    def locate(self, lat: Optional[float] = None, lon: Optional[float] = None) -> WeatherReport:
        """
        Get weather for the user's position, falling back to the default city.

        Args:
            lat: Latitude, or None when the position is unknown
            lon: Longitude, or None when the position is unknown

        Raises:
            WeatherProviderError: If the default city lookup fails too
        """
        if lat is not None and lon is not None:
            try:
                return self.get_by_coordinates(lat, lon)
            except WeatherProviderError as e:
                logging.warning(f"Location lookup failed ({e}), falling back to {self.default_city}")
        else:
            logging.info(f"No position available, using default city {self.default_city}")
        return self.get_by_city(self.default_city)

    def _get(self, key: Hashable, fetch: Callable[[], WeatherReport], label: str) -> WeatherReport:
        """
        Get the latest weather data for a query, using cache if still fresh.

        Returns:
            WeatherReport: Latest weather data (may be cached)

        Raises:
            WeatherProviderError: If all retries fail and no cache exists
        """
        current_time = time.time()
        cached = self._cache.get(key)

        # Check if cache is still valid
        if cached is not None:
            cache_age = current_time - cached[1]
            if cache_age < self.cache_ttl_seconds:
                logging.debug(f"Using cached weather for {label} (age: {cache_age:.1f}s, TTL: {self.cache_ttl_seconds}s)")
                return cached[0]
            logging.info(f"Cache expired for {label} (age: {cache_age:.1f}s > TTL: {self.cache_ttl_seconds}s), fetching new data")

        logging.info(f"Fetching weather data for {label}...")
        last_error = None
        for attempt in range(self.max_retries):
            try:
                logging.debug(f"Weather fetch attempt {attempt + 1}/{self.max_retries}")
                report = fetch()
                logging.info(
                    f"Weather fetch successful: {report.location.name} "
                    f"{report.current.temperature}°C, {report.current.condition}"
                )
                if report.current.timestamp and report.current.is_stale(self.cache_ttl_seconds):
                    logging.warning(
                        f"Provider returned an old observation for {label} "
                        f"(age: {report.current.age_seconds():.0f}s)"
                    )
                self._cache[key] = (report, current_time)
                return report
            except WeatherProviderError as e:
                last_error = e
                logging.warning(f"Weather fetch attempt {attempt + 1} failed: {e}")
                # Don't retry on 4xx errors (bad request, auth, unknown city)
                if "401" in str(e) or "400" in str(e) or "404" in str(e):
                    logging.error("Non-retryable error (4xx), stopping retries")
                    break
                if attempt < self.max_retries - 1:
                    retry_delay = self.retry_delay_seconds * (attempt + 1)
                    logging.info(f"Retrying in {retry_delay}s...")
                    time.sleep(retry_delay)

        if cached is not None:
            cache_age = current_time - cached[1]
            logging.warning(f"All retries failed, using stale cache for {label} (age: {cache_age:.1f}s)")
            return cached[0]

        logging.error(f"Failed to fetch weather for {label} after {self.max_retries} attempts, no cache available")
        raise WeatherProviderError(
            f"Failed to fetch weather after {self.max_retries} attempts: {last_error}"
        )
