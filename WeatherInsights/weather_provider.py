"""Weather provider abstraction - allows swapping mock data for real weather APIs."""
from abc import ABC, abstractmethod
from weather_data import WeatherReport


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_by_coordinates(self, lat: float, lon: float) -> WeatherReport:
        """
        Fetch current weather and forecast for a geographic position.

        Args:
            lat: Latitude (-90 to 90)
            lon: Longitude (-180 to 180)

        Returns:
            WeatherReport: Location, current conditions and forecast

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_by_city(self, city: str) -> WeatherReport:
        """
        Fetch current weather and forecast for a city name.

        Args:
            city: Free-text city name (e.g., "London", "New York")

        Returns:
            WeatherReport: Location, current conditions and forecast

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass
