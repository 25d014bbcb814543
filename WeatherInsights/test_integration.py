"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from insight_engine import derive_insight
from openweather_provider import OpenWeatherProvider
from weather_service import WeatherService


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    provider = OpenWeatherProvider(api_key=os.environ["OPENWEATHER_API_KEY"], units="metric")

    report = provider.get_by_coordinates(33.44, -94.04)

    assert report.current.temperature is not None
    assert report.current.condition
    assert report.current.timestamp > 0
    assert derive_insight(report.current).summary


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_weather_service_integration():
    """Integration test for WeatherService with real API."""
    provider = OpenWeatherProvider(api_key=os.environ["OPENWEATHER_API_KEY"], units="metric")
    service = WeatherService(provider, cache_ttl_seconds=60)

    report1 = service.get_by_city("London")
    assert report1.current.temperature is not None

    # Second call should use cache
    report2 = service.get_by_city("London")
    assert report2 is report1
