"""Tests for weather_data module."""
import pytest
import time
from datetime import date
from weather_data import ForecastDay, Location, WeatherReport, WeatherSnapshot


def test_weather_snapshot_creation():
    """Test creating a snapshot with only the required fields."""
    weather = WeatherSnapshot(
        temperature=20.5,
        condition="clouds",
        humidity=65.0,
        wind_speed=18.7,
    )

    assert weather.temperature == 20.5
    assert weather.condition == "clouds"
    assert weather.humidity == 65.0
    assert weather.wind_speed == 18.7
    assert weather.uv_index is None
    assert weather.pressure is None
    assert weather.description == ""


def test_weather_snapshot_is_stale():
    """Test is_stale() method."""
    old_timestamp = int(time.time()) - 3600
    weather = WeatherSnapshot(
        temperature=20.0,
        condition="clear",
        humidity=60.0,
        wind_speed=5.0,
        timestamp=old_timestamp,
    )

    # Should be stale with default 15-minute threshold
    assert weather.is_stale(max_age_seconds=900) is True

    # Should not be stale with 2-hour threshold
    assert weather.is_stale(max_age_seconds=7200) is False


def test_weather_snapshot_fresh():
    """Test that fresh data is not stale."""
    weather = WeatherSnapshot(
        temperature=20.0,
        condition="clear",
        humidity=60.0,
        wind_speed=5.0,
        timestamp=int(time.time()),
    )

    assert weather.is_stale(max_age_seconds=900) is False


def test_weather_report_defaults_to_empty_forecast():
    report = WeatherReport(
        location=Location(name="Paris", country="FR", lat=48.85, lon=2.35),
        current=WeatherSnapshot(temperature=14, condition="rain", humidity=90, wind_speed=12),
    )

    assert report.forecast == []

    report.forecast.append(ForecastDay(
        date=date(2024, 5, 1), condition="clear", temperature=18, temp_min=11, temp_max=21, humidity=50
    ))
    other = WeatherReport(location=report.location, current=report.current)
    assert other.forecast == []


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="time.tzset() not available on this platform")
@pytest.mark.parametrize("tz", ["UTC", "America/New_York", "Asia/Tokyo"])
def test_fresh_mock_report_is_not_stale_in_any_timezone(monkeypatch, tz):
    """Staleness is measured in epoch seconds, not local wall-clock time."""
    from mock_provider import MockWeatherProvider

    monkeypatch.setenv("TZ", tz)
    time.tzset()
    try:
        report = MockWeatherProvider(seed=1, delay_seconds=0).get_by_city("Paris")
        assert report.current.is_stale(max_age_seconds=900) is False
        assert report.current.age_seconds() < 60
    finally:
        monkeypatch.undo()
        time.tzset()
