"""Tests for the command line entry point."""
import pytest
from unittest.mock import patch
import main
from mock_provider import MockWeatherProvider
from openweather_provider import OpenWeatherProvider
from weather_provider import WeatherProviderError
from weather_service import POPULAR_CITIES


def test_parse_args_defaults():
    args = main.parse_args([])

    assert args.provider == "mock"
    assert args.city is None
    assert args.width == 72


def test_parse_args_requires_lat_and_lon_together():
    with pytest.raises(SystemExit):
        main.parse_args(["--lat", "1.0"])


def test_load_config_requires_api_key_for_openweather(monkeypatch):
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)
    with patch("main.load_dotenv"):
        with pytest.raises(SystemExit):
            main.load_config("openweather")


def test_load_config_defaults(monkeypatch):
    monkeypatch.delenv("WEATHER_DEFAULT_CITY", raising=False)
    monkeypatch.delenv("WEATHER_LANG", raising=False)
    monkeypatch.setenv("WEATHER_API_KEY", "abc")
    with patch("main.load_dotenv"):
        assert main.load_config("mock") == ("abc", "London", "en")


def test_build_provider():
    args = main.parse_args(["--seed", "3", "--fetch-delay", "0"])
    assert isinstance(main.build_provider(args, None, "en"), MockWeatherProvider)

    args = main.parse_args(["--provider", "openweather", "--timeout", "4"])
    provider = main.build_provider(args, "key", "de")
    assert isinstance(provider, OpenWeatherProvider)
    assert provider.lang == "de"
    assert provider.timeout == 4


def test_run_prints_dashboard(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("WEATHER_DEFAULT_CITY", "London")
    png = tmp_path / "out.png"
    args = main.parse_args([
        "--city", "Paris", "--seed", "5", "--fetch-delay", "0", "--insight-delay", "0",
        "--png", str(png), "--log-file", "",
    ])

    with patch("main.load_dotenv"):
        code = main.run(args)

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.startswith("Paris, Demo")
    assert "Smart Recommendations" in captured.out
    assert "7-Day Forecast" in captured.out
    assert "Weather for Paris loaded successfully." in captured.err
    assert png.exists()


def test_run_reports_unavailable_weather(monkeypatch, capsys):
    args = main.parse_args(["--city", "Paris", "--fetch-delay", "0", "--max-retries", "1", "--retry-delay", "0"])
    failure = WeatherProviderError("Network error")

    with patch("main.load_dotenv"), patch.object(MockWeatherProvider, "get_by_city", side_effect=failure):
        code = main.run(args)

    captured = capsys.readouterr()
    assert code == 1
    assert "WEATHER UNAVAILABLE" in captured.out
    assert "Unable to fetch weather data" in captured.err


@pytest.mark.parametrize("city", ["", "   "])
def test_parse_args_rejects_blank_city(city):
    with pytest.raises(SystemExit):
        main.parse_args(["--city", city])


def test_blank_city_never_reaches_provider():
    with patch.object(MockWeatherProvider, "get_by_city") as mock_get:
        with pytest.raises(SystemExit):
            main.main(["--city", " ", "--log-file", ""])
    mock_get.assert_not_called()


def test_list_cities(capsys):
    args = main.parse_args(["--list-cities"])

    with patch("main.load_config") as mock_config:
        code = main.run(args)

    assert code == 0
    mock_config.assert_not_called()
    assert capsys.readouterr().out.splitlines() == POPULAR_CITIES


def test_popular_cities():
    assert POPULAR_CITIES == [
        "London", "New York", "Tokyo", "Paris", "Sydney", "Dubai", "Singapore", "Los Angeles",
    ]


def test_city_help_suggests_popular_cities(capsys):
    with pytest.raises(SystemExit):
        main.parse_args(["--help"])

    assert "London, New York, Tokyo" in capsys.readouterr().out
