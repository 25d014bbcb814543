"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from typing import Any, Dict
from weather_provider import WeatherProviderBase, WeatherProviderError
from weather_data import Location, WeatherReport, WeatherSnapshot

MS_TO_KMH = 3.6


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    The free tier has no daily forecast, so reports carry an empty forecast.
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        lang: str = "en",
        timeout: int = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_by_coordinates(self, lat: float, lon: float) -> WeatherReport:
        return self._fetch({"lat": lat, "lon": lon})

    def get_by_city(self, city: str) -> WeatherReport:
        if not city or not city.strip():
            raise WeatherProviderError("City name must not be empty")
        return self._fetch({"q": city.strip()})

    def _fetch(self, query: Dict[str, Any]) -> WeatherReport:
        """
        Fetch current weather from OpenWeather Current Weather API.

        Returns:
            WeatherReport: Current weather information

        Raises:
            WeatherProviderError: If the API request fails
        """
        params = dict(query)
        params.update({
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        })

        try:
            logging.info(f"Making OpenWeather API request: {self.BASE_URL}")
            logging.debug(f"Request parameters: {query}, units={self.units}, lang={self.lang}")

            response = requests.get(self.BASE_URL, params=params, timeout=self.timeout)

            logging.info(f"API response status: {response.status_code}")

            if not response.ok:
                logging.error(f"API request failed with status {response.status_code}")
                self._handle_error_response(response)

            data = response.json()
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            report = self._parse(data)
            logging.info(
                f"Successfully parsed weather data: {report.current.temperature}°C, {report.current.condition}"
            )
            return report

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise WeatherProviderError(f"Network error: {str(e)}") from e
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {str(e)}") from e

    def _parse(self, data: Dict[str, Any]) -> WeatherReport:
        weather_array = data.get("weather", [])
        if not weather_array:
            raise WeatherProviderError("Response missing 'weather' array")
        weather = weather_array[0]

        main_data = data.get("main", {})
        if not main_data:
            raise WeatherProviderError("Response missing 'main' block")

        wind_data = data.get("wind") or {}
        sys_data = data.get("sys") or {}
        coord = data.get("coord") or {}

        visibility = data.get("visibility")
        if visibility is not None:
            visibility = visibility / 1000  # m -> km

        current = WeatherSnapshot(
            temperature=main_data["temp"],
            condition=weather.get("main", "Unknown"),
            humidity=main_data.get("humidity", 0.0),
            wind_speed=wind_data.get("speed", 0.0) * MS_TO_KMH,
            uv_index=data.get("uvi"),
            description=weather.get("description", ""),
            feels_like=main_data.get("feels_like"),
            temp_min=main_data.get("temp_min"),
            temp_max=main_data.get("temp_max"),
            pressure=main_data.get("pressure"),
            wind_direction=wind_data.get("deg"),
            visibility=visibility,
            sunrise=sys_data.get("sunrise"),
            sunset=sys_data.get("sunset"),
            timestamp=data.get("dt", 0),
        )
        location = Location(
            name=data.get("name", ""),
            country=sys_data.get("country", ""),
            lat=coord.get("lat", 0.0),
            lon=coord.get("lon", 0.0),
        )
        return WeatherReport(location=location, current=current, forecast=[])

    def _handle_error_response(self, response: requests.Response) -> None:
        """Parse and raise error from OpenWeather error response."""
        try:
            error_data = response.json()
        except ValueError:
            # Not JSON, use HTTP status
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherProviderError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        cod = error_data.get("cod", response.status_code)
        message = error_data.get("message", "Unknown error")
        logging.error(f"OpenWeather API error response: {error_data}")
        raise WeatherProviderError(f"OpenWeather API error {cod}: {message}")
