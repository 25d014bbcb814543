"""Weather insights dashboard - command line entry point."""
import argparse
import asyncio
import logging
import os
import sys
from typing import Optional, Tuple

from dotenv import load_dotenv

from dashboard import Dashboard
from dashboard_canvas import PILCanvas, TextCanvas
from insight_task import DEFAULT_INSIGHT_DELAY, InsightScheduler
from layout import calculate_layout, layout_height, render_ops, status_layout
from mock_provider import MockWeatherProvider
from openweather_provider import OpenWeatherProvider
from weather_provider import WeatherProviderBase
from weather_service import DEFAULT_CITY, POPULAR_CITIES, WeatherService

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-insights.log")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Weather insights dashboard")
    parser.add_argument(
        "--city",
        help=f"City to look up, e.g. {', '.join(POPULAR_CITIES[:3])} (default: use --lat/--lon or the default city)",
    )
    parser.add_argument("--list-cities", action="store_true", help="Print popular cities and exit")
    parser.add_argument("--lat", type=float)
    parser.add_argument("--lon", type=float)
    parser.add_argument("--provider", choices=["mock", "openweather"], default="mock")
    parser.add_argument("--seed", type=int, help="Random seed for the mock provider")
    parser.add_argument("--fetch-delay", type=float, default=1.0, help="Simulated mock fetch latency in seconds")
    parser.add_argument("--insight-delay", type=float, default=DEFAULT_INSIGHT_DELAY)
    parser.add_argument("--width", type=int, default=72, help="Dashboard width in characters")
    parser.add_argument("--png", help="Also render the dashboard to this PNG file")
    parser.add_argument("--scale", type=int, default=1, help="PNG scale factor")
    parser.add_argument("--cache-ttl", type=int, default=600)
    parser.add_argument("--max-retries", type=int, default=3)
    parser.add_argument("--retry-delay", type=float, default=2.0)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    if args.city is not None and not args.city.strip():
        parser.error("--city must not be blank (see --list-cities)")
    return args


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    # Keep stdout for the dashboard itself
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def load_config(provider: str) -> Tuple[Optional[str], str, str]:
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    default_city = os.getenv("WEATHER_DEFAULT_CITY", DEFAULT_CITY)
    lang = os.getenv("WEATHER_LANG", "en")

    if provider == "openweather" and not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    if not default_city.strip():
        raise SystemExit("WEATHER_DEFAULT_CITY must not be empty")

    logging.info(f"Configuration loaded: provider={provider} default_city={default_city} lang={lang}")
    return api_key, default_city, lang


def build_provider(args: argparse.Namespace, api_key: Optional[str], lang: str) -> WeatherProviderBase:
    if args.provider == "openweather":
        return OpenWeatherProvider(api_key=api_key, units="metric", lang=lang, timeout=args.timeout)
    return MockWeatherProvider(seed=args.seed, delay_seconds=args.fetch_delay)


def build_dashboard(args: argparse.Namespace, provider: WeatherProviderBase, default_city: str) -> Dashboard:
    service = WeatherService(
        provider=provider,
        default_city=default_city,
        cache_ttl_seconds=args.cache_ttl,
        max_retries=args.max_retries,
        retry_delay_seconds=args.retry_delay,
    )
    logging.info(f"Weather service ready (cache ttl={args.cache_ttl}s)")
    return Dashboard(service, InsightScheduler(delay_seconds=args.insight_delay))


def render(args: argparse.Namespace, ops) -> str:
    height = max(layout_height(ops), 1)
    canvas = TextCanvas(width=args.width, height=height)
    render_ops(canvas, ops)

    if args.png:
        image = PILCanvas(width=args.width, height=height, scale=args.scale)
        render_ops(image, ops)
        image.save(args.png)
        logging.info(f"Dashboard image written to {args.png}")

    return canvas.to_text()


def run(args: argparse.Namespace) -> int:
    if args.list_cities:
        print("\n".join(POPULAR_CITIES))
        return 0

    api_key, default_city, lang = load_config(args.provider)
    provider = build_provider(args, api_key, lang)
    dashboard = build_dashboard(args, provider, default_city)

    state = asyncio.run(dashboard.load(city=args.city, lat=args.lat, lon=args.lon))

    for note in dashboard.notifications:
        print(f"[{note.title}] {note.message}", file=sys.stderr)

    if state is None:
        print(render(args, status_layout("WEATHER UNAVAILABLE", (255, 0, 0))))
        return 1

    current = state.report.current
    logging.info(
        f"Weather: {state.report.location.name} temp={current.temperature} condition={current.condition} "
        f"humidity={current.humidity} wind={current.wind_speed} uv={current.uv_index}"
    )
    print(render(args, calculate_layout(state, width=args.width)))
    return 0


def main(argv=None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        code = run(args)
    except KeyboardInterrupt:
        logging.info("Interrupted")
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
