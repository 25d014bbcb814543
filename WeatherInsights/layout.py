"""Layout and formatting for the dashboard - pure functions for testability."""
import textwrap
import time
from datetime import date
from typing import List, Optional, Tuple, TYPE_CHECKING

from insight_engine import IconCategory, Insight, round_half_up
from weather_data import ForecastDay, WeatherReport, WeatherSnapshot

if TYPE_CHECKING:
    from dashboard import DashboardState


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs

    def __repr__(self) -> str:
        return f"DrawOp({self.op_type!r}, {self.kwargs!r})"


ICON_MARKERS = {
    IconCategory.UMBRELLA: "(u)",
    IconCategory.SUN: "(s)",
    IconCategory.WIND: "(w)",
    IconCategory.WARNING: "(!)",
    IconCategory.GENERIC: "(*)",
}

THEME_COLORS = {
    "night": (20, 24, 48),
    "sunset": (96, 48, 32),
    "clear": (24, 64, 120),
    "cloudy": (60, 64, 72),
    "rain": (32, 44, 64),
}

TEXT_COLOR = (230, 230, 230)
MUTED_COLOR = (170, 170, 170)
HEADING_COLOR = (140, 200, 255)


def get_temperature_color(temp_c: float) -> Tuple[int, int, int]:
    """
    Get RGB color for temperature using a simple gradient.

    Cold (< 0°C) = blue
    Cool (0-15°C) = cyan
    Mild (15-25°C) = green/yellow
    Warm (25-35°C) = yellow/orange
    Hot (> 35°C) = red

    Args:
        temp_c: Temperature in Celsius

    Returns:
        Tuple of (r, g, b) values (0-255)
    """
    if temp_c < 0:
        return (0, 0, 255)
    elif temp_c < 15:
        ratio = temp_c / 15.0
        return (0, int(255 * ratio), 255)
    elif temp_c < 25:
        ratio = (temp_c - 15) / 10.0
        return (int(255 * ratio), 255, int(255 * (1 - ratio)))
    elif temp_c < 35:
        ratio = (temp_c - 25) / 10.0
        return (255, int(255 * (1 - ratio * 0.5)), 0)
    else:
        ratio = min((temp_c - 35) / 10.0, 1.0)
        return (255, int(255 * (1 - ratio)), 0)


def get_condition_text(condition: str) -> str:
    """
    Get short display text for a condition token.

    Args:
        condition: Provider condition (e.g., "clouds", "Rain")

    Returns:
        Short condition string (e.g., "Cloudy", "Rain", "Clear")
    """
    main = (condition or "").lower()

    condition_map = {
        "clear": "Clear",
        "sunny": "Clear",
        "clouds": "Cloudy",
        "cloudy": "Cloudy",
        "rain": "Rain",
        "drizzle": "Drizzle",
        "thunderstorm": "Storm",
        "snow": "Snow",
        "mist": "Mist",
        "fog": "Fog",
        "haze": "Haze",
    }

    return condition_map.get(main, (condition or "Unknown").capitalize())


def weather_theme(condition: str, hour: int) -> str:
    """Background theme for a condition at a local hour of day."""
    if hour < 6 or hour > 18:
        return "night"

    main = (condition or "").lower()
    if main in ("clear", "sunny"):
        return "sunset" if hour < 8 or hour > 16 else "clear"
    if main in ("clouds", "cloudy"):
        return "cloudy"
    if main in ("rain", "drizzle"):
        return "rain"
    return "clear"


def uv_level(uv_index: float) -> str:
    if uv_index <= 2:
        return "Low"
    if uv_index <= 5:
        return "Moderate"
    if uv_index <= 7:
        return "High"
    return "Very High"


def format_value(value: Optional[float], unit: str) -> str:
    """Round a reading for display, e.g. ``format_value(12.6, " km/h")`` -> "13 km/h"."""
    if value is None:
        return "N/A"
    return f"{round_half_up(value)}{unit}"


def format_temperature(value: Optional[float]) -> str:
    return format_value(value, "°C")


def format_time(timestamp: Optional[int]) -> str:
    if not timestamp:
        return "N/A"
    return time.strftime("%I:%M %p", time.localtime(timestamp))


def format_current_card(report: WeatherReport) -> List[str]:
    current = report.current
    location = report.location.name
    if report.location.country:
        location = f"{location}, {report.location.country}"

    lines = [
        location,
        f"{format_temperature(current.temperature)}  {get_condition_text(current.condition)}"
        + (f" - {current.description}" if current.description else ""),
        f"Feels like {format_temperature(current.feels_like)}",
        f"High: {format_temperature(current.temp_max)}  Low: {format_temperature(current.temp_min)}",
        f"Sunrise: {format_time(current.sunrise)}  Sunset: {format_time(current.sunset)}",
    ]
    if current.uv_index:
        lines.append(f"UV Index: {current.uv_index:g} ({uv_level(current.uv_index)})")
    return lines


def format_details(current: WeatherSnapshot) -> List[Tuple[str, str]]:
    return [
        ("Humidity", format_value(current.humidity, "%")),
        ("Wind Speed", format_value(current.wind_speed, " km/h")),
        ("Pressure", format_value(current.pressure, " hPa")),
        ("Visibility", format_value(current.visibility, " km")),
    ]


def forecast_day_label(day: date, today: date) -> str:
    delta = (day - today).days
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    return day.strftime("%a")


def format_forecast_day(day: ForecastDay, today: date) -> str:
    label = forecast_day_label(day.date, today)
    condition = get_condition_text(day.condition)
    return f"{label:<9}{condition:<8}{round_half_up(day.temp_max)}° / {round_half_up(day.temp_min)}°"


def format_insight(insight: Insight, width: int = 60) -> List[str]:
    lines = textwrap.wrap(insight.summary, width=width) or [""]
    lines.append("Smart Recommendations")
    for rec in insight.recommendations:
        lines.append(f"{ICON_MARKERS[rec.icon_category]} {rec.text}")
    return lines


def calculate_layout(state: "DashboardState", width: int = 64, today: Optional[date] = None) -> List[DrawOp]:
    """
    Calculate layout operations for the dashboard.

    This is a pure function that returns drawing operations,
    making it easy to test without actual rendering.

    Args:
        state: Loaded dashboard state
        width: Canvas width in character cells
        today: Date used for forecast labels (defaults to the local date)

    Returns:
        List of DrawOp objects; text positions are in character cells
    """
    report = state.report
    today = today or date.today()
    ops = [DrawOp("fill", color=THEME_COLORS.get(state.theme, THEME_COLORS["clear"]))]
    row = 0

    def text(line: str, color: Tuple[int, int, int] = TEXT_COLOR, col: int = 0) -> None:
        nonlocal row
        ops.append(DrawOp("text", text=line[:max(width - col, 0)], col=col, row=row, color=color))
        row += 1

    card = format_current_card(report)
    text(card[0], HEADING_COLOR)
    text(card[1], get_temperature_color(report.current.temperature))
    for line in card[2:]:
        text(line, MUTED_COLOR)
    row += 1

    text("AI Weather Insights", HEADING_COLOR)
    for line in format_insight(state.insight, width=max(width - 2, 10)):
        text(line, col=1)
    row += 1

    if report.forecast:
        text(f"{len(report.forecast)}-Day Forecast", HEADING_COLOR)
        for day in report.forecast:
            text(format_forecast_day(day, today), get_temperature_color(day.temperature), col=1)
        row += 1

    for label, value in format_details(report.current):
        text(f"{label:<11}{value}", MUTED_COLOR)

    return ops


def layout_height(ops: List[DrawOp]) -> int:
    """Number of rows needed to draw ``ops``."""
    rows = [op.kwargs["row"] for op in ops if op.op_type == "text"]
    return max(rows) + 1 if rows else 0


def render_ops(canvas, ops: List[DrawOp]) -> None:
    """
    Execute drawing operations on a canvas.

    Args:
        canvas: DashboardCanvas instance (text or image)
        ops: Operations from calculate_layout or status_layout
    """
    canvas.clear()
    for op in ops:
        if op.op_type == "fill":
            canvas.fill(*op.kwargs["color"])
        elif op.op_type == "text":
            canvas.draw_text(op.kwargs["col"], op.kwargs["row"], op.kwargs["text"], *op.kwargs["color"])


def status_layout(message: str, color: Tuple[int, int, int] = (255, 165, 0)) -> List[DrawOp]:
    """Single status line, e.g. while loading or after a fetch error."""
    return [
        DrawOp("fill", color=(0, 0, 0)),
        DrawOp("text", text=message, col=0, row=0, color=color),
    ]
