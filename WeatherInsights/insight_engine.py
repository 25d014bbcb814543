"""Weather insight rules - turns a snapshot into a summary and recommendations.

Everything here is a pure function of the snapshot so it can be tested
without a provider, a clock or a display.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from weather_data import WeatherSnapshot

MAX_RECOMMENDATIONS = 4
FALLBACK_RECOMMENDATION = "Enjoy the pleasant weather conditions"


class IconCategory(Enum):
    """Icon shown next to a recommendation."""
    UMBRELLA = "umbrella"
    SUN = "sun"
    WIND = "wind"
    WARNING = "warning"
    GENERIC = "generic"


@dataclass(frozen=True)
class Recommendation:
    text: str
    icon_category: IconCategory


@dataclass(frozen=True)
class Insight:
    summary: str
    recommendations: Tuple[Recommendation, ...]

    @property
    def texts(self) -> List[str]:
        return [rec.text for rec in self.recommendations]


Predicate = Callable[[WeatherSnapshot], bool]


def round_half_up(value: float):
    """Round .5 towards +infinity, so -2.5 becomes -2 and 2.5 becomes 3."""
    if not math.isfinite(value):
        return value
    return int(math.floor(value + 0.5))


def _condition(snapshot: WeatherSnapshot) -> str:
    return (snapshot.condition or "").lower()


def _uv(snapshot: WeatherSnapshot) -> float:
    return snapshot.uv_index or 0


# Temperature bands, checked top to bottom. Each band's upper bound is exclusive.
TEMPERATURE_BANDS: List[Tuple[Optional[float], str]] = [
    (0, "It's freezing cold at {t}°C. Bundle up in layers and watch for icy conditions."),
    (10, "Chilly weather at {t}°C. You'll want a warm jacket when heading out."),
    (20, "Cool and comfortable at {t}°C. Perfect weather for a light jacket or sweater."),
    (30, "Pleasant {t}°C weather. Great conditions for outdoor activities."),
    (None, "Hot day at {t}°C. Stay hydrated and seek shade during peak hours."),
]

CONDITION_CLAUSES: List[Tuple[Tuple[str, ...], str]] = [
    (("rain",), "Rain is expected, so keep an umbrella handy."),
    (("cloud",), "Cloudy skies provide natural shade today."),
    (("clear", "sun"), "Clear skies make it a beautiful day to be outside."),
]

RECOMMENDATION_RULES: List[Tuple[Predicate, Tuple[str, str]]] = [
    (lambda s: "rain" in _condition(s),
     ("Carry an umbrella or raincoat", "Allow extra time for travel")),
    (lambda s: _uv(s) > 6,
     ("Apply sunscreen (SPF 30+)", "Wear sunglasses and a hat")),
    (lambda s: s.temperature > 25,
     ("Stay hydrated - drink plenty of water", "Wear light, breathable clothing")),
    (lambda s: s.temperature < 5,
     ("Dress in warm layers", "Cover exposed skin to prevent frostbite")),
    (lambda s: s.wind_speed > 20,
     ("Secure loose items outdoors", "Be cautious when driving")),
    (lambda s: s.humidity > 80,
     ("Expect muggy conditions", "Choose moisture-wicking fabrics")),
    (lambda s: s.humidity < 30,
     ("Use moisturizer for dry skin", "Stay hydrated to combat dry air")),
]

# First match wins; a line mentioning both rain and wind is an umbrella.
ICON_KEYWORDS: List[Tuple[Tuple[str, ...], IconCategory]] = [
    (("umbrella", "rain"), IconCategory.UMBRELLA),
    (("sun", "hat"), IconCategory.SUN),
    (("wind", "secure"), IconCategory.WIND),
    (("caution", "careful"), IconCategory.WARNING),
]


def temperature_fragment(temperature: float) -> str:
    rounded = round_half_up(temperature)
    for upper, template in TEMPERATURE_BANDS[:-1]:
        if temperature < upper:
            return template.format(t=rounded)
    return TEMPERATURE_BANDS[-1][1].format(t=rounded)


def condition_clause(condition: str) -> Optional[str]:
    condition = (condition or "").lower()
    for keywords, clause in CONDITION_CLAUSES:
        if any(keyword in condition for keyword in keywords):
            return clause
    return None


def summarize(snapshot: WeatherSnapshot) -> str:
    """Build the one or two sentence summary for a snapshot."""
    summary = temperature_fragment(snapshot.temperature)
    clause = condition_clause(snapshot.condition)
    if clause:
        summary = f"{summary} {clause}"
    return summary


def classify_icon(text: str) -> IconCategory:
    lowered = text.lower()
    for keywords, category in ICON_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return IconCategory.GENERIC


def recommend(snapshot: WeatherSnapshot, limit: int = MAX_RECOMMENDATIONS) -> List[str]:
    """
    Collect advice lines from every rule that fires, in rule order.

    Args:
        snapshot: Weather snapshot to evaluate
        limit: Maximum number of lines to keep

    Returns:
        The first ``limit`` lines, or the single fallback line if no rule fired
    """
    lines: List[str] = []
    for predicate, advice in RECOMMENDATION_RULES:
        if predicate(snapshot):
            lines.extend(advice)

    if not lines:
        return [FALLBACK_RECOMMENDATION]
    return lines[:limit]


def derive_insight(snapshot: WeatherSnapshot) -> Insight:
    """
    Map a weather snapshot to its summary and recommendations.

    Never raises for numeric input and does not modify the snapshot.
    """
    recommendations = tuple(
        Recommendation(text=text, icon_category=classify_icon(text))
        for text in recommend(snapshot)
    )
    return Insight(summary=summarize(snapshot), recommendations=recommendations)
