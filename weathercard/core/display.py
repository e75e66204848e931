"""Maps a weather description to the icon and card colour shown for it."""

from typing import NamedTuple, Tuple


class WeatherStyle(NamedTuple):
    icon_id: str
    emoji: str
    color: str


DEFAULT_STYLE = WeatherStyle("xue", "🌡️", "#2196F3")

# Checked in order; the first keyword found in the description wins.
STYLE_RULES: Tuple[Tuple[Tuple[str, ...], WeatherStyle], ...] = (
    (("晴", "sun", "clear"), WeatherStyle("qing", "☀️", "#FFD700")),
    (("多云", "cloud"), WeatherStyle("duoyun", "⛅", "#87CEEB")),
    (("阴", "overcast"), WeatherStyle("yin", "☁️", "#778899")),
    (("雨", "rain", "shower"), WeatherStyle("yu", "🌧️", "#4682B4")),
    (("雪", "snow"), WeatherStyle("xue", "❄️", "#F0F8FF")),
)


def weather_style(description: str) -> WeatherStyle:
    """Returns the style for `description`, falling back to DEFAULT_STYLE."""
    text = (description or "").lower()
    for keywords, style in STYLE_RULES:
        if any(keyword in text for keyword in keywords):
            return style
    return DEFAULT_STYLE


def weather_icon(description: str) -> str:
    return weather_style(description).icon_id


def weather_color(description: str) -> str:
    return weather_style(description).color
