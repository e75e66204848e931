"""Tests for the description to icon/colour mapping."""

import pytest

from weathercard.core.display import (
    DEFAULT_STYLE,
    weather_color,
    weather_icon,
    weather_style,
)


@pytest.mark.parametrize(
    "description, icon, color",
    [
        ("晴", "qing", "#FFD700"),
        ("多云", "duoyun", "#87CEEB"),
        ("阴", "yin", "#778899"),
        ("小雨", "yu", "#4682B4"),
        ("大雪", "xue", "#F0F8FF"),
        ("Sunny", "qing", "#FFD700"),
        ("Partly Cloudy", "duoyun", "#87CEEB"),
        ("Light rain", "yu", "#4682B4"),
    ],
)
def test_known_descriptions(description, icon, color):
    assert weather_icon(description) == icon
    assert weather_color(description) == color


def test_first_rule_wins():
    # "晴转多云" mentions both clear and cloudy
    assert weather_icon("晴转多云") == "qing"
    assert weather_icon("多云转阴") == "duoyun"
    assert weather_icon("阴转小雨") == "yin"


@pytest.mark.parametrize("description", ["雾", "", "Haze", None])
def test_unmatched_gets_default(description):
    assert weather_style(description) == DEFAULT_STYLE
    assert weather_color(description) == "#2196F3"
