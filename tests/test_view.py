"""Tests for mashup.view module."""

import plotly.graph_objects as go

from mashup.models import Position, WeatherResult, WeatherType
from mashup.view import (
    bing_map_url,
    clean_crime_label,
    crime_chart,
    crime_frame,
    location_lines,
    weather_caption,
    weather_icon,
)


class TestMap:
    def test_bing_url_centres_on_position(self):
        url = bing_map_url(Position(51.5, -0.08))
        assert "cp=51.500000~-0.080000" in url
        assert url.startswith("https://www.bing.com/maps/embed")


class TestCrime:
    def test_clean_label(self):
        assert clean_crime_label("anti-social-behaviour") == "Anti social behaviour"
        assert clean_crime_label("drugs") == "Drugs"
        assert clean_crime_label("") == ""

    def test_frame_keeps_report_order(self, crimes):
        df = crime_frame(crimes)
        assert list(df.columns) == ["Crime", "Incidents"]
        assert list(df["Crime"]) == ["Anti social behaviour", "Violent crime", "Bicycle theft"]
        assert list(df["Incidents"]) == [42, 17, 3]

    def test_empty_frame(self):
        df = crime_frame([])
        assert df.empty
        assert list(df.columns) == ["Crime", "Incidents"]

    def test_chart_is_horizontal_bar(self, crimes):
        fig = crime_chart(crimes)
        assert isinstance(fig, go.Figure)
        bar = fig.data[0]
        assert bar.orientation == "h"
        assert list(bar.x) == [42, 17, 3]


class TestTiles:
    def test_location_lines(self, report):
        assert location_lines(report.location) == ["Shoreditch", "London", "3.4KM to London"]

    def test_weather_caption_rounds(self):
        weather = WeatherResult(WeatherType.LIGHT_RAIN, 11.4567)
        assert weather_caption(weather) == "Light Rain 11.5 °C"

    def test_every_weather_type_has_icon(self):
        for weather_type in WeatherType:
            assert weather_icon(weather_type) != "🌡️"
