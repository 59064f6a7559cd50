"""
UK Location Data Mashup — View Helpers
=======================================
Pure functions turning report pieces into things the dashboard shows:
the map embed URL, the crime chart, and the text of the location and
weather tiles.
"""

from typing import List, Sequence

import pandas as pd
import plotly.graph_objects as go

from mashup.models import CrimeEntry, LocationResult, Position, WeatherResult, WeatherType

BING_MAP_EMBED = (
    "https://www.bing.com/maps/embed?h=400&w=800&cp={lat:f}~{lng:f}&lvl=11&typ=s&FORM=MBEDV8"
)

WEATHER_ICONS = {
    "sn": "🌨️",
    "sl": "🌨️",
    "h": "🧊",
    "t": "⛈️",
    "hr": "🌧️",
    "lr": "🌦️",
    "s": "🌦️",
    "hc": "☁️",
    "lc": "⛅",
    "c": "☀️",
}


def bing_map_url(position: Position) -> str:
    return BING_MAP_EMBED.format(lat=position.latitude, lng=position.longitude)


def clean_crime_label(label: str) -> str:
    """'anti-social-behaviour' → 'Anti social behaviour'."""
    if not label:
        return label
    return label[0].upper() + label[1:].replace("-", " ")


def crime_frame(crimes: Sequence[CrimeEntry]) -> pd.DataFrame:
    """Crime entries as a two-column frame, in report order."""
    return pd.DataFrame(
        [{"Crime": clean_crime_label(c.crime), "Incidents": c.incidents} for c in crimes],
        columns=["Crime", "Incidents"],
    )


def crime_chart(crimes: Sequence[CrimeEntry]) -> go.Figure:
    """Horizontal bar chart of incidents per category, largest on top."""
    df = crime_frame(crimes)

    fig = go.Figure(data=[
        go.Bar(
            x=df["Incidents"],
            y=df["Crime"],
            orientation="h",
            text=df["Incidents"],
            textposition="outside",
        )
    ])

    fig.update_layout(
        title="Crime",
        xaxis_title="Incidents",
        yaxis=dict(type="category", autorange="reversed"),
        height=500,
    )

    return fig


def location_lines(result: LocationResult) -> List[str]:
    return [
        result.location.town,
        result.location.region,
        f"{result.distance_to_london:.1f}KM to London",
    ]


def weather_icon(weather_type: WeatherType) -> str:
    return WEATHER_ICONS.get(weather_type.abbreviation, "🌡️")


def weather_caption(weather: WeatherResult) -> str:
    return f"{weather.weather_type.label} {round(weather.average_temperature, 1)} °C"
