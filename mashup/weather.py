"""
UK Location Data Mashup — Weather
==================================
Daily forecast for a position from Open-Meteo (free, no API key required),
reduced to the dominant condition and the mean temperature.
"""

import logging
from collections import Counter
from typing import List

from mashup.config import OPEN_METEO_FORECAST, WEATHER_FORECAST_DAYS, WMO_CONDITIONS
from mashup.exceptions import UpstreamError
from mashup.models import Position, WeatherResult, WeatherType
from mashup.upstream import UpstreamClient

logger = logging.getLogger(__name__)


def summarise_weather(entries: List[dict]) -> WeatherResult:
    """
    Most frequent condition across *entries* and their mean temperature.

    Each entry is ``{"condition": <label>, "temperature": <celsius>}``.
    Ties between conditions go to the one seen first.
    Raises ValueError for an empty forecast or an unknown condition label.
    """
    if not entries:
        raise ValueError("Forecast contains no entries")

    conditions = Counter(e["condition"] for e in entries)
    dominant, _ = conditions.most_common(1)[0]

    return WeatherResult(
        weather_type=WeatherType.parse(dominant),
        average_temperature=sum(float(e["temperature"]) for e in entries) / len(entries),
    )


class WeatherLookup(UpstreamClient):
    """Open-Meteo adapter returning one forecast entry per day."""

    source = "weather"

    def __init__(
        self,
        *args,
        url: str = OPEN_METEO_FORECAST,
        forecast_days: int = WEATHER_FORECAST_DAYS,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.url = url
        self.forecast_days = forecast_days

    def get_forecast(self, position: Position) -> List[dict]:
        """
        Daily forecast entries for *position*.

        WMO codes are translated into condition labels here; a code with no
        label, or a day without a temperature, fails the lookup.
        """
        data = self._get_json(
            self.url,
            params={
                "latitude": position.latitude,
                "longitude": position.longitude,
                "daily": "weather_code,temperature_2m_mean",
                "forecast_days": self.forecast_days,
                "timezone": "Europe/London",
            },
        )

        try:
            daily = data["daily"]
            codes = list(daily["weather_code"])
            temperatures = list(daily["temperature_2m_mean"])
        except (KeyError, TypeError) as e:
            raise UpstreamError(self.source, "weather returned a malformed response") from e

        if len(codes) != len(temperatures):
            raise UpstreamError(self.source, "weather forecast is incomplete")

        entries: List[dict] = []
        for code, temperature in zip(codes, temperatures):
            if code is None or temperature is None:
                raise UpstreamError(self.source, "weather forecast is incomplete")
            try:
                wmo_code, celsius = int(code), float(temperature)
            except (TypeError, ValueError) as e:
                raise UpstreamError(self.source, "weather returned a malformed response") from e
            condition = WMO_CONDITIONS.get(wmo_code)
            if condition is None:
                raise UpstreamError(self.source, f"Unknown weather code: {code}")
            entries.append({"condition": condition, "temperature": celsius})

        logger.info("Fetched %d forecast days near %s", len(entries), position)
        return entries

    def get_summary(self, position: Position) -> WeatherResult:
        entries = self.get_forecast(position)
        try:
            return summarise_weather(entries)
        except ValueError as e:
            raise UpstreamError(self.source, str(e)) from e
