"""
UK Location Data Mashup — Report Aggregation
=============================================
Builds the combined report for a postcode from the three upstream lookups.

The postcode is geocoded first because both the crime and the weather
lookups are keyed on its position. Those two then run concurrently and
are joined before the report is merged:

  - geolocation or weather failure fails the whole report (UpstreamError)
  - crime failure degrades to an empty crime list
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from mashup import validation
from mashup.crime import CrimeLookup
from mashup.geocoding import PostcodeLookup, distance_to_london
from mashup.models import CrimeEntry, LocationResult, Report, WeatherResult
from mashup.weather import WeatherLookup

logger = logging.getLogger(__name__)


class ReportBuilder:
    """
    Aggregates geolocation, crime and weather lookups into a Report.

    Lookups default to the live postcodes.io, data.police.uk and
    Open-Meteo adapters; pass substitutes to point elsewhere.
    """

    def __init__(
        self,
        geolocation: Optional[PostcodeLookup] = None,
        crime: Optional[CrimeLookup] = None,
        weather: Optional[WeatherLookup] = None,
    ):
        self.geolocation = geolocation or PostcodeLookup()
        self.crime = crime or CrimeLookup()
        self.weather = weather or WeatherLookup()

    # ── Public API ────────────────────────────────────────────────

    def build(self, postcode: str) -> Report:
        """
        Resolve *postcode* into a full Report.

        Raises PostcodeInvalid before any upstream call if the postcode is
        malformed, and UpstreamError if geolocation or weather fails.
        """
        location = self.locate(postcode)
        position = location.location.position

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="report") as pool:
            weather_future = pool.submit(self.weather.get_summary, position)
            crime_future = pool.submit(self.crime.get_summary, position)

            try:
                crimes = crime_future.result()
            except Exception as exc:
                logger.warning(
                    "Crime lookup failed for %s, continuing without crimes: %s",
                    location.postcode, exc,
                )
                crimes = []

            weather = weather_future.result()

        report = Report(location=location, weather=weather, crimes=tuple(crimes))
        logger.info(
            "Built report for %s: %d crime categories, %s",
            location.postcode, len(report.crimes), weather.weather_type,
        )
        return report

    def locate(self, postcode: str) -> LocationResult:
        """Geocode *postcode* and measure its distance to London."""
        canonical = validation.normalise(postcode)
        location = self.geolocation.get_location(canonical)
        return LocationResult(
            postcode=canonical,
            location=location,
            distance_to_london=distance_to_london(location.position),
        )

    def crimes(self, postcode: str) -> List[CrimeEntry]:
        """Crime summary for *postcode*. Failures propagate."""
        location = self.locate(postcode)
        return self.crime.get_summary(location.location.position)

    def weather_for(self, postcode: str) -> WeatherResult:
        """Weather summary for *postcode*."""
        location = self.locate(postcode)
        return self.weather.get_summary(location.location.position)

    def close(self) -> None:
        for lookup in (self.geolocation, self.crime, self.weather):
            close = getattr(lookup, "close", None)
            if close is not None:
                close()
