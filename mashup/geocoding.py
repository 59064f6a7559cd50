"""
UK Location Data Mashup — Geocoding Service
============================================
Single-postcode geocoding using postcodes.io (free, no API key required)
and the great-circle distance from the result to central London.
"""

import logging
import math
from urllib.parse import quote

from mashup.config import EARTH_RADIUS_KM, LONDON, POSTCODES_IO_SINGLE
from mashup.exceptions import UpstreamError
from mashup.models import Location, Position
from mashup.upstream import UpstreamClient

logger = logging.getLogger(__name__)


def haversine(a: Position, b: Position) -> float:
    """Haversine distance in km between two lat/lng points."""
    d_lat = math.radians(b.latitude - a.latitude)
    d_lon = math.radians(b.longitude - a.longitude)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.latitude))
        * math.cos(math.radians(b.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_to_london(position: Position) -> float:
    """Great-circle distance in km from *position* to central London."""
    return haversine(position, LONDON)


class PostcodeLookup(UpstreamClient):
    """postcodes.io adapter resolving a postcode to town, region and position."""

    source = "geolocation"

    def __init__(self, *args, url_template: str = POSTCODES_IO_SINGLE, **kwargs):
        super().__init__(*args, **kwargs)
        self.url_template = url_template

    def get_location(self, postcode: str) -> Location:
        """
        Geocode a single postcode.

        Raises UpstreamError if the service fails or does not know the
        postcode.
        """
        url = self.url_template.format(postcode=quote(postcode))
        data = self._get_json(url)

        r = data.get("result") if isinstance(data, dict) else None
        if not r:
            raise UpstreamError(self.source, f"No location found for '{postcode}'")
        try:
            position = Position(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(
                self.source, f"No coordinates available for '{postcode}'"
            ) from e

        location = Location(
            town=r.get("admin_district") or r.get("parish") or "",
            # Scottish and Welsh postcodes carry no English region
            region=r.get("region") or r.get("country") or "",
            position=position,
        )
        logger.info("Geocoded %s → %s, %s", postcode, location.town, location.region)
        return location
