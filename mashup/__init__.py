"""mashup — Location, crime and weather report for a UK postcode."""

from mashup.exceptions import (
    MashupAPIError,
    MashupError,
    PostcodeInvalid,
    UpstreamError,
)
from mashup.models import (
    CrimeEntry,
    Location,
    LocationResult,
    Position,
    Report,
    WeatherResult,
    WeatherType,
)
from mashup.validation import is_valid_postcode

__all__ = [
    "CrimeEntry",
    "Location",
    "LocationResult",
    "Position",
    "Report",
    "WeatherResult",
    "WeatherType",
    "MashupError",
    "PostcodeInvalid",
    "UpstreamError",
    "MashupAPIError",
    "is_valid_postcode",
]
