"""
UK Location Data Mashup — Data Models
======================================
Dataclass definitions for everything that crosses the wire between the
upstream adapters, the API and the client. ``to_dict`` produces the JSON
shape served by the API and ``from_dict`` rebuilds the model on the client.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class WeatherType(Enum):
    """Dominant weather condition, with the abbreviation used for icons."""

    SNOW = ("Snow", "sn")
    SLEET = ("Sleet", "sl")
    HAIL = ("Hail", "h")
    THUNDERSTORM = ("Thunderstorm", "t")
    HEAVY_RAIN = ("Heavy Rain", "hr")
    LIGHT_RAIN = ("Light Rain", "lr")
    SHOWERS = ("Showers", "s")
    HEAVY_CLOUD = ("Heavy Cloud", "hc")
    LIGHT_CLOUD = ("Light Cloud", "lc")
    CLEAR = ("Clear", "c")

    def __init__(self, label: str, abbreviation: str):
        self.label = label
        self.abbreviation = abbreviation

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, label: str) -> WeatherType:
        """
        Look up a condition by its label, e.g. 'Heavy Rain' or 'heavyrain'.

        Raises ValueError for labels outside the fixed vocabulary.
        """
        key = "".join(str(label).split()).lower()
        for member in cls:
            if member.label.replace(" ", "").lower() == key:
                return member
        raise ValueError(f"Unknown weather type: '{label}'")


@dataclass(frozen=True)
class Position:
    """A WGS84 latitude/longitude pair in degrees."""
    latitude: float
    longitude: float

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, d: dict) -> Position:
        return cls(latitude=float(d["latitude"]), longitude=float(d["longitude"]))


@dataclass(frozen=True)
class Location:
    """Geocoded postcode: where it is and what it is called."""
    town: str
    region: str
    position: Position

    def to_dict(self) -> dict:
        return {
            "town": self.town,
            "region": self.region,
            "position": self.position.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> Location:
        return cls(
            town=d.get("town", ""),
            region=d.get("region", ""),
            position=Position.from_dict(d["position"]),
        )


@dataclass(frozen=True)
class LocationResult:
    """Location lookup plus the great-circle distance to London."""
    postcode: str
    location: Location
    distance_to_london: float    # kilometres

    def to_dict(self) -> dict:
        return {
            "postcode": self.postcode,
            "location": self.location.to_dict(),
            "distanceToLondon": self.distance_to_london,
        }

    @classmethod
    def from_dict(cls, d: dict) -> LocationResult:
        return cls(
            postcode=d.get("postcode", ""),
            location=Location.from_dict(d["location"]),
            distance_to_london=float(d["distanceToLondon"]),
        )


@dataclass(frozen=True)
class CrimeEntry:
    """Number of incidents recorded for one crime category."""
    crime: str                   # police.uk category slug, e.g. "anti-social-behaviour"
    incidents: int

    def to_dict(self) -> dict:
        return {"crime": self.crime, "incidents": self.incidents}

    @classmethod
    def from_dict(cls, d: dict) -> CrimeEntry:
        return cls(crime=d["crime"], incidents=int(d["incidents"]))


@dataclass(frozen=True)
class WeatherResult:
    """Forecast summary: most common condition and mean temperature."""
    weather_type: WeatherType
    average_temperature: float   # Celsius

    def to_dict(self) -> dict:
        return {
            "weatherType": self.weather_type.label,
            "averageTemperature": self.average_temperature,
        }

    @classmethod
    def from_dict(cls, d: dict) -> WeatherResult:
        return cls(
            weather_type=WeatherType.parse(d["weatherType"]),
            average_temperature=float(d["averageTemperature"]),
        )


@dataclass(frozen=True)
class Report:
    """
    The merged result of the three lookups for one postcode.

    Location and weather are always present. Crimes may be empty, either
    because the crime lookup failed or because nothing was recorded.
    """
    location: LocationResult
    weather: WeatherResult
    crimes: tuple[CrimeEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "location": self.location.to_dict(),
            "crimes": [c.to_dict() for c in self.crimes],
            "weather": self.weather.to_dict(),
        }

    @classmethod
    def from_dict(cls, d: dict) -> Report:
        return cls(
            location=LocationResult.from_dict(d["location"]),
            crimes=tuple(CrimeEntry.from_dict(c) for c in d.get("crimes") or []),
            weather=WeatherResult.from_dict(d["weather"]),
        )
