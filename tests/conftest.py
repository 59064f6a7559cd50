"""Shared test fixtures — fake HTTP sessions and upstream lookups."""

import pytest
import requests

from mashup.exceptions import UpstreamError
from mashup.models import (
    CrimeEntry,
    Location,
    LocationResult,
    Position,
    Report,
    WeatherResult,
    WeatherType,
)

SHOREDITCH = Location(
    town="Shoreditch",
    region="London",
    position=Position(latitude=51.5, longitude=-0.08),
)


class FakeResponse:
    """Just enough of requests.Response for the adapters and the API client."""

    def __init__(self, payload=None, status_code: int = 200, text: str = ""):
        self._payload = payload
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Records requests and answers each with the next queued response."""

    def __init__(self, *responses):
        self.headers: dict = {}
        self.responses = list(responses)
        self.calls: list = []
        self.closed = False

    def _next(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)

    def close(self) -> None:
        self.closed = True


class FakeGeolocation:
    def __init__(self, location: Location = SHOREDITCH, error: Exception = None):
        self.location = location
        self.error = error
        self.calls: list = []

    def get_location(self, postcode: str) -> Location:
        self.calls.append(postcode)
        if self.error:
            raise self.error
        return self.location


class FakeCrime:
    def __init__(self, crimes=None, error: Exception = None):
        self.crimes = crimes if crimes is not None else []
        self.error = error
        self.calls: list = []

    def get_summary(self, position: Position):
        self.calls.append(position)
        if self.error:
            raise self.error
        return list(self.crimes)


class FakeWeather:
    def __init__(self, weather: WeatherResult = None, error: Exception = None):
        self.weather = weather or WeatherResult(WeatherType.LIGHT_CLOUD, 14.25)
        self.error = error
        self.calls: list = []

    def get_summary(self, position: Position) -> WeatherResult:
        self.calls.append(position)
        if self.error:
            raise self.error
        return self.weather


@pytest.fixture()
def crimes() -> list:
    return [
        CrimeEntry("anti-social-behaviour", 42),
        CrimeEntry("violent-crime", 17),
        CrimeEntry("bicycle-theft", 3),
    ]


@pytest.fixture()
def report(crimes) -> Report:
    return Report(
        location=LocationResult(
            postcode="EC2A 4NE",
            location=SHOREDITCH,
            distance_to_london=3.41,
        ),
        crimes=tuple(crimes),
        weather=WeatherResult(WeatherType.HEAVY_RAIN, 11.5),
    )


@pytest.fixture()
def lookups(crimes):
    """Healthy geolocation, crime and weather fakes."""
    return FakeGeolocation(), FakeCrime(crimes), FakeWeather()


@pytest.fixture()
def upstream_down() -> UpstreamError:
    return UpstreamError("weather", "weather lookup failed: 503 Error")
