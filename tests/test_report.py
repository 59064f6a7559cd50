"""Tests for mashup.report module."""

import pytest

from conftest import SHOREDITCH, FakeCrime, FakeGeolocation, FakeWeather
from mashup.exceptions import PostcodeInvalid, UpstreamError
from mashup.geocoding import distance_to_london
from mashup.models import Report
from mashup.report import ReportBuilder


class TestBuild:
    def test_successful_report(self, lookups, crimes):
        geo, crime, weather = lookups
        report = ReportBuilder(geo, crime, weather).build("ec2a4ne")

        assert isinstance(report, Report)
        assert report.location.postcode == "EC2A 4NE"
        assert report.location.location == SHOREDITCH
        assert report.crimes == tuple(crimes)
        assert report.weather == weather.weather

    def test_lookups_keyed_on_geocoded_position(self, lookups):
        geo, crime, weather = lookups
        ReportBuilder(geo, crime, weather).build("EC2A 4NE")

        assert geo.calls == ["EC2A 4NE"]
        assert crime.calls == [SHOREDITCH.position]
        assert weather.calls == [SHOREDITCH.position]

    def test_distance_to_london(self, lookups):
        report = ReportBuilder(*lookups).build("EC2A 4NE")
        assert report.location.distance_to_london == pytest.approx(
            distance_to_london(SHOREDITCH.position)
        )

    @pytest.mark.parametrize("bad", ["", "bad", "12345"])
    def test_invalid_postcode_makes_no_upstream_calls(self, lookups, bad):
        geo, crime, weather = lookups
        with pytest.raises(PostcodeInvalid):
            ReportBuilder(geo, crime, weather).build(bad)
        assert geo.calls == crime.calls == weather.calls == []

    @pytest.mark.parametrize(
        "error",
        [UpstreamError("crime", "crime lookup failed: 503 Error"), RuntimeError("boom")],
    )
    def test_crime_failure_yields_empty_crimes(self, error):
        report = ReportBuilder(
            FakeGeolocation(), FakeCrime(error=error), FakeWeather()
        ).build("EC2A 4NE")
        assert report.crimes == ()
        assert report.weather is not None

    def test_weather_failure_fails_report(self, crimes, upstream_down):
        builder = ReportBuilder(FakeGeolocation(), FakeCrime(crimes), FakeWeather(error=upstream_down))
        with pytest.raises(UpstreamError) as exc_info:
            builder.build("EC2A 4NE")
        assert exc_info.value.message == "weather lookup failed: 503 Error"

    def test_geolocation_failure_fails_report(self, crimes):
        crime, weather = FakeCrime(crimes), FakeWeather()
        geo = FakeGeolocation(error=UpstreamError("geolocation", "No location found for 'ZZ9 9ZZ'"))
        with pytest.raises(UpstreamError):
            ReportBuilder(geo, crime, weather).build("ZZ9 9ZZ")
        # Nothing to key the other lookups on
        assert crime.calls == weather.calls == []


class TestSingleLookups:
    def test_locate(self, lookups):
        result = ReportBuilder(*lookups).locate("EC2A 4NE")
        assert result.location.town == "Shoreditch"
        assert result.distance_to_london > 0

    def test_crimes_propagates_failure(self):
        builder = ReportBuilder(
            FakeGeolocation(), FakeCrime(error=UpstreamError("crime", "down")), FakeWeather()
        )
        with pytest.raises(UpstreamError):
            builder.crimes("EC2A 4NE")

    def test_weather_for(self, lookups):
        geo, crime, weather = lookups
        assert ReportBuilder(geo, crime, weather).weather_for("EC2A 4NE") == weather.weather
