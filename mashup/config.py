"""
UK Location Data Mashup — Configuration
=========================================
All constants, upstream endpoints and tunable parameters live here.
Every value can be overridden through the environment without touching
any other module.
"""

import os

from mashup.models import Position


# ─── Upstream Services ──────────────────────────────────────────────────────

POSTCODES_IO_SINGLE = os.getenv(
    "POSTCODES_IO_URL", "https://api.postcodes.io/postcodes/{postcode}"
)
POLICE_API_CRIMES = os.getenv(
    "POLICE_API_URL", "https://data.police.uk/api/crimes-street/all-crime"
)
OPEN_METEO_FORECAST = os.getenv(
    "OPEN_METEO_URL", "https://api.open-meteo.com/v1/forecast"
)

UPSTREAM_TIMEOUT = float(os.getenv("UPSTREAM_TIMEOUT", "30"))   # seconds
WEATHER_FORECAST_DAYS = int(os.getenv("WEATHER_FORECAST_DAYS", "6"))

# Identify ourselves to public services
HTTP_USER_AGENT = os.getenv(
    "HTTP_USER_AGENT", "UKLocationMashup/1.0"
)


# ─── Geography ──────────────────────────────────────────────────────────────

LONDON = Position(latitude=51.5074, longitude=-0.1278)
EARTH_RADIUS_KM = 6371


# ─── API Server ─────────────────────────────────────────────────────────────

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
API_CORS_ORIGINS = [
    o.strip() for o in os.getenv("API_CORS_ORIGINS", "*").split(",") if o.strip()
]


# ─── Dashboard ──────────────────────────────────────────────────────────────

MASHUP_API_URL = os.getenv("MASHUP_API_URL", "http://localhost:8000")


# ─── Logging ────────────────────────────────────────────────────────────────

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ─── WMO Weather Codes ──────────────────────────────────────────────────────
# Open-Meteo reports WMO 4677 codes; collapse them onto the condition labels
# the report uses. Codes missing from this table fail the weather lookup.

WMO_CONDITIONS = {
    0: "Clear",
    1: "Light Cloud",
    2: "Light Cloud",
    3: "Heavy Cloud",
    45: "Heavy Cloud",          # fog
    48: "Heavy Cloud",          # depositing rime fog
    51: "Light Rain",           # drizzle
    53: "Light Rain",
    55: "Light Rain",
    56: "Sleet",                # freezing drizzle
    57: "Sleet",
    61: "Light Rain",
    63: "Heavy Rain",
    65: "Heavy Rain",
    66: "Sleet",                # freezing rain
    67: "Sleet",
    71: "Snow",
    73: "Snow",
    75: "Snow",
    77: "Snow",                 # snow grains
    80: "Showers",
    81: "Showers",
    82: "Showers",
    85: "Snow",                 # snow showers
    86: "Snow",
    95: "Thunderstorm",
    96: "Hail",                 # thunderstorm with hail
    99: "Hail",
}
