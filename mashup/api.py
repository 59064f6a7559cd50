"""
UK Location Data Mashup — REST API
===================================
FastAPI server exposing the location, crime, weather and combined report
lookups for a UK postcode.

Endpoints:
    GET   /api/health           Health check
    POST  /api/distance/        Town, region, position and distance to London
    POST  /api/crime/           Incident counts per crime category
    POST  /api/getWeather/      Dominant weather condition and mean temperature
    POST  /api/report/          All of the above in one report

Every POST takes ``{"postcode": "EC2A 4NE"}``. Malformed postcodes are
rejected with 400 before any upstream service is called; upstream
failures answer 502 with the cause in ``detail``.

Run:
    uvicorn mashup.api:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from mashup.config import API_CORS_ORIGINS
from mashup.exceptions import PostcodeInvalid, UpstreamError
from mashup.report import ReportBuilder
from mashup.validation import is_valid_postcode

logger = logging.getLogger(__name__)


class PostcodeRequest(BaseModel):
    postcode: str = ""


def _require_valid(body: PostcodeRequest) -> str:
    if not is_valid_postcode(body.postcode):
        logger.info("Rejected invalid postcode %r", body.postcode)
        raise HTTPException(status_code=400, detail="Invalid postcode")
    return body.postcode


# ═══════════════════════════════════════════════════════════════════════════
# APP FACTORY
# ═══════════════════════════════════════════════════════════════════════════

def create_app(builder: Optional[ReportBuilder] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="UK Location Data Mashup API",
        description="Location, crime and weather for any UK postcode",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=API_CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.builder = builder or ReportBuilder()

    @app.on_event("shutdown")
    def shutdown():
        app.state.builder.close()

    # ── Error mapping ──

    @app.exception_handler(PostcodeInvalid)
    async def postcode_invalid(request: Request, exc: PostcodeInvalid):
        return JSONResponse(status_code=400, content={"detail": "Invalid postcode"})

    @app.exception_handler(UpstreamError)
    async def upstream_failed(request: Request, exc: UpstreamError):
        logger.error("Upstream %s failure on %s: %s", exc.source, request.url.path, exc.message)
        return JSONResponse(status_code=502, content={"detail": exc.message})

    # ── API Routes ──
    # Plain ``def`` handlers: the lookups block on HTTP, so FastAPI runs
    # them on its worker threadpool.

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/distance/")
    def get_distance_from_london(body: PostcodeRequest):
        """Geocode the postcode and measure the distance to London."""
        postcode = _require_valid(body)
        return app.state.builder.locate(postcode).to_dict()

    @app.post("/api/crime/")
    def get_crime_report(body: PostcodeRequest):
        """Crime categories near the postcode, most incidents first."""
        postcode = _require_valid(body)
        return [c.to_dict() for c in app.state.builder.crimes(postcode)]

    @app.post("/api/getWeather/")
    def get_weather(body: PostcodeRequest):
        """Forecast summary for the postcode."""
        postcode = _require_valid(body)
        return app.state.builder.weather_for(postcode).to_dict()

    @app.post("/api/report/")
    def get_report(body: PostcodeRequest):
        """Combined location, crime and weather report."""
        postcode = _require_valid(body)
        return app.state.builder.build(postcode).to_dict()

    return app


# ── Module-level app instance for `uvicorn mashup.api:app` ──
app = create_app()
