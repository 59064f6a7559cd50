"""HTTP client for the mashup API, used by the dashboard."""

import logging
from typing import Optional

import requests

from mashup.config import MASHUP_API_URL, UPSTREAM_TIMEOUT
from mashup.exceptions import MashupAPIError
from mashup.models import Report

logger = logging.getLogger(__name__)


class MashupClient:
    """
    Thin wrapper around ``POST /api/report/``.

    Errors come back as MashupAPIError whose message is the server's
    ``detail`` text, so it can be shown to the user verbatim.
    """

    def __init__(
        self,
        base_url: str = MASHUP_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = UPSTREAM_TIMEOUT * 2,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_report(self, postcode: str) -> Report:
        url = f"{self.base_url}/api/report/"
        try:
            response = self.session.post(url, json={"postcode": postcode}, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise MashupAPIError(0, f"Could not reach the server: {e}") from e

        if not response.ok:
            detail = _error_detail(response)
            logger.info("Report for %s failed with %d: %s", postcode, response.status_code, detail)
            raise MashupAPIError(response.status_code, detail)

        try:
            return Report.from_dict(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise MashupAPIError(response.status_code, "Server returned a malformed report") from e

    def close(self) -> None:
        self.session.close()


def _error_detail(response: requests.Response) -> str:
    """The ``detail`` field of an error body, or its raw text."""
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    return response.text or f"HTTP {response.status_code}"
