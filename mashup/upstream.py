"""
UK Location Data Mashup — Upstream HTTP Base
=============================================
Shared plumbing for the third-party lookups: a requests session per worker
thread, a default timeout, and translation of transport and decoding
failures into UpstreamError.
"""

import logging
import threading
from typing import List, Optional

import requests

from mashup.config import HTTP_USER_AGENT, UPSTREAM_TIMEOUT
from mashup.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class UpstreamClient:
    """
    Base class for a JSON-over-HTTP lookup against a public service.

    One adapter serves every API worker thread, and requests.Session is not
    thread-safe, so each thread gets its own session on first use. A session
    passed in explicitly is used by all threads as-is.
    """

    source = "upstream"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = UPSTREAM_TIMEOUT,
    ):
        self._shared = session
        self._local = threading.local()
        self._opened: List[requests.Session] = []
        self._lock = threading.Lock()
        if session is not None:
            self._prepare(session)
        self.timeout = timeout

    @staticmethod
    def _prepare(session) -> None:
        session.headers.update({
            "User-Agent": HTTP_USER_AGENT,
            "Accept": "application/json",
        })

    @property
    def session(self) -> requests.Session:
        """The session for the calling thread."""
        if self._shared is not None:
            return self._shared
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._prepare(session)
            self._local.session = session
            with self._lock:
                self._opened.append(session)
        return session

    def _get_json(self, url: str, params: Optional[dict] = None):
        """
        GET *url* and return the decoded JSON body.

        Raises UpstreamError on connection problems, non-2xx responses and
        bodies that are not JSON.
        """
        logger.debug("%s GET %s params=%s", self.source, url, params)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.warning("%s lookup failed: %s", self.source, e)
            raise UpstreamError(self.source, f"{self.source} lookup failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning("%s returned a malformed body: %s", self.source, e)
            raise UpstreamError(self.source, f"{self.source} returned a malformed response") from e

    def close(self) -> None:
        if self._shared is not None:
            self._shared.close()
        with self._lock:
            opened, self._opened = self._opened, []
        for session in opened:
            session.close()
