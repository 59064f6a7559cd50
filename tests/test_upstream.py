"""Tests for mashup.upstream module."""

import threading

import requests

from conftest import FakeSession
from mashup.config import HTTP_USER_AGENT
from mashup.upstream import UpstreamClient


def _session_from_thread(client: UpstreamClient):
    seen = []
    worker = threading.Thread(target=lambda: seen.append(client.session))
    worker.start()
    worker.join()
    return seen[0]


class TestSessions:
    def test_same_thread_reuses_session(self):
        client = UpstreamClient()
        assert client.session is client.session
        assert isinstance(client.session, requests.Session)
        assert client.session.headers["User-Agent"] == HTTP_USER_AGENT
        client.close()

    def test_each_thread_gets_its_own_session(self):
        client = UpstreamClient()
        first = _session_from_thread(client)
        second = _session_from_thread(client)
        assert len({id(client.session), id(first), id(second)}) == 3
        client.close()

    def test_given_session_is_shared(self):
        session = FakeSession()
        client = UpstreamClient(session=session)
        assert _session_from_thread(client) is session
        assert session.headers["Accept"] == "application/json"

    def test_close_closes_given_session(self):
        session = FakeSession()
        UpstreamClient(session=session).close()
        assert session.closed
