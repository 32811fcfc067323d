"""Tests for the reference-lookup client, with a stub HTTP session."""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import requests

from wolprep.errors import ReferenceLookupError
from wolprep.scraping.references import ReferenceClient, html_to_text, reference_url


class StubResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value")
        return self.payload


class StubSession:
    def __init__(self, response=None, error=None):
        self.headers = {}
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.response


def _items(*contents):
    return {"items": [{"content": c} for c in contents]}


class TestReferenceUrl:
    def test_language_folder_dropped(self):
        assert reference_url("/es/wol/bc/r4/lp-s/2024/1") == "https://wol.jw.org/wol/bc/r4/lp-s/2024/1"

    def test_html_to_text_removes_anchors(self):
        html = '<p>Porque <a class="b" href="#">+</a>Dios   amó\n al mundo</p>'
        assert html_to_text(html) == "Porque Dios amó al mundo"


class TestReferenceClient:
    def test_fetch_text(self):
        session = StubSession(StubResponse(_items("<p><strong>3</strong> El Señor es mi pastor.</p>")))
        client = ReferenceClient(session=session)
        assert client("/es/wol/bc/r4/lp-s/1/1") == "3 El Señor es mi pastor."
        assert session.urls == ["https://wol.jw.org/wol/bc/r4/lp-s/1/1"]

    def test_uses_first_item(self):
        session = StubSession(StubResponse(_items("<p>uno</p>", "<p>dos</p>")))
        assert ReferenceClient(session=session).fetch_text("/es/x") == "uno"

    def test_sets_headers(self):
        session = StubSession(StubResponse(_items("x")))
        ReferenceClient(session=session)
        assert "User-Agent" in session.headers

    def test_empty_items(self):
        client = ReferenceClient(session=StubSession(StubResponse({"items": []})))
        with pytest.raises(ReferenceLookupError):
            client.fetch_html("/es/x")

    def test_http_error(self):
        client = ReferenceClient(session=StubSession(StubResponse(status=500)))
        with pytest.raises(ReferenceLookupError):
            client.fetch_html("/es/x")

    def test_connection_error(self):
        client = ReferenceClient(session=StubSession(error=requests.ConnectionError("down")))
        with pytest.raises(ReferenceLookupError):
            client.fetch_text("/es/x")

    def test_bad_json(self):
        client = ReferenceClient(session=StubSession(StubResponse(bad_json=True)))
        with pytest.raises(ReferenceLookupError):
            client.fetch_text("/es/x")
