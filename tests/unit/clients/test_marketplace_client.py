from __future__ import annotations

import json

import pytest
import requests

from creatorlink.clients.marketplace import MarketplaceClient
from creatorlink.core.exceptions import MarketplaceAPIError


class _Response:
    def __init__(self, status_code: int, body=None, raw: bytes | None = None) -> None:
        self.status_code = status_code
        self.content = raw if raw is not None else (json.dumps(body).encode() if body is not None else b"")

    def json(self):
        return json.loads(self.content)


class _Session:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


def _client(session, token=None) -> MarketplaceClient:
    return MarketplaceClient(
        base_url="http://api.test/api/",
        timeout_seconds=10,
        token_provider=lambda: token,
        auth_scheme="Token",
        session=session,
    )


def test_submit_inquiry_posts_payload_with_token():
    session = _Session(_Response(201, {"id": 9}))
    body = _client(session, token="abc").submit_inquiry({"youtuber": 3})

    assert body == {"id": 9}
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://api.test/api/youtubers/inquiry/"
    assert call["json"] == {"youtuber": 3}
    assert call["headers"]["Authorization"] == "Token abc"


def test_requests_without_token_omit_authorization():
    session = _Session(_Response(200, {"id": 3}))
    _client(session).get_youtuber(3)
    assert "Authorization" not in session.calls[0]["headers"]
    assert session.calls[0]["url"] == "http://api.test/api/youtubers/3/"


def test_http_error_carries_status_and_body():
    session = _Session(_Response(400, {"email": ["Invalid format"]}))
    with pytest.raises(MarketplaceAPIError) as exc:
        _client(session).submit_inquiry({})
    assert exc.value.status_code == 400
    assert exc.value.body == {"email": ["Invalid format"]}
    assert exc.value.has_response is True


def test_non_json_error_body_is_dropped():
    session = _Session(_Response(502, raw=b"<html>Bad gateway</html>"))
    with pytest.raises(MarketplaceAPIError) as exc:
        _client(session).get_profile()
    assert exc.value.status_code == 502
    assert exc.value.body is None


def test_transport_error_has_no_response():
    session = _Session(error=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(MarketplaceAPIError) as exc:
        _client(session).submit_inquiry({})
    assert exc.value.has_response is False
    assert exc.value.body is None


def test_creator_inquiry_endpoints():
    session = _Session(_Response(200, {"results": []}))
    client = _client(session, token="t")

    client.list_creator_inquiries(status="pending", search="shoes")
    client.get_creator_inquiry(12)
    client.update_inquiry_status(12, "accepted")
    client.get_creator_dashboard()

    assert session.calls[0]["params"] == {"status": "pending", "search": "shoes"}
    assert session.calls[1]["url"].endswith("/creator/inquiries/12/")
    assert session.calls[2]["method"] == "PATCH"
    assert session.calls[2]["json"] == {"status": "accepted"}
    assert session.calls[3]["url"].endswith("/creator/dashboard/")

