from __future__ import annotations

import json

import pytest
from fastapi import HTTPException

from creatorlink.api.v1 import creator, health, inquiries
from creatorlink.api.v1._auth import extract_token
from creatorlink.core.config import get_config
from creatorlink.schemas.inquiry import CreateSessionRequest, InquiryStatusUpdateRequest, ToggleSelectionRequest
from creatorlink.services.inquiry_session_service import InquirySessionService
from creatorlink.core.exceptions import StorageError
from creatorlink.storage.drafts import draft_key
from creatorlink.storage.kv import MemoryKeyValueStore, NamespacedKeyValueStore, owner_namespace


class _Response:
    def __init__(self, status_code: int, body) -> None:
        self.status_code = status_code
        self.content = json.dumps(body).encode()

    def json(self):
        return json.loads(self.content)


class _HttpSession:
    def __init__(self, responses: dict[tuple[str, str], _Response]) -> None:
        self.responses = responses
        self.calls = []

    def request(self, method, url, **kwargs):
        path = url.split("/api", 1)[1]
        self.calls.append((method, path, kwargs))
        return self.responses[(method, path)]


@pytest.fixture
def http_session():
    return _HttpSession(
        {
            ("GET", "/auth/profile/"): _Response(200, {"id": 21, "email": "member@example.com"}),
            ("POST", "/youtubers/inquiry/"): _Response(201, {"id": 55, "status": "pending"}),
            ("GET", "/creator/inquiries/"): _Response(200, {"results": [{"id": 55}]}),
            ("PATCH", "/creator/inquiries/55/status/"): _Response(200, {"id": 55, "status": "accepted"}),
        }
    )


@pytest.fixture
def service(store, scheduler, http_session):
    return InquirySessionService(store=store, scheduler=scheduler, config=get_config(), http_session=http_session)


def test_extract_token_accepts_token_and_bearer():
    assert extract_token("Token abc") == "abc"
    assert extract_token("Bearer xyz") == "xyz"
    assert extract_token("Basic zzz") is None
    assert extract_token(None) is None


def test_open_session_prefills_email_from_profile(service):
    snapshot = inquiries.open_session(CreateSessionRequest(profile_id=3), authorization="Token abc", service=service)
    assert snapshot.step == 1
    assert snapshot.step_title == "Basic Information"
    assert snapshot.progress_percent == 17
    assert snapshot.draft.email == "member@example.com"
    assert snapshot.draft.profile_id == 3


def test_open_session_without_credentials_skips_profile_lookup(service, http_session):
    snapshot = inquiries.open_session(CreateSessionRequest(profile_id=3), authorization=None, service=service)
    assert snapshot.draft.email == ""
    assert http_session.calls == []


def test_full_form_flow_over_endpoints(service, store, http_session, filled_fields):
    opened = inquiries.open_session(
        CreateSessionRequest(profile_id=3, email="brand@example.com"),
        authorization="Token abc",
        service=service,
    )
    session_id = opened.session_id

    blocked = inquiries.advance(session_id, service=service)
    assert blocked.step == 1
    assert "company_name" in blocked.errors

    changes = dict(filled_fields)
    changes.pop("content_types")
    inquiries.update_fields(session_id, changes=changes, service=service)
    inquiries.toggle_selection(
        session_id,
        ToggleSelectionRequest(field="content_types", value="YouTube Shorts", checked=True),
        service=service,
    )
    saved = inquiries.save_draft(session_id, service=service)
    member_drafts = NamespacedKeyValueStore(store, owner_namespace(21))
    assert saved.drafts_enabled is True
    assert json.loads(member_drafts.get(draft_key(3)))["content_types"] == ["YouTube Shorts"]
    assert store.get(draft_key(3)) is None

    for _ in range(5):
        snapshot = inquiries.advance(session_id, service=service)
    assert snapshot.step == 6
    assert saved.errors == {}

    summary = inquiries.review(session_id, service=service)
    assert summary["budget_timeline"]["budget"] == "$3200"

    result = inquiries.submit(session_id, service=service)
    assert result.ok is True
    assert result.response == {"id": 55, "status": "pending"}
    assert member_drafts.get(draft_key(3)) is None

    method, path, kwargs = http_session.calls[-1]
    assert (method, path) == ("POST", "/youtubers/inquiry/")
    assert kwargs["headers"]["Authorization"] == "Token abc"
    assert kwargs["json"]["budget_range"] == "1k_5k"

    with pytest.raises(HTTPException) as exc:
        inquiries.submit(session_id, service=service)
    assert exc.value.status_code == 404
    assert service.active_count() == 0


def test_retreat_endpoint(service):
    session_id = inquiries.open_session(CreateSessionRequest(profile_id=3), authorization=None, service=service).session_id
    assert inquiries.retreat(session_id, service=service).step == 1


def test_bad_field_value_maps_to_422(service):
    session_id = inquiries.open_session(CreateSessionRequest(profile_id=3), authorization=None, service=service).session_id
    with pytest.raises(HTTPException) as exc:
        inquiries.update_fields(session_id, changes={"timeline": "someday"}, service=service)
    assert exc.value.status_code == 422


def test_submit_before_review_maps_to_409(service):
    session_id = inquiries.open_session(CreateSessionRequest(profile_id=3), authorization=None, service=service).session_id
    with pytest.raises(HTTPException) as exc:
        inquiries.submit(session_id, service=service)
    assert exc.value.status_code == 409


def test_closed_session_is_gone(service, scheduler):
    session_id = inquiries.open_session(
        CreateSessionRequest(profile_id=3), authorization="Token abc", service=service
    ).session_id
    inquiries.update_fields(session_id, changes={"company_name": "Acme"}, service=service)
    assert len(scheduler.pending()) == 1
    inquiries.close_session(session_id, service=service)

    assert scheduler.pending() == []
    with pytest.raises(HTTPException) as exc:
        inquiries.get_session(session_id, service=service)
    assert exc.value.status_code == 404


def test_health_reports_active_sessions(service):
    inquiries.open_session(CreateSessionRequest(profile_id=3), authorization=None, service=service)
    body = health.health(service=service)
    assert body["status"] == "ok"
    assert body["active_sessions"] == 1


def test_creator_endpoints_pass_through(service, http_session):
    listed = creator.list_inquiries(
        status_filter=None, inquiry_type=None, search=None, authorization="Token c", service=service
    )
    assert listed == {"results": [{"id": 55}]}

    updated = creator.update_inquiry_status(
        55, InquiryStatusUpdateRequest(status="accepted"), authorization="Token c", service=service
    )
    assert updated["status"] == "accepted"
    assert http_session.calls[-1][2]["json"] == {"status": "accepted"}


def test_creator_upstream_error_is_propagated(service, http_session):
    http_session.responses[("GET", "/creator/dashboard/")] = _Response(401, {"detail": "Invalid token."})
    with pytest.raises(HTTPException) as exc:
        creator.dashboard(authorization="Token bad", service=service)
    assert exc.value.status_code == 401
    assert exc.value.detail == {"detail": "Invalid token."}


def test_app_mounts_versioned_routes():
    from creatorlink.main import app

    paths = app.openapi()["paths"]
    assert "/api/v1/health" in paths
    assert "/api/v1/inquiries/sessions/{session_id}/submit" in paths
    assert "/api/v1/creator/inquiries/{inquiry_id}/status" in paths


def test_open_session_reports_storage_failures_as_500(scheduler, http_session):
    class _BrokenStore(MemoryKeyValueStore):
        def get(self, key):
            raise StorageError("Failed to read key.")

    service = InquirySessionService(
        store=_BrokenStore(), scheduler=scheduler, config=get_config(), http_session=http_session
    )
    with pytest.raises(HTTPException) as exc:
        inquiries.open_session(CreateSessionRequest(profile_id=3), authorization="Token abc", service=service)
    assert exc.value.status_code == 500
    assert service.active_count() == 0
