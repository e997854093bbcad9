"""Form-session endpoints for the collaboration inquiry form."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException, status

from creatorlink.api.v1._auth import extract_token
from creatorlink.core.exceptions import CreatorLinkException, NotFoundError, StepTransitionError, ValidationError
from creatorlink.services.inquiry_session_service import InquirySessionService, get_session_service
from creatorlink.schemas.inquiry import (
    CreateSessionRequest,
    SessionSnapshot,
    SubmitResponse,
    ToggleSelectionRequest,
)

router = APIRouter(prefix="/inquiries/sessions", tags=["inquiries"])


def map_service_error(exc: CreatorLinkException) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    if isinstance(exc, StepTransitionError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("", response_model=SessionSnapshot, status_code=status.HTTP_201_CREATED)
def open_session(
    payload: CreateSessionRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    service: InquirySessionService = Depends(get_session_service),
) -> SessionSnapshot:
    try:
        session_id, _ = service.open_session(
            profile_id=payload.profile_id,
            email=payload.email,
            auth_token=extract_token(authorization),
        )
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.get("/{session_id}", response_model=SessionSnapshot)
def get_session(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> SessionSnapshot:
    try:
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.patch("/{session_id}/fields", response_model=SessionSnapshot)
def update_fields(
    session_id: str,
    changes: dict[str, Any] = Body(...),
    service: InquirySessionService = Depends(get_session_service),
) -> SessionSnapshot:
    try:
        service.get(session_id).update_fields(changes)
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.post("/{session_id}/toggle", response_model=SessionSnapshot)
def toggle_selection(
    session_id: str,
    payload: ToggleSelectionRequest,
    service: InquirySessionService = Depends(get_session_service),
) -> SessionSnapshot:
    try:
        service.get(session_id).toggle_selection(payload.field, payload.value, payload.checked)
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.post("/{session_id}/advance", response_model=SessionSnapshot)
def advance(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> SessionSnapshot:
    try:
        service.get(session_id).advance()
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.post("/{session_id}/retreat", response_model=SessionSnapshot)
def retreat(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> SessionSnapshot:
    try:
        service.get(session_id).retreat()
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.post("/{session_id}/save", response_model=SessionSnapshot)
def save_draft(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> SessionSnapshot:
    try:
        service.get(session_id).save_draft()
        return service.snapshot(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.get("/{session_id}/review")
def review(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> dict:
    try:
        return service.get(session_id).review()
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc


@router.post("/{session_id}/submit", response_model=SubmitResponse)
def submit(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> SubmitResponse:
    try:
        outcome = service.submit(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc
    return SubmitResponse(ok=outcome.ok, response=outcome.response, errors=outcome.errors)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(session_id: str, service: InquirySessionService = Depends(get_session_service)) -> None:
    try:
        service.close_session(session_id)
    except CreatorLinkException as exc:
        raise map_service_error(exc) from exc
