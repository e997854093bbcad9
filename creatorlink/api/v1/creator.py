"""Creator dashboard pass-through endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from creatorlink.api.v1._auth import extract_token
from creatorlink.core.enums import InquiryStatus
from creatorlink.core.exceptions import MarketplaceAPIError
from creatorlink.schemas.inquiry import InquiryStatusUpdateRequest
from creatorlink.services.inquiry_session_service import InquirySessionService, get_session_service

router = APIRouter(prefix="/creator", tags=["creator"])


def _upstream_error(exc: MarketplaceAPIError) -> HTTPException:
    if exc.status_code is None:
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Marketplace API unavailable.")
    return HTTPException(status_code=exc.status_code, detail=exc.body if exc.body is not None else str(exc))


@router.get("/inquiries")
def list_inquiries(
    status_filter: InquiryStatus | None = Query(default=None, alias="status"),
    inquiry_type: str | None = Query(default=None, max_length=40),
    search: str | None = Query(default=None, max_length=200),
    authorization: str | None = Header(default=None, alias="Authorization"),
    service: InquirySessionService = Depends(get_session_service),
):
    client = service.client_for(extract_token(authorization))
    try:
        return client.list_creator_inquiries(
            status=status_filter.value if status_filter else None,
            inquiry_type=inquiry_type,
            search=search,
        )
    except MarketplaceAPIError as exc:
        raise _upstream_error(exc) from exc


@router.patch("/inquiries/{inquiry_id}/status")
def update_inquiry_status(
    inquiry_id: int,
    payload: InquiryStatusUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
    service: InquirySessionService = Depends(get_session_service),
):
    client = service.client_for(extract_token(authorization))
    try:
        return client.update_inquiry_status(inquiry_id, payload.status.value)
    except MarketplaceAPIError as exc:
        raise _upstream_error(exc) from exc


@router.get("/inquiries/{inquiry_id}")
def get_inquiry(
    inquiry_id: int,
    authorization: str | None = Header(default=None, alias="Authorization"),
    service: InquirySessionService = Depends(get_session_service),
):
    client = service.client_for(extract_token(authorization))
    try:
        return client.get_creator_inquiry(inquiry_id)
    except MarketplaceAPIError as exc:
        raise _upstream_error(exc) from exc


@router.get("/dashboard")
def dashboard(
    authorization: str | None = Header(default=None, alias="Authorization"),
    service: InquirySessionService = Depends(get_session_service),
):
    client = service.client_for(extract_token(authorization))
    try:
        return client.get_creator_dashboard()
    except MarketplaceAPIError as exc:
        raise _upstream_error(exc) from exc
