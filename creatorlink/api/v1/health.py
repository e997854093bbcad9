"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from creatorlink.core.config import get_config
from creatorlink.services.inquiry_session_service import (
    InquirySessionService,
    describe_service,
    get_session_service,
)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(service: InquirySessionService = Depends(get_session_service)) -> dict:
    cfg = get_config()
    return {"status": "ok", "service": cfg.APP_NAME, "version": cfg.APP_VERSION, **describe_service(service)}
