"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from creatorlink.api.v1 import creator, health, inquiries


def get_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health.router)
    api_router.include_router(inquiries.router)
    api_router.include_router(creator.router)
    return api_router
