"""Credential helpers shared by API v1 route modules."""

from __future__ import annotations

ACCEPTED_SCHEMES = {"token", "bearer"}


def extract_token(authorization: str | None) -> str | None:
    """Return the raw token from `Token <t>` / `Bearer <t>`, or None."""
    if authorization is None or not authorization.strip():
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() not in ACCEPTED_SCHEMES:
        return None
    token = parts[1].strip()
    return token or None
