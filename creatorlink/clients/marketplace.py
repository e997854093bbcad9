"""HTTP client for the marketplace REST API."""

from __future__ import annotations

import logging
from typing import Any, Callable

import requests

from creatorlink.core.config import get_config
from creatorlink.core.exceptions import MarketplaceAPIError

logger = logging.getLogger(__name__)


class MarketplaceClient:
    """Thin wrapper over the marketplace endpoints this service consumes."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: int | None = None,
        token_provider: Callable[[], str | None] | None = None,
        auth_scheme: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        cfg = get_config()
        self.base_url = (base_url or cfg.API_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or cfg.API_TIMEOUT_SECONDS
        self.auth_scheme = auth_scheme or cfg.AUTH_SCHEME
        self._token_provider = token_provider or (lambda: None)
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"{self.auth_scheme} {token}"
        return headers

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self._session.request(
                method,
                url,
                headers=self._headers(),
                timeout=(5, self.timeout_seconds),
                **kwargs,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning(
                "marketplace.request.transport_failed",
                extra={"event": "marketplace.request.transport_failed", "error": str(exc)},
            )
            raise MarketplaceAPIError(f"{method} {path} failed: {exc}") from exc

        body = _decode_body(response)
        if response.status_code >= 400:
            logger.warning(
                "marketplace.request.rejected",
                extra={"event": "marketplace.request.rejected", "status_code": response.status_code},
            )
            raise MarketplaceAPIError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                body=body,
            )
        return body

    def submit_inquiry(self, payload: dict[str, Any]) -> Any:
        return self._request("POST", "/youtubers/inquiry/", json=payload)

    def get_profile(self) -> dict[str, Any]:
        return self._request("GET", "/auth/profile/")

    def get_youtuber(self, profile_id: int | str) -> dict[str, Any]:
        return self._request("GET", f"/youtubers/{profile_id}/")

    def get_creator_dashboard(self) -> dict[str, Any]:
        return self._request("GET", "/creator/dashboard/")

    def list_creator_inquiries(
        self,
        status: str | None = None,
        inquiry_type: str | None = None,
        search: str | None = None,
    ) -> Any:
        params = {
            key: value
            for key, value in (("status", status), ("inquiry_type", inquiry_type), ("search", search))
            if value
        }
        return self._request("GET", "/creator/inquiries/", params=params)

    def get_creator_inquiry(self, inquiry_id: int | str) -> dict[str, Any]:
        return self._request("GET", f"/creator/inquiries/{inquiry_id}/")

    def update_inquiry_status(self, inquiry_id: int | str, status: str) -> dict[str, Any]:
        return self._request("PATCH", f"/creator/inquiries/{inquiry_id}/status/", json={"status": status})


def _decode_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
