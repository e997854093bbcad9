"""Registry of live inquiry form sessions."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from functools import lru_cache
from threading import Lock
from typing import Any, Callable

import requests

from creatorlink.clients.marketplace import MarketplaceClient
from creatorlink.core.config import Config, get_config
from creatorlink.core.exceptions import CreatorLinkException, MarketplaceAPIError, NotFoundError
from creatorlink.core.scheduler import Scheduler, ThreadingScheduler
from creatorlink.forms.manager import InquiryFormManager, SubmissionOutcome
from creatorlink.schemas.inquiry import ProfileId, SessionSnapshot
from creatorlink.storage.kv import KeyValueStore, NamespacedKeyValueStore, build_store, owner_namespace

logger = logging.getLogger(__name__)


@dataclass
class _SessionEntry:
    manager: InquiryFormManager
    last_seen: float


def profile_owner_id(profile: Any) -> str | None:
    """Stable identity of the authenticated caller, taken from their profile."""
    if not isinstance(profile, dict):
        return None
    for key in ("id", "pk", "email"):
        value = profile.get(key)
        if value not in (None, ""):
            return str(value)
    return None


class InquirySessionService:
    """Creates, looks up and closes form managers keyed by session id.

    Drafts are kept only for authenticated callers, each in a namespace of
    the shared store derived from their marketplace profile. Anonymous
    sessions work the same way but nothing they type is persisted.
    """

    def __init__(
        self,
        store: KeyValueStore,
        scheduler: Scheduler,
        config: Config | None = None,
        http_session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or get_config()
        self.store = store
        self.scheduler = scheduler
        self._http_session = http_session or requests.Session()
        self._clock = clock
        self._sessions: dict[str, _SessionEntry] = {}
        self._lock = Lock()

    def client_for(self, auth_token: str | None = None) -> MarketplaceClient:
        return MarketplaceClient(
            base_url=self.config.API_BASE_URL,
            timeout_seconds=self.config.API_TIMEOUT_SECONDS,
            auth_scheme=self.config.AUTH_SCHEME,
            token_provider=lambda: auth_token,
            session=self._http_session,
        )

    def _lookup_profile(self, client: MarketplaceClient, auth_token: str | None) -> dict[str, Any]:
        if not auth_token:
            return {}
        try:
            profile = client.get_profile()
        except MarketplaceAPIError as exc:
            logger.warning(
                "inquiry.session.profile_lookup_failed",
                extra={"event": "inquiry.session.profile_lookup_failed", "status_code": exc.status_code},
            )
            return {}
        return profile if isinstance(profile, dict) else {}

    def draft_store_for(self, owner_id: str | None) -> KeyValueStore | None:
        if owner_id is None:
            return None
        return NamespacedKeyValueStore(self.store, owner_namespace(owner_id))

    def open_session(
        self,
        profile_id: ProfileId,
        email: str | None = None,
        auth_token: str | None = None,
    ) -> tuple[str, InquiryFormManager]:
        self.sweep_idle()
        client = self.client_for(auth_token)
        profile = self._lookup_profile(client, auth_token)
        if email is None:
            email = profile.get("email") or None

        manager = InquiryFormManager(
            profile_id=profile_id,
            store=self.draft_store_for(profile_owner_id(profile)),
            submitter=client,
            scheduler=self.scheduler,
            autosave_interval_seconds=self.config.AUTOSAVE_INTERVAL_SECONDS,
            user_email=email,
        )
        session_id = uuid.uuid4().hex
        with self._lock:
            evicted = self._evict_oldest_locked(self.config.SESSION_MAX_ACTIVE - 1)
            self._sessions[session_id] = _SessionEntry(manager, self._clock())
        self._retire(evicted, reason="capacity")
        logger.info(
            "inquiry.session.opened",
            extra={"event": "inquiry.session.opened", "session_id": session_id, "profile_id": profile_id},
        )
        return session_id, manager

    def get(self, session_id: str) -> InquiryFormManager:
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(session_id)
            expired = entry is not None and self._is_idle(entry, now)
            if expired:
                del self._sessions[session_id]
            elif entry is not None:
                entry.last_seen = now
        if expired:
            self._retire([(session_id, entry.manager)], reason="idle")
        if entry is None or expired:
            raise NotFoundError(f"Inquiry session {session_id} not found.")
        return entry.manager

    def submit(self, session_id: str) -> SubmissionOutcome:
        """Submit the session's inquiry; a successful submit ends the session."""
        manager = self.get(session_id)
        outcome = manager.submit()
        if outcome.ok:
            with self._lock:
                self._sessions.pop(session_id, None)
            manager.close()
            logger.info(
                "inquiry.session.completed",
                extra={"event": "inquiry.session.completed", "session_id": session_id},
            )
        return outcome

    def close_session(self, session_id: str) -> None:
        with self._lock:
            entry = self._sessions.pop(session_id, None)
        if entry is None:
            raise NotFoundError(f"Inquiry session {session_id} not found.")
        entry.manager.close()
        logger.info("inquiry.session.closed", extra={"event": "inquiry.session.closed", "session_id": session_id})

    def close_all(self) -> None:
        with self._lock:
            entries = list(self._sessions.values())
            self._sessions.clear()
        for entry in entries:
            entry.manager.close()

    def sweep_idle(self) -> int:
        """Drop sessions untouched for longer than the idle timeout."""
        now = self._clock()
        with self._lock:
            expired = [
                (session_id, entry.manager)
                for session_id, entry in self._sessions.items()
                if self._is_idle(entry, now)
            ]
            for session_id, _ in expired:
                del self._sessions[session_id]
        self._retire(expired, reason="idle")
        return len(expired)

    def _is_idle(self, entry: _SessionEntry, now: float) -> bool:
        return now - entry.last_seen > self.config.SESSION_IDLE_TIMEOUT_SECONDS

    def _evict_oldest_locked(self, keep: int) -> list[tuple[str, InquiryFormManager]]:
        overflow = len(self._sessions) - keep
        if overflow <= 0:
            return []
        oldest = sorted(self._sessions.items(), key=lambda item: item[1].last_seen)[:overflow]
        for session_id, _ in oldest:
            del self._sessions[session_id]
        return [(session_id, entry.manager) for session_id, entry in oldest]

    def _retire(self, evicted: list[tuple[str, InquiryFormManager]], reason: str) -> None:
        # Unsaved edits of an evicted session are written before it goes.
        for session_id, manager in evicted:
            try:
                manager.close(flush=True)
            except CreatorLinkException:
                logger.exception(
                    "inquiry.session.evict_flush_failed",
                    extra={"event": "inquiry.session.evict_flush_failed", "session_id": session_id},
                )
            logger.info(
                "inquiry.session.evicted",
                extra={"event": "inquiry.session.evicted", "session_id": session_id, "reason": reason},
            )

    def snapshot(self, session_id: str) -> SessionSnapshot:
        manager = self.get(session_id)
        return build_snapshot(session_id, manager)

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)


def build_snapshot(session_id: str, manager: InquiryFormManager) -> SessionSnapshot:
    return SessionSnapshot(
        session_id=session_id,
        profile_id=manager.profile_id,
        step=manager.step,
        step_title=manager.step_title,
        progress_percent=manager.progress_percent,
        draft=manager.draft,
        errors=dict(manager.errors),
        is_submitting=manager.is_submitting,
        submitted=manager.submitted,
        drafts_enabled=manager.drafts_enabled,
    )


@lru_cache(maxsize=1)
def get_session_service() -> InquirySessionService:
    """Process-wide service wired from configuration."""
    return InquirySessionService(store=build_store(), scheduler=ThreadingScheduler())


def describe_service(service: InquirySessionService) -> dict[str, Any]:
    return {
        "active_sessions": service.active_count(),
        "draft_store": service.config.DRAFT_STORE_BACKEND,
    }
