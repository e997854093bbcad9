"""Draft persistence: keyed save/restore and trailing-edge auto-save."""

from __future__ import annotations

import json
import logging
from threading import Lock
from typing import Callable

from creatorlink.core.scheduler import ScheduledHandle, Scheduler
from creatorlink.schemas.inquiry import InquiryDraft, ProfileId
from creatorlink.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

DRAFT_KEY_PREFIX = "inquiry_draft_"


def draft_key(profile_id: ProfileId) -> str:
    return f"{DRAFT_KEY_PREFIX}{profile_id}"


class DraftRepository:
    """Reads and writes inquiry drafts, one entry per target profile."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self, profile_id: ProfileId, initial: InquiryDraft) -> InquiryDraft:
        """Merge a stored draft over ``initial``.

        The target profile is always re-applied after the merge, so a draft
        stored under another profile's key can never retarget the inquiry.
        Unreadable entries are logged and ignored.
        """
        base = initial.model_copy(update={"profile_id": profile_id})
        raw = self.store.get(draft_key(profile_id))
        if raw is None:
            return base

        try:
            stored = json.loads(raw)
            if not isinstance(stored, dict):
                raise ValueError("stored draft is not an object")
            merged = {**base.model_dump(mode="json"), **stored, "profile_id": profile_id}
            draft = InquiryDraft.model_validate(merged)
        except ValueError as exc:
            logger.warning(
                "inquiry.draft.restore_failed",
                extra={"event": "inquiry.draft.restore_failed", "profile_id": profile_id, "error": str(exc)},
            )
            return base

        logger.info("inquiry.draft.restored", extra={"event": "inquiry.draft.restored", "profile_id": profile_id})
        return draft

    def save(self, draft: InquiryDraft) -> None:
        if draft.profile_id is None:
            raise ValueError("Cannot save a draft without a target profile.")
        self.store.set(draft_key(draft.profile_id), draft.model_dump_json())
        logger.debug("inquiry.draft.saved", extra={"event": "inquiry.draft.saved", "profile_id": draft.profile_id})

    def discard(self, profile_id: ProfileId) -> None:
        self.store.delete(draft_key(profile_id))


class DraftAutosaver:
    """Trailing-edge debounce around a save callback.

    Each ``touch`` supersedes the pending save; the write happens only after
    ``interval_seconds`` pass without another touch. Saves run under the
    lock, so once ``close`` returns no further write can happen.
    """

    def __init__(self, scheduler: Scheduler, save: Callable[[], None], interval_seconds: float) -> None:
        self._scheduler = scheduler
        self._save = save
        self.interval_seconds = interval_seconds
        self._handle: ScheduledHandle | None = None
        self._generation = 0
        self._closed = False
        self._lock = Lock()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def touch(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._handle = self._scheduler.schedule_after(self.interval_seconds, lambda: self._fire(generation))

    def flush(self) -> None:
        with self._lock:
            self._cancel_locked()
            if not self._closed:
                self._save()

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()

    def close(self) -> None:
        """Cancel the pending save and refuse all later ones."""
        with self._lock:
            self._cancel_locked()
            self._closed = True

    def _cancel_locked(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer that lost the race with cancel/touch/close must not write.
            if self._closed or generation != self._generation or self._handle is None:
                return
            self._handle = None
            self._save()
