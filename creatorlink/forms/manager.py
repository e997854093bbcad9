"""Inquiry draft and submission manager.

One manager backs one open collaboration-inquiry form: it owns the draft,
the current step, the error set shown next to fields, draft auto-save, and
the final submission to the marketplace.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Protocol

from pydantic import ValidationError as PydanticValidationError

from creatorlink.core.exceptions import MarketplaceAPIError, StepTransitionError, ValidationError
from creatorlink.core.scheduler import Scheduler
from creatorlink.forms.review import build_review
from creatorlink.forms.state_machine import StepController
from creatorlink.forms.transformer import build_submission_payload
from creatorlink.forms.validators import validate_step
from creatorlink.schemas.inquiry import MULTI_SELECT_FIELDS, InquiryDraft, ProfileId, editable_fields
from creatorlink.storage.drafts import DraftAutosaver, DraftRepository
from creatorlink.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

SUBMIT_ERROR_KEY = "submit"
GENERIC_SUBMIT_ERROR = "Failed to submit inquiry. Please check your information and try again."
NETWORK_SUBMIT_ERROR = "Network error. Please check your connection and try again."


class InquirySubmitter(Protocol):
    def submit_inquiry(self, payload: dict[str, Any]) -> Any: ...


@dataclass
class SubmissionOutcome:
    ok: bool
    response: Any = None
    errors: dict[str, str] = field(default_factory=dict)


def describe_backend_errors(body: Any) -> str:
    """Render a field-keyed error body as ``field: message`` lines."""
    if not isinstance(body, Mapping):
        return NETWORK_SUBMIT_ERROR
    lines = []
    for name, detail in body.items():
        if isinstance(detail, (list, tuple)):
            lines.append(f"{name}: {', '.join(str(item) for item in detail)}")
        else:
            lines.append(f"{name}: {detail}")
    return "\n".join(lines) if lines else GENERIC_SUBMIT_ERROR


class InquiryFormManager:
    def __init__(
        self,
        profile_id: ProfileId,
        store: KeyValueStore | None,
        submitter: InquirySubmitter,
        scheduler: Scheduler,
        autosave_interval_seconds: float = 30.0,
        user_email: str | None = None,
        on_success: Callable[[Any], None] | None = None,
    ) -> None:
        self.profile_id = profile_id
        self.errors: dict[str, str] = {}
        self.is_submitting = False
        self.submitted = False
        self._submit_lock = Lock()
        self._submitter = submitter
        self._on_success = on_success
        self._drafts = DraftRepository(store) if store is not None else None
        initial = InquiryDraft(profile_id=profile_id, email=user_email or "")
        self._draft = self._drafts.load(profile_id, initial) if self._drafts is not None else initial
        self._steps = StepController(lambda step: validate_step(step, self._draft))
        self._autosaver = DraftAutosaver(scheduler, self._save_current, autosave_interval_seconds)

    @property
    def draft(self) -> InquiryDraft:
        return self._draft

    @property
    def step(self) -> int:
        return self._steps.step

    @property
    def step_title(self) -> str:
        return self._steps.title

    @property
    def progress_percent(self) -> int:
        return self._steps.progress_percent

    @property
    def drafts_enabled(self) -> bool:
        return self._drafts is not None

    @property
    def autosave_pending(self) -> bool:
        return self._autosaver.pending

    def _ensure_editable(self) -> None:
        if self.submitted:
            raise StepTransitionError("This inquiry has already been submitted.")

    def update_fields(self, changes: Mapping[str, Any]) -> InquiryDraft:
        self._ensure_editable()
        allowed = editable_fields()
        unknown = [name for name in changes if name not in allowed]
        if unknown:
            raise ValidationError(f"Unknown or read-only field(s): {', '.join(sorted(unknown))}")

        try:
            updated = InquiryDraft.model_validate(
                {**self._draft.model_dump(), **changes, "profile_id": self.profile_id}
            )
        except PydanticValidationError as exc:
            raise ValidationError(str(exc)) from exc

        self._draft = updated
        for name in changes:
            self.errors.pop(name, None)
        if self._drafts is not None:
            self._autosaver.touch()
        return updated

    def update_field(self, name: str, value: Any) -> InquiryDraft:
        return self.update_fields({name: value})

    def toggle_selection(self, name: str, value: str, checked: bool) -> InquiryDraft:
        if name not in MULTI_SELECT_FIELDS:
            raise ValidationError(f"{name} is not a multi-select field")
        current = [item.value for item in getattr(self._draft, name)]
        if checked and value not in current:
            current.append(value)
        elif not checked:
            current = [item for item in current if item != value]
        return self.update_fields({name: current})

    def advance(self) -> dict[str, str]:
        self.errors = self._steps.advance()
        return dict(self.errors)

    def retreat(self) -> int:
        return self._steps.retreat()

    def review(self) -> dict[str, dict[str, str]]:
        return build_review(self._draft)

    def save_draft(self) -> None:
        self._ensure_editable()
        if self._drafts is not None:
            self._autosaver.flush()

    def close(self, flush: bool = False) -> None:
        """Stop auto-saving for good; ``flush`` writes unsaved edits first."""
        try:
            if flush and self._autosaver.pending:
                self._autosaver.flush()
        finally:
            self._autosaver.close()

    def _save_current(self) -> None:
        if self._drafts is not None:
            self._drafts.save(self._draft)

    def submit(self) -> SubmissionOutcome:
        with self._submit_lock:
            self._ensure_editable()
            if not self._steps.is_review:
                raise StepTransitionError("Inquiries can only be submitted from the review step.")
            if self.is_submitting:
                raise StepTransitionError("A submission is already in progress.")

            self.errors = validate_step(self.step, self._draft)
            if self.errors:
                return SubmissionOutcome(ok=False, errors=dict(self.errors))
            self.is_submitting = True

        try:
            payload = build_submission_payload(self._draft).model_dump(mode="json")
            response = self._submitter.submit_inquiry(payload)
        except MarketplaceAPIError as exc:
            message = describe_backend_errors(exc.body) if exc.has_response else NETWORK_SUBMIT_ERROR
            self.errors = {SUBMIT_ERROR_KEY: message}
            logger.warning(
                "inquiry.submit.failed",
                extra={
                    "event": "inquiry.submit.failed",
                    "profile_id": self.profile_id,
                    "status_code": exc.status_code,
                },
            )
            return SubmissionOutcome(ok=False, errors=dict(self.errors))
        else:
            self.submitted = True
        finally:
            self.is_submitting = False

        self._autosaver.close()
        if self._drafts is not None:
            self._drafts.discard(self.profile_id)
        logger.info(
            "inquiry.submit.succeeded",
            extra={"event": "inquiry.submit.succeeded", "profile_id": self.profile_id},
        )
        if self._on_success is not None:
            self._on_success(response)
        return SubmissionOutcome(ok=True, response=response)
