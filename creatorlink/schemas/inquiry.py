"""Inquiry draft, submission payload and form-session API schemas."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from creatorlink.core.enums import (
    AgeGroup,
    BudgetBucket,
    BudgetRange,
    CampaignObjective,
    ContentType,
    Deliverable,
    Exclusivity,
    Industry,
    InquiryStatus,
    InquiryType,
    LongTermInterest,
    TargetGender,
    TargetLocation,
    Timeline,
    VideoLength,
)

ProfileId = int | str

SINGLE_CHOICE_FIELDS = (
    "industry",
    "campaign_objective",
    "target_gender",
    "target_location",
    "budget_range",
    "timeline",
    "video_length",
    "exclusivity",
    "long_term_interest",
)
MULTI_SELECT_FIELDS = ("target_age_groups", "content_types", "deliverables")
SYSTEM_FIELDS = ("profile_id", "inquiry_type")


class InquiryDraft(BaseModel):
    """In-progress collaboration inquiry as collected by the form."""

    model_config = ConfigDict(extra="ignore")

    # Basic information
    company_name: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    industry: Industry | None = None

    # Project details
    project_title: str = ""
    project_description: str = ""
    campaign_objective: CampaignObjective | None = None
    target_age_groups: list[AgeGroup] = Field(default_factory=list)
    target_gender: TargetGender | None = None
    target_location: TargetLocation | None = None

    # Budget & timeline
    budget_range: BudgetRange | None = None
    custom_budget: str = ""
    timeline: Timeline | None = None
    deadline_date: date | None = None

    # Content requirements
    content_types: list[ContentType] = Field(default_factory=list)
    video_length: VideoLength | None = None
    key_messages: str = ""
    call_to_action: str = ""
    content_guidelines: str = ""

    # Additional preferences
    deliverables: list[Deliverable] = Field(default_factory=list)
    exclusivity: Exclusivity | None = None
    long_term_interest: LongTermInterest | None = None
    additional_requirements: str = ""

    profile_id: ProfileId | None = None
    inquiry_type: InquiryType = InquiryType.COLLABORATION

    @field_validator(*SINGLE_CHOICE_FIELDS, "deadline_date", mode="before")
    @classmethod
    def _blank_is_unselected(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator(*MULTI_SELECT_FIELDS, mode="before")
    @classmethod
    def _none_is_empty_selection(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator(*MULTI_SELECT_FIELDS)
    @classmethod
    def _selection_is_a_set(cls, value: list) -> list:
        return list(dict.fromkeys(value))

    @field_validator("custom_budget", mode="before")
    @classmethod
    def _custom_budget_as_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _custom_budget_only_for_custom_range(self) -> "InquiryDraft":
        if self.budget_range is not BudgetRange.CUSTOM and self.custom_budget:
            self.custom_budget = ""
        return self


def editable_fields() -> tuple[str, ...]:
    return tuple(name for name in InquiryDraft.model_fields if name not in SYSTEM_FIELDS)


class SubmissionPayload(BaseModel):
    """Body of the marketplace `youtubers/inquiry/` POST."""

    youtuber: ProfileId
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    company_name: str
    website: str = ""
    inquiry_type: InquiryType
    budget_range: BudgetBucket
    project_timeline: str = ""
    subject: str
    message: str
    target_audience: str = ""
    deliverables: str = ""


class CreateSessionRequest(BaseModel):
    profile_id: ProfileId
    email: str | None = Field(default=None, max_length=320)


class ToggleSelectionRequest(BaseModel):
    field: str = Field(min_length=1, max_length=64)
    value: str = Field(min_length=1, max_length=120)
    checked: bool


class InquiryStatusUpdateRequest(BaseModel):
    status: InquiryStatus


class SessionSnapshot(BaseModel):
    session_id: str
    profile_id: ProfileId
    step: int
    step_title: str
    progress_percent: int
    draft: InquiryDraft
    errors: dict[str, str] = Field(default_factory=dict)
    is_submitting: bool = False
    submitted: bool = False
    drafts_enabled: bool = False


class SubmitResponse(BaseModel):
    ok: bool
    response: Any = None
    errors: dict[str, str] = Field(default_factory=dict)
