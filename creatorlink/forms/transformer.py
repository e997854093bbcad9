"""Projection of an inquiry draft into the marketplace submission payload."""

from __future__ import annotations

import logging
import re
from enum import Enum

from creatorlink.core.enums import BudgetBucket, BudgetRange, InquiryType
from creatorlink.schemas.inquiry import InquiryDraft, SubmissionPayload

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"

BUDGET_RANGE_TO_BUCKET = {
    BudgetRange.UNDER_1K: BudgetBucket.UNDER_1K,
    BudgetRange.FROM_1K_TO_5K: BudgetBucket.FROM_1K_TO_5K,
    BudgetRange.FROM_5K_TO_10K: BudgetBucket.FROM_5K_TO_10K,
    BudgetRange.FROM_10K_TO_25K: BudgetBucket.FROM_10K_TO_25K,
    BudgetRange.FROM_25K_TO_50K: BudgetBucket.FROM_25K_TO_50K,
    BudgetRange.OVER_50K: BudgetBucket.OVER_50K,
    BudgetRange.NEGOTIABLE: BudgetBucket.NEGOTIABLE,
}

# Upper bounds (exclusive) for custom amounts; anything above the last is over_50k.
CUSTOM_BUDGET_THRESHOLDS = (
    (1000, BudgetBucket.UNDER_1K),
    (5000, BudgetBucket.FROM_1K_TO_5K),
    (10000, BudgetBucket.FROM_5K_TO_10K),
    (25000, BudgetBucket.FROM_10K_TO_25K),
    (50000, BudgetBucket.FROM_25K_TO_50K),
)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_budget_amount(value: str | int | None) -> int | None:
    """Read the leading integer of a typed amount ("3200", "3200.50", "4000 USD")."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def bucket_for_amount(amount: int) -> BudgetBucket:
    for upper_bound, bucket in CUSTOM_BUDGET_THRESHOLDS:
        if amount < upper_bound:
            return bucket
    return BudgetBucket.OVER_50K


def map_budget_range(budget_range: BudgetRange | str | None, custom_budget: str | int | None = None) -> BudgetBucket:
    """Map a form budget choice to the backend bucket.

    Unrecognized choices fall back to ``negotiable``; the fallback is logged so
    a vocabulary mismatch with the backend does not pass unnoticed.
    """
    try:
        choice = BudgetRange(budget_range) if budget_range is not None else None
    except ValueError:
        choice = None

    if choice is BudgetRange.CUSTOM:
        amount = parse_budget_amount(custom_budget)
        if amount is not None:
            return bucket_for_amount(amount)
    elif choice is not None:
        return BUDGET_RANGE_TO_BUCKET[choice]

    logger.warning(
        "inquiry.budget.unmapped",
        extra={"event": "inquiry.budget.unmapped", "error": f"{budget_range!r}/{custom_budget!r}"},
    )
    return BudgetBucket.NEGOTIABLE


def _text(value: Enum | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return value


def _joined(values: list) -> str:
    return ", ".join(_text(item) for item in values)


def consolidate_target_audience(draft: InquiryDraft) -> str:
    parts: list[str] = []
    if draft.target_age_groups:
        parts.append(f"Age Groups: {_joined(draft.target_age_groups)}")
    if draft.target_gender:
        parts.append(f"Gender: {_text(draft.target_gender)}")
    if draft.target_location:
        parts.append(f"Location: {_text(draft.target_location)}")
    if draft.campaign_objective:
        parts.append(f"Campaign Objective: {_text(draft.campaign_objective)}")
    return "\n".join(parts)


def consolidate_deliverables(draft: InquiryDraft) -> str:
    parts: list[str] = []
    if draft.content_types:
        parts.append(f"Content Types: {_joined(draft.content_types)}")
    if draft.video_length:
        parts.append(f"Video Length: {_text(draft.video_length)}")
    if draft.deliverables:
        parts.append(f"Expected Deliverables: {_joined(draft.deliverables)}")
    if draft.key_messages:
        parts.append(f"Key Messages: {draft.key_messages}")
    if draft.call_to_action:
        parts.append(f"Call to Action: {draft.call_to_action}")
    if draft.content_guidelines:
        parts.append(f"Content Guidelines: {draft.content_guidelines}")
    if draft.exclusivity:
        parts.append(f"Exclusivity: {_text(draft.exclusivity)}")
    if draft.long_term_interest:
        parts.append(f"Long-term Partnership Interest: {_text(draft.long_term_interest)}")
    if draft.additional_requirements:
        parts.append(f"Additional Requirements: {draft.additional_requirements}")
    return "\n\n".join(parts)


def build_detailed_message(draft: InquiryDraft) -> str:
    sections = [f"PROJECT OVERVIEW:\n{draft.project_description}"]

    if draft.industry:
        sections.append(f"INDUSTRY: {_text(draft.industry)}")

    target_audience = consolidate_target_audience(draft)
    if target_audience:
        sections.append(f"TARGET AUDIENCE:\n{target_audience}")

    deliverables = consolidate_deliverables(draft)
    if deliverables:
        sections.append(f"PROJECT DETAILS:\n{deliverables}")

    if draft.deadline_date:
        sections.append(f"SPECIFIC DEADLINE: {draft.deadline_date.isoformat()}")

    return SECTION_SEPARATOR.join(sections)


def build_submission_payload(draft: InquiryDraft) -> SubmissionPayload:
    if draft.profile_id is None:
        raise ValueError("Draft has no target profile.")
    return SubmissionPayload(
        youtuber=draft.profile_id,
        first_name=draft.first_name,
        last_name=draft.last_name,
        email=draft.email,
        phone=draft.phone or "",
        company_name=draft.company_name,
        website=draft.website or "",
        inquiry_type=(
            InquiryType.COLLABORATION if draft.inquiry_type is InquiryType.COLLABORATION else InquiryType.GENERAL
        ),
        budget_range=map_budget_range(draft.budget_range, draft.custom_budget),
        project_timeline=_text(draft.timeline),
        subject=draft.project_title,
        message=build_detailed_message(draft),
        target_audience=consolidate_target_audience(draft),
        deliverables=consolidate_deliverables(draft),
    )
