"""Read-only summary shown on the review step."""

from __future__ import annotations

from creatorlink.core.enums import BudgetRange
from creatorlink.schemas.inquiry import InquiryDraft

NOT_SPECIFIED = "Not specified"


def budget_display(draft: InquiryDraft) -> str:
    if draft.budget_range is BudgetRange.CUSTOM:
        return f"${draft.custom_budget}"
    if draft.budget_range is None:
        return ""
    return draft.budget_range.label


def build_review(draft: InquiryDraft) -> dict[str, dict[str, str]]:
    """Group the draft into the sections rendered before submission."""
    content: dict[str, str] = {
        "content_types": (
            ", ".join(item.value for item in draft.content_types) if draft.content_types else NOT_SPECIFIED
        ),
    }
    if draft.video_length:
        content["video_length"] = draft.video_length.value

    return {
        "project_overview": {
            "company": draft.company_name,
            "contact": f"{draft.first_name} {draft.last_name}".strip(),
            "email": draft.email,
            "industry": draft.industry.value if draft.industry else NOT_SPECIFIED,
        },
        "project_details": {
            "title": draft.project_title,
            "objective": draft.campaign_objective.value if draft.campaign_objective else "",
            "description": draft.project_description,
        },
        "budget_timeline": {
            "budget": budget_display(draft),
            "timeline": draft.timeline.value if draft.timeline else "",
        },
        "content_requirements": content,
    }
