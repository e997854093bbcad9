"""Deterministic per-step validation rules for the inquiry form."""

from __future__ import annotations

import re

from creatorlink.core.enums import BudgetRange
from creatorlink.schemas.inquiry import InquiryDraft

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_DESCRIPTION_LENGTH = 50


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def _validate_basic_information(draft: InquiryDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not draft.company_name.strip():
        errors["company_name"] = "Company/Individual name is required"
    if not draft.first_name.strip():
        errors["first_name"] = "First name is required"
    if not draft.last_name.strip():
        errors["last_name"] = "Last name is required"
    if not draft.email.strip():
        errors["email"] = "Email is required"
    elif not is_valid_email(draft.email):
        errors["email"] = "Please enter a valid email address"
    return errors


def _validate_project_details(draft: InquiryDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not draft.project_title.strip():
        errors["project_title"] = "Project title is required"
    if not draft.project_description.strip():
        errors["project_description"] = "Project description is required"
    elif len(draft.project_description) < MIN_DESCRIPTION_LENGTH:
        errors["project_description"] = f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
    if draft.campaign_objective is None:
        errors["campaign_objective"] = "Campaign objective is required"
    return errors


def _validate_budget_and_timeline(draft: InquiryDraft) -> dict[str, str]:
    errors: dict[str, str] = {}
    if draft.budget_range is None:
        errors["budget_range"] = "Budget range is required"
    if draft.budget_range is BudgetRange.CUSTOM and not draft.custom_budget.strip():
        errors["custom_budget"] = "Custom budget amount is required"
    if draft.timeline is None:
        errors["timeline"] = "Timeline is required"
    return errors


def _validate_content_requirements(draft: InquiryDraft) -> dict[str, str]:
    if not draft.content_types:
        return {"content_types": "Please select at least one content type"}
    return {}


_STEP_RULES = {
    1: _validate_basic_information,
    2: _validate_project_details,
    3: _validate_budget_and_timeline,
    4: _validate_content_requirements,
}


def validate_step(step: int, draft: InquiryDraft) -> dict[str, str]:
    """Return field -> message for every rule the draft breaks at ``step``.

    Steps without rules (5 and the review step) always pass.
    """
    rule = _STEP_RULES.get(step)
    if rule is None:
        return {}
    return rule(draft)
