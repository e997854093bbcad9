"""Enumerated vocabularies for the collaboration inquiry form.

Values match what the marketplace front end sends, so persisted drafts and
payloads stay readable by both sides.
"""

from __future__ import annotations

from enum import Enum


class Industry(str, Enum):
    TECHNOLOGY = "Technology"
    FASHION = "Fashion"
    FOOD_BEVERAGE = "Food & Beverage"
    GAMING = "Gaming"
    EDUCATION = "Education"
    HEALTH_FITNESS = "Health & Fitness"
    BEAUTY_COSMETICS = "Beauty & Cosmetics"
    TRAVEL = "Travel"
    FINANCE = "Finance"
    AUTOMOTIVE = "Automotive"
    ENTERTAINMENT = "Entertainment"
    REAL_ESTATE = "Real Estate"
    OTHER = "Other"


class CampaignObjective(str, Enum):
    BRAND_AWARENESS = "Brand Awareness"
    PRODUCT_LAUNCH = "Product Launch"
    LEAD_GENERATION = "Lead Generation"
    SALES_CONVERSION = "Sales Conversion"
    EVENT_PROMOTION = "Event Promotion"
    OTHER = "Other"


class AgeGroup(str, Enum):
    AGE_13_17 = "13-17"
    AGE_18_24 = "18-24"
    AGE_25_34 = "25-34"
    AGE_35_44 = "35-44"
    AGE_45_54 = "45-54"
    AGE_55_PLUS = "55+"


class TargetGender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    ALL = "all"


class TargetLocation(str, Enum):
    LOCAL = "local"
    NATIONAL = "national"
    INTERNATIONAL = "international"


class BudgetRange(str, Enum):
    """Budget options offered on the form (finer than the backend buckets)."""

    UNDER_1K = "500-1000"
    FROM_1K_TO_5K = "1000-5000"
    FROM_5K_TO_10K = "5000-10000"
    FROM_10K_TO_25K = "10000-25000"
    FROM_25K_TO_50K = "25000-50000"
    OVER_50K = "50000+"
    NEGOTIABLE = "negotiable"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return BUDGET_RANGE_LABELS[self]


BUDGET_RANGE_LABELS = {
    BudgetRange.UNDER_1K: "Under $1,000",
    BudgetRange.FROM_1K_TO_5K: "$1,000 - $5,000",
    BudgetRange.FROM_5K_TO_10K: "$5,000 - $10,000",
    BudgetRange.FROM_10K_TO_25K: "$10,000 - $25,000",
    BudgetRange.FROM_25K_TO_50K: "$25,000 - $50,000",
    BudgetRange.OVER_50K: "$50,000+",
    BudgetRange.NEGOTIABLE: "Budget Negotiable",
    BudgetRange.CUSTOM: "Custom Amount",
}


class BudgetBucket(str, Enum):
    """Budget categories accepted by the marketplace backend."""

    UNDER_1K = "under_1k"
    FROM_1K_TO_5K = "1k_5k"
    FROM_5K_TO_10K = "5k_10k"
    FROM_10K_TO_25K = "10k_25k"
    FROM_25K_TO_50K = "25k_50k"
    OVER_50K = "over_50k"
    NEGOTIABLE = "negotiable"


class Timeline(str, Enum):
    ASAP = "ASAP (within 1 week)"
    TWO_TO_FOUR_WEEKS = "2-4 weeks"
    ONE_TO_TWO_MONTHS = "1-2 months"
    TWO_TO_THREE_MONTHS = "2-3 months"
    FLEXIBLE = "Flexible"


class ContentType(str, Enum):
    DEDICATED_REVIEW = "Dedicated Video Review"
    PRODUCT_PLACEMENT = "Product Integration/Placement"
    SPONSORED_SEGMENT = "Sponsored Segment"
    FULL_SPONSORED_VIDEO = "Full Sponsored Video"
    SHORTS = "YouTube Shorts"
    LIVE_STREAM_MENTION = "Live Stream Mention"
    STORY_POSTS = "Story Posts"
    CUSTOM_CONTENT = "Custom Content"


class VideoLength(str, Enum):
    UNDER_ONE_MINUTE = "30 seconds - 1 minute"
    ONE_TO_THREE_MINUTES = "1-3 minutes"
    THREE_TO_FIVE_MINUTES = "3-5 minutes"
    FIVE_TO_TEN_MINUTES = "5-10 minutes"
    OVER_TEN_MINUTES = "10+ minutes"
    CREATOR_DISCRETION = "Creator's discretion"


class Deliverable(str, Enum):
    RAW_FOOTAGE = "Raw footage"
    FINAL_EDIT = "Final edited video"
    ANALYTICS_REPORT = "Analytics report"
    CROSS_PROMOTION = "Social media cross-promotion"
    USAGE_RIGHTS = "Usage rights for repurposing"
    BEHIND_THE_SCENES = "Behind-the-scenes content"


class Exclusivity(str, Enum):
    FULL = "Exclusive partnership (no competitors)"
    CATEGORY = "Category exclusivity"
    NONE = "No exclusivity needed"


class LongTermInterest(str, Enum):
    YES = "Yes"
    NO = "No"
    MAYBE = "Maybe"


class InquiryType(str, Enum):
    COLLABORATION = "collaboration"
    GENERAL = "general"


class InquiryStatus(str, Enum):
    """Workflow status of a submitted inquiry on the creator side."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    RESPONDED = "responded"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COMPLETED = "completed"
