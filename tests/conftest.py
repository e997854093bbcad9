from __future__ import annotations

from typing import Any, Callable

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from creatorlink.core.exceptions import MarketplaceAPIError
from creatorlink.database.db import Base
from creatorlink.database.models import KeyValueEntry  # noqa: F401
from creatorlink.forms.manager import InquiryFormManager
from creatorlink.storage.kv import MemoryKeyValueStore

VALID_DESCRIPTION = (
    "We are launching a new line of trail running shoes and want an honest review video."
)


class FakeHandle:
    def __init__(self, delay_seconds: float, fn: Callable[[], None]) -> None:
        self.delay_seconds = delay_seconds
        self.fn = fn
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records scheduled calls; tests fire them explicitly."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def schedule_after(self, delay_seconds: float, fn: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(delay_seconds, fn)
        self.handles.append(handle)
        return handle

    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire_pending(self) -> None:
        for handle in self.pending():
            handle.fired = True
            handle.fn()


class FakeSubmitter:
    def __init__(self, response: Any = None, error: MarketplaceAPIError | None = None) -> None:
        self.response = response if response is not None else {"id": 101, "status": "pending"}
        self.error = error
        self.payloads: list[dict[str, Any]] = []

    def submit_inquiry(self, payload: dict[str, Any]) -> Any:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.response


def complete_fields() -> dict[str, Any]:
    """Field values that satisfy every step's rules."""
    return {
        "company_name": "Trailhead Gear",
        "first_name": "Jane",
        "last_name": "Doe",
        "email": "jane@trailhead.example",
        "industry": "Health & Fitness",
        "project_title": "Spring trail shoe launch",
        "project_description": VALID_DESCRIPTION,
        "campaign_objective": "Product Launch",
        "target_age_groups": ["18-24", "25-34"],
        "target_gender": "all",
        "target_location": "national",
        "budget_range": "custom",
        "custom_budget": "3200",
        "timeline": "2-4 weeks",
        "content_types": ["Dedicated Video Review"],
        "video_length": "5-10 minutes",
    }


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def submitter():
    return FakeSubmitter()


@pytest.fixture
def make_manager(store, scheduler, submitter):
    def _make(profile_id=7, **kwargs) -> InquiryFormManager:
        kwargs.setdefault("submitter", submitter)
        return InquiryFormManager(
            profile_id=profile_id,
            store=store,
            scheduler=scheduler,
            autosave_interval_seconds=30,
            **kwargs,
        )

    return _make


@pytest.fixture
def review_ready_manager(make_manager):
    manager = make_manager()
    manager.update_fields(complete_fields())
    for _ in range(5):
        assert manager.advance() == {}
    assert manager.step == 6
    return manager


@pytest.fixture
def sql_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def filled_fields():
    return complete_fields()


@pytest.fixture
def submitter_factory():
    return FakeSubmitter
