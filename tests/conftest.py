# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable, Generator, Iterator, Sequence
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from roadmap_pulse.db.session import Base, build_engine
from roadmap_pulse.db.session import get_db as app_get_session
from roadmap_pulse.main import app as fastapi_app
from roadmap_pulse.models import (
    Feature,
    Feedback,
    FeedbackState,
    ModerationStatus,
    Panel,
    PanelMembership,
    PanelQuota,
    Role,
    User,
    Village,
    VillagePriority,
    Vote,
)
from roadmap_pulse.services.vote_weight import VoteWeightConfig

TEST_DB_URL = "sqlite://"

_USER_COUNTER = count(1)
_FEEDBACK_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def now() -> datetime:
    """A fixed reference time for deterministic scoring."""
    return datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def weight_config() -> VoteWeightConfig:
    """Weight tables with the stock values, independent of any .env overrides."""
    return VoteWeightConfig(
        role_weights={
            "USER": 1.0,
            "PM": 2.0,
            "PO": 3.0,
            "RESEARCHER": 1.5,
            "MODERATOR": 1.0,
            "ADMIN": 1.0,
        },
        village_priority_weights={"high": 1.5, "medium": 1.0, "low": 0.5},
        panel_membership_boost=0.3,
        half_life_days=180.0,
    )


@pytest.fixture()
def make_village(db_session: Session) -> Callable[..., Village]:
    def _make(priority: VillagePriority = VillagePriority.MEDIUM, name: str = "Village") -> Village:
        village = Village(name=name, priority=priority)
        db_session.add(village)
        db_session.flush()
        return village

    return _make


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make(role: Role = Role.USER, display_name: str | None = None, **kwargs: Any) -> User:
        user = User(
            display_name=display_name or f"User {next(_USER_COUNTER)}",
            role=role,
            **kwargs,
        )
        db_session.add(user)
        db_session.flush()
        return user

    return _make


@pytest.fixture()
def make_feature(db_session: Session) -> Callable[..., Feature]:
    def _make(area: str = "Reservations", title: str = "Booking flow") -> Feature:
        feature = Feature(title=title, area=area)
        db_session.add(feature)
        db_session.flush()
        return feature

    return _make


@pytest.fixture()
def make_feedback(
    db_session: Session,
    make_user: Callable[..., User],
    now: datetime,
) -> Callable[..., Feedback]:
    def _make(
        title: str | None = None,
        *,
        author: User | None = None,
        created_at: datetime | None = None,
        state: FeedbackState = FeedbackState.NEW,
        moderation_status: ModerationStatus = ModerationStatus.APPROVED,
        **kwargs: Any,
    ) -> Feedback:
        author = author or make_user()
        feedback = Feedback(
            title=title or f"Feedback {next(_FEEDBACK_COUNTER)}",
            body=kwargs.pop("body", "Details"),
            author_id=author.id,
            created_at=created_at or now - timedelta(days=1),
            state=state,
            moderation_status=moderation_status,
            **kwargs,
        )
        db_session.add(feedback)
        db_session.flush()
        return feedback

    return _make


@pytest.fixture()
def make_vote(db_session: Session, make_user: Callable[..., User], now: datetime) -> Callable[..., Vote]:
    def _make(
        feedback: Feedback,
        *,
        user: User | None = None,
        weight: float = 1.0,
        created_at: datetime | None = None,
        decayed_weight: float | None = None,
    ) -> Vote:
        user = user or make_user()
        vote = Vote(
            feedback_id=feedback.id,
            user_id=user.id,
            weight=weight,
            decayed_weight=decayed_weight,
            created_at=created_at or now,
        )
        db_session.add(vote)
        db_session.flush()
        return vote

    return _make


@pytest.fixture()
def make_panel(db_session: Session) -> Callable[..., Panel]:
    def _make(
        quotas: Sequence[dict[str, Any]] = (),
        members: Sequence[dict[str, Any]] = (),
        name: str = "Guest experience panel",
    ) -> Panel:
        panel = Panel(name=name, size_target=len(members) or None)
        db_session.add(panel)
        db_session.flush()
        for position, quota in enumerate(quotas):
            db_session.add(PanelQuota(panel_id=panel.id, position=position, **quota))
        for member in members:
            db_session.add(PanelMembership(panel_id=panel.id, **member))
        db_session.flush()
        db_session.refresh(panel)
        return panel

    return _make
