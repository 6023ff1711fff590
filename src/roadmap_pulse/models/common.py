"""Enumerations and column helpers shared by the ORM models."""

from __future__ import annotations

import uuid
from enum import Enum

from sqlalchemy import Enum as SAEnum


class Role(str, Enum):
    """Application role of a user; drives the vote role multiplier."""

    USER = "USER"
    PM = "PM"
    PO = "PO"
    RESEARCHER = "RESEARCHER"
    MODERATOR = "MODERATOR"
    ADMIN = "ADMIN"


class FeedbackState(str, Enum):
    """Workflow state of a feedback item."""

    NEW = "new"
    TRIAGED = "triaged"
    IN_ROADMAP = "in_roadmap"
    MERGED = "merged"
    CLOSED = "closed"


class ModerationStatus(str, Enum):
    """Moderation outcome for a feedback item."""

    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class VillagePriority(str, Enum):
    """Business priority of a village (site)."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# States that still accept votes and appear in rankings.
OPEN_FEEDBACK_STATES = (
    FeedbackState.NEW,
    FeedbackState.TRIAGED,
    FeedbackState.IN_ROADMAP,
)


def enum_type(enum_cls: type[Enum]) -> SAEnum:
    """Return a portable VARCHAR-backed column type persisting enum values."""
    return SAEnum(
        enum_cls,
        native_enum=False,
        length=32,
        values_callable=lambda members: [member.value for member in members],
        validate_strings=True,
    )


def new_id(prefix: str) -> str:
    """Return a prefixed random identifier such as ``fb_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex[:20]}"
