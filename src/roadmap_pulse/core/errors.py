"""Exception types raised by the ranking and voting services."""

from __future__ import annotations


class RoadmapPulseError(RuntimeError):
    """Base exception for service-level failures."""


class NotFoundError(RoadmapPulseError):
    """Raised when a referenced entity does not exist.

    Attributes:
        entity: Human-readable entity name, e.g. ``"User"`` or ``"Feedback"``.
        entity_id: Identifier that failed to resolve.
    """

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class AlreadyVotedError(RoadmapPulseError):
    """Raised when a user votes twice on the same feedback item."""

    def __init__(self, user_id: str, feedback_id: str) -> None:
        self.user_id = user_id
        self.feedback_id = feedback_id
        super().__init__(f"User {user_id} has already voted on feedback {feedback_id}")
