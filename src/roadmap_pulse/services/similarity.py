"""String similarity scoring and duplicate-feedback detection.

Two interchangeable scorers share the same contract: both take two strings
and return a float in ``[0, 1]`` where ``1.0`` means identical after
lower-casing.

- :func:`dice_similarity`: Sorensen-Dice coefficient over the *sets* of
  overlapping character bigrams. This is the default scorer.
- :func:`levenshtein_similarity`: ``1 - distance / longest_length`` for
  callers that prefer edit-distance semantics.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from roadmap_pulse.core.settings import settings
from roadmap_pulse.models import FeedbackState
from roadmap_pulse.repositories.feedback_repo import FeedbackRepository

logger = logging.getLogger(__name__)

Scorer = Callable[[str, str], float]

# Lower bounds for the human-readable similarity bands, highest first.
SIMILARITY_LEVELS: tuple[tuple[float, str], ...] = (
    (0.95, "Almost Identical"),
    (0.9, "Very Similar"),
    (0.85, "Similar"),
    (0.75, "Somewhat Similar"),
)


def _require_strings(a: object, b: object) -> None:
    if not isinstance(a, str) or not isinstance(b, str):
        raise TypeError("similarity is only defined for str inputs")


def _bigrams(text: str) -> set[str]:
    return {text[i : i + 2] for i in range(len(text) - 1)}


def dice_similarity(a: str, b: str) -> float:
    """Return the Dice coefficient of the character bigrams of ``a`` and ``b``.

    Raises:
        TypeError: If either argument is not a string.
    """
    _require_strings(a, b)
    a, b = a.lower(), b.lower()
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    # A single character has no bigram; only equality could have matched.
    if len(a) < 2 or len(b) < 2:
        return 0.0

    left, right = _bigrams(a), _bigrams(b)
    return 2.0 * len(left & right) / (len(left) + len(right))


def levenshtein_distance(a: str, b: str) -> int:
    """Return the number of single-character edits turning ``a`` into ``b``."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def levenshtein_similarity(a: str, b: str) -> float:
    """Return ``1 - distance / max(len(a), len(b))`` on lower-cased input.

    Raises:
        TypeError: If either argument is not a string.
    """
    _require_strings(a, b)
    a, b = a.lower(), b.lower()
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


def similarity_level(score: float) -> str:
    """Return a human-readable band for a similarity score."""
    for lower_bound, label in SIMILARITY_LEVELS:
        if score >= lower_bound:
            return label
    return "Different"


@dataclass(frozen=True, slots=True)
class DuplicateCandidate:
    """Existing feedback whose title resembles a candidate title."""

    id: str
    title: str
    state: FeedbackState
    similarity: float

    @property
    def level(self) -> str:
        """Return the similarity band label."""
        return similarity_level(self.similarity)


class DuplicateFinder:
    """Scan existing feedback titles for likely duplicates of a new one."""

    def __init__(
        self,
        repo: FeedbackRepository,
        scorer: Scorer = dice_similarity,
        default_threshold: float | None = None,
    ) -> None:
        """Initialize the finder.

        Args:
            repo: Repository used to list candidate feedback.
            scorer: Similarity function; Dice bigram overlap by default.
            default_threshold: Threshold used when callers pass none; falls
                back to ``settings.duplicate_similarity_threshold``.
        """
        self.repo = repo
        self.scorer = scorer
        self.default_threshold = (
            settings.duplicate_similarity_threshold
            if default_threshold is None
            else default_threshold
        )

    @classmethod
    def from_session(cls, session: Session, scorer: Scorer = dice_similarity) -> DuplicateFinder:
        """Build a finder over the given session with configured defaults."""
        return cls(FeedbackRepository(session), scorer=scorer)

    def find_duplicates(
        self,
        title: str,
        exclude_id: str | None = None,
        threshold: float | None = None,
    ) -> list[DuplicateCandidate]:
        """Return non-merged feedback scoring at least ``threshold`` against ``title``.

        Results are sorted by similarity, highest first. Feedback with id
        ``exclude_id`` (typically the item being edited) is ignored.
        """
        if not isinstance(title, str):
            raise TypeError("title must be a str")
        cutoff = self.default_threshold if threshold is None else threshold

        matches: list[DuplicateCandidate] = []
        for feedback in self.repo.list_duplicate_candidates(exclude_id=exclude_id):
            score = self.scorer(title, feedback.title)
            if score >= cutoff:
                matches.append(
                    DuplicateCandidate(
                        id=feedback.id,
                        title=feedback.title,
                        state=feedback.state,
                        similarity=score,
                    )
                )

        matches.sort(key=lambda match: match.similarity, reverse=True)
        logger.debug(
            "Duplicate scan for %r found %d match(es) at threshold %.2f",
            title,
            len(matches),
            cutoff,
        )
        return matches
