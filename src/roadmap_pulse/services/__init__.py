"""Ranking, voting and panel services."""

from .quota import PanelQuotaService, QuotaProgressTracker, QuotaThresholds, quota_status
from .similarity import DuplicateFinder, dice_similarity, levenshtein_similarity
from .trending import TrendingQuery, TrendingRanker, trending_score
from .vote_aggregator import VoteAggregator, VoteStats
from .vote_weight import VoteWeightCalculator, VoteWeightConfig
from .voting import VotingService
from .weight_refresh import DecayedWeightRefresher, RefreshReport

__all__ = [
    "DecayedWeightRefresher",
    "DuplicateFinder",
    "PanelQuotaService",
    "QuotaProgressTracker",
    "QuotaThresholds",
    "RefreshReport",
    "TrendingQuery",
    "TrendingRanker",
    "VoteAggregator",
    "VoteStats",
    "VoteWeightCalculator",
    "VoteWeightConfig",
    "VotingService",
    "dice_similarity",
    "levenshtein_similarity",
    "quota_status",
    "trending_score",
]
