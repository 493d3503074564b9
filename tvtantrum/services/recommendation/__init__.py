"""
Show recommendations.

Taste-profile recommendations for a user's favorites, plus "more like this"
similarity between two shows. Ranking code is pure; RecommendationService
wires it to storage.
"""

from tvtantrum.services.recommendation.engine import ScoredShow, rank_candidates, score_candidates
from tvtantrum.services.recommendation.profile import TasteProfileBuilder, round_half_up
from tvtantrum.services.recommendation.scoring import RecommendationScoring
from tvtantrum.services.recommendation.service import RecommendationService, recommendation_service
from tvtantrum.services.recommendation.similar import ShowSimilarity, age_ranges_overlap, parse_age_range

__all__ = [
    "RecommendationScoring",
    "RecommendationService",
    "ScoredShow",
    "ShowSimilarity",
    "TasteProfileBuilder",
    "age_ranges_overlap",
    "parse_age_range",
    "rank_candidates",
    "recommendation_service",
    "round_half_up",
    "score_candidates",
]
