from collections.abc import Sequence

from pydantic import BaseModel

from tvtantrum.models.show import Show
from tvtantrum.models.taste_profile import TasteProfile
from tvtantrum.services.recommendation.constants import STIMULATION_WINDOW
from tvtantrum.services.recommendation.profile import TasteProfileBuilder
from tvtantrum.services.recommendation.scoring import RecommendationScoring


class ScoredShow(BaseModel):
    show: Show
    score: int


def validate_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")


def in_stimulation_window(show: Show, profile: TasteProfile, window: int = STIMULATION_WINDOW) -> bool:
    low, high = profile.stimulation_range(window)
    return low <= show.stimulation_score <= high


def score_candidates(profile: TasteProfile, candidates: Sequence[Show]) -> list[ScoredShow]:
    """
    Score and rank candidates against a profile.

    Favorited shows and shows outside the stimulation window are dropped even
    if the caller's pool contained them. The sort is stable, so equal scores
    keep the pool's incoming order.
    """
    scored = [
        ScoredShow(show=show, score=RecommendationScoring.score(show, profile))
        for show in candidates
        if show.id not in profile.favorite_ids and in_stimulation_window(show, profile)
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def rank_candidates(favorites: Sequence[Show], candidates: Sequence[Show], limit: int = 5) -> list[Show]:
    """
    Rank a candidate pool against the taste profile of `favorites`.

    Pure: no storage access. With no favorites there is nothing to rank
    against and the result is empty; the popularity fallback is the
    caller's concern.
    """
    validate_limit(limit)
    profile = TasteProfileBuilder().build(favorites)
    if profile.is_empty:
        return []
    return [item.show for item in score_candidates(profile, candidates)[:limit]]
