from tvtantrum.models.show import Show
from tvtantrum.models.taste_profile import TasteProfile
from tvtantrum.services.recommendation.constants import STIMULATION_CLOSENESS_MAX, THEME_MATCH_WEIGHT


class RecommendationScoring:
    """
    Scores a candidate against a taste profile:

        score = (5 - |stimulation - avg|) + 3 * matching common themes
    """

    @staticmethod
    def stimulation_closeness(candidate: Show, avg_stimulation_score: int) -> int:
        return STIMULATION_CLOSENESS_MAX - abs(candidate.stimulation_score - avg_stimulation_score)

    @staticmethod
    def theme_matches(candidate: Show, common_themes: set[str]) -> int:
        """Number of distinct candidate themes found in the common set."""
        return len(set(candidate.themes) & common_themes)

    @classmethod
    def score(cls, candidate: Show, profile: TasteProfile) -> int:
        if profile.avg_stimulation_score is None:
            raise ValueError("Cannot score against an empty taste profile")
        closeness = cls.stimulation_closeness(candidate, profile.avg_stimulation_score)
        return closeness + THEME_MATCH_WEIGHT * cls.theme_matches(candidate, profile.common_themes)
