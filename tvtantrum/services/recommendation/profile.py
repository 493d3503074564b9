import math
from collections import Counter
from collections.abc import Sequence

from loguru import logger

from tvtantrum.models.show import Show
from tvtantrum.models.taste_profile import TasteProfile
from tvtantrum.services.recommendation.constants import COMMON_THEME_MIN_COUNT, COMMON_THEME_RATIO


def round_half_up(value: float) -> int:
    """Round .5 upwards (2.5 -> 3), unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


class TasteProfileBuilder:
    """
    Builds a taste profile from a snapshot of favorited shows.

    - avg_stimulation_score: mean stimulation score, rounded half up
    - common_themes: themes carried by at least ceil(n * 0.25) favorites (min 1)

    Theme labels are counted once per show and compared exactly.
    """

    @staticmethod
    def common_theme_threshold(favorite_count: int) -> int:
        return max(COMMON_THEME_MIN_COUNT, math.ceil(favorite_count * COMMON_THEME_RATIO))

    def build(self, favorites: Sequence[Show]) -> TasteProfile:
        if not favorites:
            return TasteProfile()

        count = len(favorites)
        mean = sum(show.stimulation_score for show in favorites) / count

        theme_counts: Counter[str] = Counter()
        for show in favorites:
            theme_counts.update(set(show.themes))

        threshold = self.common_theme_threshold(count)
        common = {theme for theme, freq in theme_counts.items() if freq >= threshold}

        profile = TasteProfile(
            favorite_count=count,
            avg_stimulation_score=round_half_up(mean),
            theme_counts=dict(theme_counts),
            common_theme_threshold=threshold,
            common_themes=common,
            favorite_ids={show.id for show in favorites},
        )
        logger.debug(
            f"Built taste profile from {count} favorites: avg stimulation {profile.avg_stimulation_score}, "
            f"{len(common)} common theme(s) (threshold {threshold})"
        )
        return profile
