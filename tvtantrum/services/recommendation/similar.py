import re
from collections.abc import Sequence

from loguru import logger

from tvtantrum.models.sensory import NormalizedLevel
from tvtantrum.models.show import Show
from tvtantrum.services.recommendation.constants import (
    SIMILAR_AGE_RANGE_POINTS,
    SIMILAR_INTERACTIVITY_POINTS,
    SIMILAR_STIMULATION_POINTS,
    SIMILAR_STIMULATION_WINDOW,
    SIMILAR_THEME_POINTS,
)
from tvtantrum.services.recommendation.engine import ScoredShow
from tvtantrum.services.sensory import classify_sensory_level

_AGE_NUMBER = re.compile(r"\d+")
OPEN_ENDED_MAX_AGE = 99


def parse_age_range(age_range: str | None) -> tuple[int, int] | None:
    """Parse "2-5", "4+" or "3" into an inclusive (min, max) pair."""
    if not age_range:
        return None
    numbers = [int(n) for n in _AGE_NUMBER.findall(age_range)]
    if not numbers:
        return None
    if len(numbers) >= 2:
        low, high = numbers[0], numbers[1]
        return (low, high) if low <= high else (high, low)
    if "+" in age_range:
        return numbers[0], OPEN_ENDED_MAX_AGE
    return numbers[0], numbers[0]


def age_ranges_overlap(a: str | None, b: str | None) -> bool:
    range_a, range_b = parse_age_range(a), parse_age_range(b)
    if range_a is None or range_b is None:
        return False
    return range_a[0] <= range_b[1] and range_a[1] >= range_b[0]


def _sensory_level(raw: str | None) -> NormalizedLevel | None:
    # Side-effect free: fallbacks are tallied when shows are loaded or imported
    result = classify_sensory_level(raw)
    return result.level if result else None


class ShowSimilarity:
    """
    Scores shows against a single reference show:

    - +3 when stimulation scores are within 1 of each other
    - +2 for every reference theme with a substring match in the other show's themes
    - +2 when interactivity levels normalize to the same level
    - +1 when age ranges overlap
    """

    @staticmethod
    def theme_matches(reference: Show, other: Show) -> int:
        other_themes = [t.lower() for t in other.themes]
        matches = 0
        for theme in (t.lower() for t in reference.themes):
            if any(theme in o or o in theme for o in other_themes):
                matches += 1
        return matches

    @classmethod
    def score(cls, reference: Show, other: Show) -> int:
        score = 0
        if abs(other.stimulation_score - reference.stimulation_score) <= SIMILAR_STIMULATION_WINDOW:
            score += SIMILAR_STIMULATION_POINTS

        score += SIMILAR_THEME_POINTS * cls.theme_matches(reference, other)

        ref_level = _sensory_level(reference.interactivity_level)
        other_level = _sensory_level(other.interactivity_level)
        if ref_level is not None and ref_level == other_level:
            score += SIMILAR_INTERACTIVITY_POINTS

        if age_ranges_overlap(reference.age_range, other.age_range):
            score += SIMILAR_AGE_RANGE_POINTS
        return score

    @classmethod
    def rank(cls, reference: Show, catalog: Sequence[Show], limit: int) -> list[ScoredShow]:
        scored = [
            ScoredShow(show=other, score=cls.score(reference, other)) for other in catalog if other.id != reference.id
        ]
        scored.sort(key=lambda item: item.score, reverse=True)
        top = scored[:limit]
        if top:
            logger.debug(
                f"Similar to {reference.name} ({reference.id}): "
                + ", ".join(f"{item.show.name} ({item.score})" for item in top)
            )
        else:
            logger.debug(f"No similar shows found for {reference.name} ({reference.id})")
        return top
