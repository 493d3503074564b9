from pydantic import BaseModel, Field


class TasteProfile(BaseModel):
    """
    Aggregate of a user's favorited shows.

    Derived at request time from a snapshot of favorites and never persisted.
    """

    favorite_count: int = 0
    avg_stimulation_score: int | None = None
    theme_counts: dict[str, int] = Field(default_factory=dict, description="Theme → number of favorites carrying it")
    common_theme_threshold: int = 1
    common_themes: set[str] = Field(default_factory=set)
    favorite_ids: set[int] = Field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return self.favorite_count == 0

    def stimulation_range(self, window: int) -> tuple[int, int]:
        """Inclusive stimulation-score window around the profile mean."""
        if self.avg_stimulation_score is None:
            raise ValueError("Empty taste profile has no stimulation range")
        return self.avg_stimulation_score - window, self.avg_stimulation_score + window
