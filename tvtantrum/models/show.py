from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from tvtantrum.core.constants import (
    MAX_STIMULATION_SCORE,
    MIN_STIMULATION_SCORE,
    SEARCH_POPULARITY_WEIGHT,
    VIEW_POPULARITY_WEIGHT,
)
from tvtantrum.models.sensory import NormalizedLevel


class Show(BaseModel):
    """A catalog entry for one children's TV show."""

    id: int
    name: str
    description: str = ""
    age_range: str = ""
    episode_length: int = 15
    creator: str | None = None
    release_year: int | None = None
    end_year: int | None = None
    is_ongoing: bool = True
    seasons: int | None = None

    stimulation_score: int = Field(ge=MIN_STIMULATION_SCORE, le=MAX_STIMULATION_SCORE)
    interactivity_level: str | None = None
    dialogue_intensity: str | None = None
    sound_effects_level: str | None = None
    music_tempo: str | None = None
    total_music_level: str | None = None
    total_sound_effect_time_level: str | None = None
    scene_frequency: str | None = None

    themes: list[str] = Field(default_factory=list)
    available_on: list[str] = Field(default_factory=list)
    animation_style: str | None = None
    image_url: str | None = None

    @field_validator("themes", "available_on", mode="before")
    @classmethod
    def _drop_empty(cls, value):
        if value is None:
            return []
        return [v.strip() for v in value if isinstance(v, str) and v.strip()]


class ShowMetrics(BaseModel):
    """Read-time normalized view of a show's sensory metrics."""

    show_id: int
    stimulation_score: int
    interactivity_level: NormalizedLevel | None = None
    dialogue_intensity: NormalizedLevel | None = None
    sound_effects_level: NormalizedLevel | None = None
    music_tempo: NormalizedLevel | None = None
    total_music_level: NormalizedLevel | None = None
    total_sound_effect_time_level: NormalizedLevel | None = None
    scene_frequency: NormalizedLevel | None = None


class Favorite(BaseModel):
    user_id: str
    show_id: int


class ShowPopularity(BaseModel):
    show_id: int
    search_count: int = 0
    view_count: int = 0
    last_searched: datetime | None = None
    last_viewed: datetime | None = None

    @property
    def score(self) -> int:
        return self.search_count * SEARCH_POPULARITY_WEIGHT + self.view_count * VIEW_POPULARITY_WEIGHT
