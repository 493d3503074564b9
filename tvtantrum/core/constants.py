"""
Core constants used across the application. Keep these simple and documented.
"""

# Redis key templates (prefixed with settings.REDIS_KEY_PREFIX at runtime)
FAVORITES_KEY: str = "favorites:{user_id}"
POPULARITY_KEY: str = "popularity:{show_id}"
POPULARITY_INDEX_KEY: str = "popularity:index"

# Popularity: views count double compared to searches
SEARCH_POPULARITY_WEIGHT: int = 1
VIEW_POPULARITY_WEIGHT: int = 2

# Stimulation score bounds (1 = calmest, 5 = most stimulating)
MIN_STIMULATION_SCORE: int = 1
MAX_STIMULATION_SCORE: int = 5

# Sensory metric fields carried on every show
SENSORY_FIELDS: tuple[str, ...] = (
    "dialogue_intensity",
    "scene_frequency",
    "sound_effects_level",
    "music_tempo",
    "total_music_level",
    "total_sound_effect_time_level",
    "interactivity_level",
)
