from typing import Final

# Taste-profile recommendations
STIMULATION_CLOSENESS_MAX: Final[int] = 5  # points for an exact stimulation match
STIMULATION_WINDOW: Final[int] = 1  # candidates within +/- this of the profile mean
THEME_MATCH_WEIGHT: Final[int] = 3  # points per candidate theme in the common set
COMMON_THEME_RATIO: Final[float] = 0.25  # share of favorites a theme must appear in
COMMON_THEME_MIN_COUNT: Final[int] = 1

# Show-to-show similarity
SIMILAR_STIMULATION_POINTS: Final[int] = 3
SIMILAR_STIMULATION_WINDOW: Final[int] = 1
SIMILAR_THEME_POINTS: Final[int] = 2
SIMILAR_INTERACTIVITY_POINTS: Final[int] = 2
SIMILAR_AGE_RANGE_POINTS: Final[int] = 1
