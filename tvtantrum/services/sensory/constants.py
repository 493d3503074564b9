from typing import Final

from tvtantrum.models.sensory import NormalizedLevel

# Ordered (keywords, level) rules, evaluated top to bottom with substring
# containment against the cleaned text. Compound keywords are written in the
# canonical "word-word" form the normalizer rewrites "low to moderate",
# "medium/high" and "mid high" into. Compound levels come first so
# "moderate-high" is never absorbed by "moderate" or "high".
LOW_MODERATE_KEYWORDS: Final[tuple[str, ...]] = (
    "low-moderate",
    "moderate-low",
    "moderately-low",
    "low-medium",
    "medium-low",
    "low-mid",
    "mid-low",
    "low-mod",
    "mod-low",
    "light-medium",
    "light-moderate",
    "mild-moderate",
    "somewhat low",
    "fairly low",
    "mostly low",
)

MODERATE_HIGH_KEYWORDS: Final[tuple[str, ...]] = (
    "moderate-high",
    "high-moderate",
    "moderately-high",
    "medium-high",
    "high-medium",
    "mid-high",
    "mod-high",
    "quite high",
    "fairly high",
    "somewhat high",
)

LOW_KEYWORDS: Final[tuple[str, ...]] = (
    "very low",
    "minimal",
    "minimum",
    "low",
    "rare",
    "gentle",
    "calm",
    "quiet",
    "soft",
    "little",
    "none",
    "light",
)

MODERATE_KEYWORDS: Final[tuple[str, ...]] = (
    "moderate",
    "medium",
    "average",
    "balanced",
    "mid",
    "mod",
    "normal",
)

HIGH_KEYWORDS: Final[tuple[str, ...]] = (
    "very high",
    "high",
    "intense",
    "constant",
    "fast",
    "loud",
    "frequent",
    "rapid",
    "extreme",
    "lots",
)

LEVEL_RULES: Final[tuple[tuple[tuple[str, ...], NormalizedLevel], ...]] = (
    (LOW_MODERATE_KEYWORDS, NormalizedLevel.LOW_MODERATE),
    (MODERATE_HIGH_KEYWORDS, NormalizedLevel.MODERATE_HIGH),
    (LOW_KEYWORDS, NormalizedLevel.LOW),
    (MODERATE_KEYWORDS, NormalizedLevel.MODERATE),
    (HIGH_KEYWORDS, NormalizedLevel.HIGH),
)

# Canonical labels keyed by their lower-cased form
CANONICAL_LEVELS: Final[dict[str, NormalizedLevel]] = {level.value.lower(): level for level in NormalizedLevel}
