"""
Sensory metric normalization.

Maps inconsistent upstream descriptors ("Mod-High", "fairly low", "very
intense") onto the canonical five-point NormalizedLevel scale.
"""

from tvtantrum.services.sensory.normalizer import (
    classify_sensory_level,
    level_rank,
    normalize_sensory_level,
    normalize_show_metrics,
)
from tvtantrum.services.sensory.reporter import UnrecognizedLevelReporter, unrecognized_reporter

__all__ = [
    "classify_sensory_level",
    "level_rank",
    "normalize_sensory_level",
    "normalize_show_metrics",
    "UnrecognizedLevelReporter",
    "unrecognized_reporter",
]
