import re
from typing import Any

from tvtantrum.core.constants import SENSORY_FIELDS
from tvtantrum.models.sensory import NormalizationResult, NormalizedLevel
from tvtantrum.services.sensory.constants import CANONICAL_LEVELS, LEVEL_RULES
from tvtantrum.services.sensory.reporter import UnrecognizedLevelReporter, unrecognized_reporter

_DASHES = re.compile(r"\s*[-‐-―]\s*")
_SPACES = re.compile(r"\s+")
_LEVEL_WORD = r"(?:moderately|moderate|medium|mid|mod|low|light|mild|high)"
# "low to moderate", "medium/high", "moderate-to-high", "mid high" -> "low-moderate", ...
_COMPOUND_SEPARATOR = re.compile(rf"\b({_LEVEL_WORD})(?:-to-| to | ?/ ?|-| )(?={_LEVEL_WORD}\b)")


def _clean(raw: str) -> str:
    """Lower-case, trim, collapse whitespace and join adjacent level words with a single hyphen."""
    text = _SPACES.sub(" ", raw.strip().lower())
    text = _DASHES.sub("-", text)
    return _COMPOUND_SEPARATOR.sub(r"\1-", text)


def classify_sensory_level(raw: Any) -> NormalizationResult | None:
    """
    Classify a raw sensory descriptor without side effects.

    Returns None for null/blank input, otherwise a result whose `recognized`
    flag is False when no canonical label or keyword matched.
    """
    if raw is None:
        return None
    if not isinstance(raw, str):
        raw = str(raw)

    text = _clean(raw)
    if not text:
        return None

    canonical = CANONICAL_LEVELS.get(text)
    if canonical is not None:
        return NormalizationResult(level=canonical, raw=raw)

    for keywords, level in LEVEL_RULES:
        for keyword in keywords:
            if keyword in text:
                return NormalizationResult(level=level, raw=raw, matched_keyword=keyword)

    return NormalizationResult.fallback(raw)


def normalize_sensory_level(
    raw: Any,
    field: str | None = None,
    reporter: UnrecognizedLevelReporter | None = None,
    show_id: int | None = None,
) -> NormalizedLevel | None:
    """
    Map a free-text sensory descriptor onto the five-point scale.

    Never raises. Unknown phrases become Moderate and are reported to the
    observability sink; passing `show_id` reports each show and field once.
    """
    result = classify_sensory_level(raw)
    if result is None:
        return None
    if not result.recognized:
        (reporter or unrecognized_reporter).report(result, field=field, show_id=show_id)
    return result.level


def normalize_show_metrics(
    show: Any, reporter: UnrecognizedLevelReporter | None = None
) -> dict[str, NormalizedLevel | None]:
    """Normalize every sensory field of a show (model or dict)."""
    show_id = show.get("id") if isinstance(show, dict) else getattr(show, "id", None)
    normalized: dict[str, NormalizedLevel | None] = {}
    for field in SENSORY_FIELDS:
        value = show.get(field) if isinstance(show, dict) else getattr(show, field, None)
        normalized[field] = normalize_sensory_level(value, field=field, reporter=reporter, show_id=show_id)
    return normalized


def level_rank(level: NormalizedLevel | str | None) -> int | None:
    """Ordinal of a level (0 = Low, 4 = High); None when the level is unknown."""
    if level is None:
        return None
    if isinstance(level, NormalizedLevel):
        return level.rank
    canonical = CANONICAL_LEVELS.get(_clean(level))
    return canonical.rank if canonical else None
