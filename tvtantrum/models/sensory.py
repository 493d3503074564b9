from enum import Enum

from pydantic import BaseModel, Field


class NormalizedLevel(str, Enum):
    """Canonical five-point ordinal scale for a sensory metric."""

    LOW = "Low"
    LOW_MODERATE = "Low-Moderate"
    MODERATE = "Moderate"
    MODERATE_HIGH = "Moderate-High"
    HIGH = "High"

    @property
    def rank(self) -> int:
        """Ordinal position, 0 (Low) through 4 (High)."""
        return _LEVEL_ORDER.index(self)

    def __str__(self) -> str:
        return self.value


_LEVEL_ORDER: list[NormalizedLevel] = list(NormalizedLevel)


class NormalizationResult(BaseModel):
    """
    Outcome of classifying one raw sensory descriptor.

    `recognized` is False only for the Moderate fallback, so a raw value of
    exactly "Moderate" and an unknown phrase can be told apart.
    """

    level: NormalizedLevel
    raw: str
    recognized: bool = True
    matched_keyword: str | None = Field(default=None, description="Keyword that triggered the match, if any")

    @classmethod
    def fallback(cls, raw: str) -> "NormalizationResult":
        return cls(level=NormalizedLevel.MODERATE, raw=raw, recognized=False)


class UnrecognizedLevel(BaseModel):
    raw: str
    count: int
