from collections import Counter

from loguru import logger

from tvtantrum.models.sensory import NormalizationResult, UnrecognizedLevel

# Distinct raw values kept for review; later newcomers are only counted as dropped
MAX_TRACKED_VALUES = 500
MAX_RAW_LENGTH = 100


class UnrecognizedLevelReporter:
    """
    Observability sink for sensory values that fell back to Moderate.

    Keeps an in-process tally per raw value so curators can review which
    upstream phrases need a keyword. When a show id is given, each
    (show, field, value) is counted once, so the tally reflects catalog data
    rather than how often it was read.
    """

    def __init__(self, max_values: int = MAX_TRACKED_VALUES, max_raw_length: int = MAX_RAW_LENGTH) -> None:
        self.max_values = max_values
        self.max_raw_length = max_raw_length
        self._counts: Counter[str] = Counter()
        self._seen: set[tuple[int, str | None, str]] = set()
        self.dropped = 0

    def report(self, result: NormalizationResult, field: str | None = None, show_id: int | None = None) -> None:
        if result.recognized:
            return
        raw = result.raw.strip()[: self.max_raw_length]
        source = (show_id, field, raw) if show_id is not None else None
        if source in self._seen:
            return
        if raw not in self._counts and len(self._counts) >= self.max_values:
            self.dropped += 1
            logger.debug(f"Unrecognized sensory level tally is full; not tracking '{raw}'")
            return

        if source is not None:
            self._seen.add(source)
        self._counts[raw] += 1
        where = f" in {field}" if field else ""
        if show_id is not None:
            where += f" of show {show_id}"
        logger.warning(f"Unrecognized sensory level '{raw}'{where}; defaulting to {result.level.value}")

    def get_unrecognized(self, limit: int | None = None) -> list[UnrecognizedLevel]:
        return [UnrecognizedLevel(raw=raw, count=count) for raw, count in self._counts.most_common(limit)]

    def total(self) -> int:
        return sum(self._counts.values())

    def reset(self) -> None:
        self._counts.clear()
        self._seen.clear()
        self.dropped = 0


unrecognized_reporter = UnrecognizedLevelReporter()
