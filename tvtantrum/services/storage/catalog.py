import json
from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from tvtantrum.models.show import Show
from tvtantrum.services.sensory import normalize_show_metrics


class ShowNotFoundError(LookupError):
    def __init__(self, show_id: int):
        super().__init__(f"Show with ID {show_id} not found")
        self.show_id = show_id


class ShowCatalog:
    """
    In-memory catalog of shows, loaded from and saved to a JSON file.

    Listing methods always yield shows in ascending id order, which is the
    order recommendation ties fall back to.
    """

    def __init__(self, shows: Iterable[Show] | None = None):
        self._shows: dict[int, Show] = {}
        if shows:
            self.upsert_many(shows)

    def __len__(self) -> int:
        return len(self._shows)

    def __contains__(self, show_id: int) -> bool:
        return show_id in self._shows

    @classmethod
    def from_file(cls, path: str | Path) -> "ShowCatalog":
        catalog = cls()
        catalog.load(path)
        return catalog

    def load(self, path: str | Path) -> int:
        """
        Replace the catalog contents with the shows stored at `path`.

        Sensory values that only reach a level by fallback are reported once per show and field.
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"Catalog file {path} does not exist; starting with an empty catalog")
            self._shows = {}
            return 0

        raw_items = json.loads(path.read_text(encoding="utf-8"))
        shows: dict[int, Show] = {}
        for raw in raw_items:
            try:
                show = Show.model_validate(raw)
            except ValidationError as e:
                show_id = raw.get("id", "?") if isinstance(raw, dict) else "?"
                logger.warning(f"Skipping invalid catalog entry {show_id}: {e.error_count()} error(s)")
                continue
            shows[show.id] = show
            normalize_show_metrics(show)

        self._shows = shows
        logger.info(f"Loaded {len(shows)} shows from {path}")
        return len(shows)

    def save(self, path: str | Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = [show.model_dump(mode="json") for show in self.list_all()]
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        logger.info(f"Saved {len(payload)} shows to {path}")

    def upsert(self, show: Show) -> Show:
        self._shows[show.id] = show
        return show

    def upsert_many(self, shows: Iterable[Show]) -> int:
        count = 0
        for show in shows:
            self.upsert(show)
            count += 1
        return count

    def get(self, show_id: int) -> Show | None:
        return self._shows.get(show_id)

    def get_or_raise(self, show_id: int) -> Show:
        show = self._shows.get(show_id)
        if show is None:
            raise ShowNotFoundError(show_id)
        return show

    def get_many(self, show_ids: Iterable[int]) -> list[Show]:
        """Shows for the given ids in ascending id order; unknown ids are skipped."""
        return [self._shows[i] for i in sorted(set(show_ids)) if i in self._shows]

    def next_id(self) -> int:
        return max(self._shows, default=0) + 1

    def list_all(self) -> list[Show]:
        return [self._shows[i] for i in sorted(self._shows)]

    def in_stimulation_range(
        self,
        min_score: int,
        max_score: int,
        excluding: set[int] | None = None,
        limit: int | None = None,
    ) -> list[Show]:
        """Shows whose stimulation score lies in [min_score, max_score], minus `excluding`."""
        excluding = excluding or set()
        result = [
            show
            for show in self.list_all()
            if min_score <= show.stimulation_score <= max_score and show.id not in excluding
        ]
        return result[:limit] if limit is not None else result

    def search(
        self,
        query: str | None = None,
        theme: str | None = None,
        max_stimulation: int | None = None,
    ) -> list[Show]:
        """Filter by case-insensitive name substring, theme and stimulation ceiling."""
        needle = query.strip().lower() if query else None
        theme_needle = theme.strip().lower() if theme else None
        result = []
        for show in self.list_all():
            if needle and needle not in show.name.lower():
                continue
            if theme_needle and not any(t.lower() == theme_needle for t in show.themes):
                continue
            if max_stimulation is not None and show.stimulation_score > max_stimulation:
                continue
            result.append(show)
        return result

    def calmest(self, limit: int) -> list[Show]:
        """Lowest stimulation scores first, ties by id."""
        return sorted(self.list_all(), key=lambda s: (s.stimulation_score, s.id))[:limit]


show_catalog = ShowCatalog()
