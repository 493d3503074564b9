import re
from collections.abc import Iterable
from typing import Any

import httpx
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from tvtantrum.core.constants import MAX_STIMULATION_SCORE, MIN_STIMULATION_SCORE, SENSORY_FIELDS
from tvtantrum.models.show import Show
from tvtantrum.services.importer.github import GitHubCatalogClient
from tvtantrum.services.recommendation.profile import round_half_up
from tvtantrum.services.sensory import normalize_sensory_level
from tvtantrum.services.storage.catalog import ShowCatalog

DEFAULT_EPISODE_LENGTH = 15
EPISODE_LENGTHS: dict[str, int] = {"short": 5, "medium": 15, "long": 30}


class CatalogImportError(RuntimeError):
    pass


class ReviewedShowRecord(BaseModel):
    """One entry of reviewed_shows.json."""

    title: str
    stimulation_score: float
    platform: str | None = None
    target_age_group: str = ""
    seasons: str | int | None = None
    avg_episode_length: str | None = None
    themes: list[str] = Field(default_factory=list)
    interactivity_level: str | None = None
    animation_style: str | None = None
    dialogue_intensity: str | None = None
    sound_effects_level: str | None = None
    music_tempo: str | None = None
    total_music_level: str | None = None
    total_sound_effect_time_level: str | None = None
    scene_frequency: str | None = None
    image_filename: str | None = None
    release_year: int | None = None
    end_year: int | None = None
    id: int | None = None


class ImportReport(BaseModel):
    imported: int = 0
    created: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)


def episode_length_minutes(avg_episode_length: str | None) -> int:
    if not avg_episode_length:
        return DEFAULT_EPISODE_LENGTH
    text = avg_episode_length.lower()
    for label, minutes in EPISODE_LENGTHS.items():
        if label in text:
            return minutes
    return DEFAULT_EPISODE_LENGTH


def parse_seasons(seasons: str | int | None) -> int | None:
    if isinstance(seasons, int):
        return seasons
    match = re.search(r"\d+", seasons or "")
    return int(match.group()) if match else None


def clamp_stimulation(score: float) -> int:
    return max(MIN_STIMULATION_SCORE, min(MAX_STIMULATION_SCORE, round_half_up(score)))


class CatalogImporter:
    """
    Imports reviewed shows into the catalog.

    Every sensory field is normalized on the way in, so the catalog only
    ever stores canonical levels. Existing shows are matched by id, then by
    case-insensitive name, and updated in place.
    """

    def __init__(self, catalog: ShowCatalog, client: GitHubCatalogClient | None = None):
        self.catalog = catalog
        self.client = client or GitHubCatalogClient()

    def _resolve_id(self, record: ReviewedShowRecord) -> tuple[int, bool]:
        if record.id is not None:
            return record.id, record.id in self.catalog
        title = record.title.strip().lower()
        for show in self.catalog.list_all():
            if show.name.strip().lower() == title:
                return show.id, True
        return self.catalog.next_id(), False

    def to_show(self, record: ReviewedShowRecord, show_id: int) -> Show:
        themes = [t.strip() for t in record.themes if t and t.strip()]
        sensory = {}
        for field in SENSORY_FIELDS:
            level = normalize_sensory_level(getattr(record, field), field=field, show_id=show_id)
            sensory[field] = level.value if level else None

        style = record.animation_style or "children's"
        ages = record.target_age_group or "young"
        description = f"{record.title} is a {style} show for {ages} year olds."
        if themes:
            description += f" It features {', '.join(themes)} themes."
        return Show(
            id=show_id,
            name=record.title.strip(),
            description=description,
            age_range=record.target_age_group,
            episode_length=episode_length_minutes(record.avg_episode_length),
            release_year=record.release_year,
            end_year=record.end_year,
            is_ongoing=record.end_year is None,
            seasons=parse_seasons(record.seasons),
            stimulation_score=clamp_stimulation(record.stimulation_score),
            themes=themes,
            available_on=[record.platform] if record.platform else [],
            animation_style=record.animation_style,
            image_url=self.client.image_url(record.image_filename) if record.image_filename else None,
            **sensory,
        )

    def import_records(self, records: Iterable[dict[str, Any]]) -> ImportReport:
        report = ImportReport()
        for index, raw in enumerate(records):
            try:
                record = ReviewedShowRecord.model_validate(raw)
            except ValidationError as e:
                report.skipped += 1
                report.errors.append(f"record {index}: {e.error_count()} validation error(s)")
                logger.warning(f"Skipping invalid show record {index}: {e}")
                continue

            show_id, exists = self._resolve_id(record)
            self.catalog.upsert(self.to_show(record, show_id))
            report.imported += 1
            if exists:
                report.updated += 1
            else:
                report.created += 1

        logger.info(
            f"Imported {report.imported} shows ({report.created} new, {report.updated} updated, "
            f"{report.skipped} skipped)"
        )
        return report

    async def run(self) -> ImportReport:
        """Fetch the reviewed-shows dataset and import it."""
        logger.info(f"Fetching TV shows data from GitHub: {self.client.owner}/{self.client.repo}")
        try:
            records = await self.client.fetch_reviewed_shows()
        except (httpx.HTTPError, ValueError) as e:
            raise CatalogImportError(f"Failed to fetch TV shows data: {e}") from e
        finally:
            await self.client.close()
        return self.import_records(records)
