import asyncio

import pytest
import redis.asyncio as aioredis

from tvtantrum.models.taste_profile import TasteProfile
from tvtantrum.services.recommendation import (
    RecommendationScoring,
    RecommendationService,
    TasteProfileBuilder,
    rank_candidates,
    round_half_up,
    score_candidates,
)
from tvtantrum.services.storage import FavoriteStore, PopularityTracker, ShowCatalog, ShowRepository


class TestTasteProfile:
    def test_empty_favorites(self):
        profile = TasteProfileBuilder().build([])
        assert profile.is_empty
        assert profile.avg_stimulation_score is None

    @pytest.mark.parametrize("value, expected", [(2.0, 2), (2.5, 3), (2.49, 2), (8 / 3, 3), (1.5, 2)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_mean_rounds_half_up(self, make_show):
        profile = TasteProfileBuilder().build([make_show(1, 2), make_show(2, 3)])
        assert profile.avg_stimulation_score == 3

    @pytest.mark.parametrize("count, threshold", [(1, 1), (3, 1), (4, 1), (5, 2), (8, 2), (9, 3)])
    def test_common_theme_threshold(self, count, threshold):
        assert TasteProfileBuilder.common_theme_threshold(count) == threshold

    def test_common_themes(self, make_show):
        themes = [["Music"], ["Music"], ["Nature"], ["Space"], ["Art"]]
        favorites = [make_show(i, 3, t) for i, t in enumerate(themes, start=1)]
        # 5 favorites -> threshold 2: only Music appears twice
        profile = TasteProfileBuilder().build(favorites)
        assert profile.common_theme_threshold == 2
        assert profile.common_themes == {"Music"}
        assert profile.theme_counts == {"Music": 2, "Nature": 1, "Space": 1, "Art": 1}

    def test_duplicate_theme_on_one_show_counts_once(self, make_show):
        profile = TasteProfileBuilder().build([make_show(1, 3, ["Music", "Music"]), make_show(2, 3, ["Art"])])
        assert profile.theme_counts["Music"] == 1


class TestScoring:
    def test_theme_overlap_adds_three_per_common_theme(self, make_show):
        profile = TasteProfile(favorite_count=2, avg_stimulation_score=3, common_themes={"Music", "Nature"})
        a = make_show(10, 2, ["Music", "Nature"])
        b = make_show(11, 4, ["Science"])
        assert RecommendationScoring.score(a, profile) - RecommendationScoring.score(b, profile) == 6

    def test_stimulation_closeness(self, make_show):
        profile = TasteProfile(favorite_count=1, avg_stimulation_score=3)
        assert RecommendationScoring.score(make_show(1, 3), profile) == 5
        assert RecommendationScoring.score(make_show(2, 4), profile) == 4

    def test_empty_profile_cannot_score(self, make_show):
        with pytest.raises(ValueError):
            RecommendationScoring.score(make_show(1, 3), TasteProfile())


class TestRankCandidates:
    def test_example_scenario(self, make_show):
        favorites = [
            make_show(1, 1, ["Music"]),
            make_show(2, 3, ["Music", "Adventure"]),
            make_show(3, 2, ["Music"]),
        ]
        close_match = make_show(10, 2, ["Music"])
        theme_match = make_show(11, 1, ["Music", "Adventure"])

        profile = TasteProfileBuilder().build(favorites)
        assert profile.avg_stimulation_score == 2
        assert profile.common_themes == {"Music", "Adventure"}

        scored = score_candidates(profile, [close_match, theme_match])
        assert [(item.show.id, item.score) for item in scored] == [(11, 10), (10, 8)]

    def test_ties_keep_incoming_order(self, make_show):
        favorites = [make_show(1, 3)]
        candidates = [make_show(9, 3), make_show(4, 3), make_show(7, 3)]
        assert [s.id for s in rank_candidates(favorites, candidates, limit=3)] == [9, 4, 7]

    def test_never_returns_favorites(self, make_show):
        favorites = [make_show(1, 3, ["Music"]), make_show(2, 3, ["Music"])]
        candidates = favorites + [make_show(3, 3)]
        assert [s.id for s in rank_candidates(favorites, candidates, limit=5)] == [3]

    def test_drops_candidates_outside_window(self, make_show):
        favorites = [make_show(1, 3)]
        candidates = [make_show(2, 1), make_show(3, 5), make_show(4, 2), make_show(5, 4)]
        assert {s.id for s in rank_candidates(favorites, candidates, limit=5)} == {4, 5}

    def test_respects_limit(self, make_show):
        favorites = [make_show(1, 3)]
        candidates = [make_show(i, 3) for i in range(2, 20)]
        assert len(rank_candidates(favorites, candidates, limit=5)) == 5

    def test_no_favorites_yields_nothing(self, make_show):
        assert rank_candidates([], [make_show(1, 3)], limit=5) == []

    @pytest.mark.parametrize("limit", [0, -1, 2.5, True])
    def test_rejects_invalid_limit(self, make_show, limit):
        with pytest.raises(ValueError):
            rank_candidates([make_show(1, 3)], [], limit=limit)


class TestRecommendationService:
    def test_zero_favorites_returns_popular(self, repository):
        service = RecommendationService(repository)
        result = asyncio.run(service.recommend_similar_shows("nobody", 5))
        expected = asyncio.run(repository.get_popular_shows(5))
        assert [s.id for s in result] == [s.id for s in expected]
        # nothing tracked yet: calmest shows first, ties by id
        assert [s.id for s in result] == [1, 2, 6, 3, 7]

    def test_zero_favorites_follows_tracked_popularity(self, repository):
        async def scenario():
            await repository.popularity.track_view(5)
            await repository.popularity.track_view(5)
            await repository.popularity.track_search(4)
            return await RecommendationService(repository).recommend_similar_shows("nobody", 2)

        assert [s.id for s in asyncio.run(scenario())] == [5, 4]

    def test_candidate_pool_is_mean_plus_minus_one(self, make_show, redis):
        catalog = ShowCatalog([make_show(i, score) for i, score in enumerate([1, 2, 3, 4, 5, 2, 2, 4], start=1)])
        repository = ShowRepository(catalog, FavoriteStore(redis), PopularityTracker(redis))

        async def scenario():
            # favorites scored [2, 2, 4]: mean 2.67 rounds to 3
            for show_id in (2, 6, 4):
                await repository.favorites.add("u1", show_id)
            return await RecommendationService(repository).recommend_similar_shows("u1", 10)

        result = asyncio.run(scenario())
        assert {s.stimulation_score for s in result} <= {2, 3, 4}
        assert {s.id for s in result} == {3, 7, 8}

    def test_excludes_favorites_and_ranks_by_theme(self, repository):
        async def scenario():
            await repository.favorites.add("u1", 2)  # stim 2, Music + Adventure
            await repository.favorites.add("u1", 7)  # stim 3, Music + Nature
            return await RecommendationService(repository).recommend_similar_shows("u1", 5)

        result = asyncio.run(scenario())
        ids = [s.id for s in result]
        assert 2 not in ids and 7 not in ids
        # avg 3 (2.5 rounded up); common themes: Music, Adventure, Nature
        # show 3: 5 + 3 = 8, show 6: 4 + 3 = 7, show 4: 4 + 0 = 4
        assert ids == [3, 6, 4]

    def test_default_limit(self, repository):
        result = asyncio.run(RecommendationService(repository).recommend_similar_shows("nobody"))
        assert len(result) == 5

    def test_storage_failure_propagates(self, catalog, broken_redis):
        repository = ShowRepository(catalog, FavoriteStore(broken_redis), PopularityTracker(broken_redis))
        with pytest.raises(aioredis.ConnectionError):
            asyncio.run(RecommendationService(repository).recommend_similar_shows("u1", 5))

    def test_similar_to_unknown_show_is_empty(self, repository):
        assert asyncio.run(RecommendationService(repository).similar_to_show(999)) == []
