# tests/test_search_service.py
from unittest.mock import AsyncMock, MagicMock

import pytest

from zipparents.models import SearchFilters
from zipparents.search.search_service import SearchService
from zipparents.search.search_utils import SearchUtils, matches_any

from conftest import FakeProfileStore, make_profile


def uids(results):
    return [r.profile.uid for r in results]


@pytest.mark.asyncio
class TestSearchParents:
    """search_parents : requête, filtres en mémoire, distance, pagination."""

    async def test_sorted_by_distance_within_radius(self, search_service):
        response = await search_service.search_parents("me", SearchFilters(zip_code="10001", radius=25))

        distances = [r.distance for r in response.results]
        assert distances == sorted(distances)
        assert all(d is not None and d <= 25 for d in distances)
        assert uids(response.results)[0] == "midtown"
        assert set(uids(response.results)) == {"chelsea", "midtown", "harlem", "inwood"}
        assert response.total == len(response.results)
        assert response.has_more is False

    async def test_requester_never_returned(self, nyc_profiles):
        # Un dépôt qui ignore exclude_uid ne doit pas faire fuiter le demandeur
        store = MagicMock()
        store.find_profiles = AsyncMock(return_value=nyc_profiles)
        service = SearchService(profile_store=store)

        filter_sets = [
            SearchFilters(zip_code="10001"),
            SearchFilters(zip_code="10001", radius=100, interests=["Playdates", "Music"]),
            SearchFilters(zip_code="10001", age_range="25-34", relationship_status=["married"]),
            SearchFilters(zip_code="10001", children_age_ranges=["0-2", "6-12"], limit=1),
        ]
        for filters in filter_sets:
            response = await service.search_parents("me", filters)
            assert "me" not in uids(response.results)
            assert store.find_profiles.call_args.args[0].exclude_uid == "me"

    async def test_interests_use_or_semantics(self):
        store = FakeProfileStore([
            make_profile("only_b", "10011", interests=["B"]),
            make_profile("only_c", "10002", interests=["C"]),
        ])
        service = SearchService(profile_store=store)

        response = await service.search_parents("me", SearchFilters(zip_code="10001", interests=["A", "B"]))

        assert uids(response.results) == ["only_b"]

    async def test_children_age_ranges_use_or_semantics(self, search_service):
        response = await search_service.search_parents(
            "me", SearchFilters(zip_code="10001", children_age_ranges=["13-17", "6-12"])
        )
        assert uids(response.results) == ["midtown"]

    async def test_age_range_and_relationship_filters(self, search_service, fake_store):
        response = await search_service.search_parents(
            "me", SearchFilters(zip_code="10001", age_range="35-44")
        )
        assert uids(response.results) == ["harlem"]
        assert fake_store.queries[-1].age_ranges == ["35-44"]

        response = await search_service.search_parents(
            "me", SearchFilters(zip_code="10001", relationship_status=["single"])
        )
        assert uids(response.results) == ["inwood"]

    async def test_fetches_limit_plus_one(self, search_service, fake_store):
        await search_service.search_parents("me", SearchFilters(zip_code="10001", limit=3))
        assert fake_store.queries[-1].limit == 4

        await search_service.search_parents("me", SearchFilters(zip_code="10001"))
        assert fake_store.queries[-1].limit == 51

    async def test_has_more_and_truncation(self):
        # Les limit + 1 lignes lues (ordre uid) sont toutes dans le rayon
        store = FakeProfileStore([
            make_profile("a_harlem", "10027"),
            make_profile("b_chelsea", "10011"),
            make_profile("c_midtown", "10018"),
            make_profile("d_inwood", "10034"),
        ])
        service = SearchService(profile_store=store)

        response = await service.search_parents("me", SearchFilters(zip_code="10001", limit=2))

        assert store.queries[-1].limit == 3
        assert response.has_more is True
        assert response.total == 2
        assert uids(response.results) == ["c_midtown", "b_chelsea"]

    async def test_has_more_false_when_survivors_fit(self):
        store = FakeProfileStore([
            make_profile("near", "10011"),
            make_profile("far", "90001"),
            make_profile("nowhere", "99999"),
        ])
        service = SearchService(profile_store=store)

        # 3 lignes brutes > limit, mais un seul survivant dans le rayon
        response = await service.search_parents("me", SearchFilters(zip_code="10001", limit=2))
        assert uids(response.results) == ["near"]
        assert response.has_more is False

    async def test_cross_country_profile_excluded(self, search_service):
        results = await search_service.get_nearby_parents("me", "10001", radius=100)
        assert "la" not in uids(results)
        assert "unknown_zip" not in uids(results)

    async def test_malformed_zip_returns_empty(self, search_service):
        response = await search_service.search_parents("me", SearchFilters(zip_code="1000A"))
        assert response.results == []
        assert response.total == 0
        assert response.has_more is False

    async def test_hidden_location_masked_but_ranked(self):
        store = FakeProfileStore([
            make_profile("private", "10011", show_exact_location=False),
            make_profile("open", "10002"),
        ])
        service = SearchService(profile_store=store)

        response = await service.search_parents("me", SearchFilters(zip_code="10001", radius=5))

        first = response.results[0]
        assert first.profile.uid == "private"
        assert first.profile.zip_code == "100XX"
        assert first.distance == pytest.approx(0.7, abs=0.2)
        assert first.profile.email is None

    async def test_store_failure_propagates(self):
        store = MagicMock()
        store.find_profiles = AsyncMock(side_effect=ConnectionError("db down"))
        service = SearchService(profile_store=store)

        with pytest.raises(ConnectionError):
            await service.search_parents("me", SearchFilters(zip_code="10001"))

        assert store.find_profiles.await_count == 1


@pytest.mark.asyncio
class TestNearbyAndSimilar:
    """get_nearby_parents / search_similar_parents."""

    async def test_nearby_defaults(self, search_service, fake_store):
        results = await search_service.get_nearby_parents("me", "10001")
        assert fake_store.queries[-1].limit == 21
        assert fake_store.queries[-1].interests == []
        assert uids(results)[0] == "midtown"

    async def test_similar_uses_profile_interests(self, search_service, fake_store, nyc_profiles):
        me = nyc_profiles[0]
        results = await search_service.search_similar_parents("me", me, radius=25)

        assert fake_store.queries[-1].interests == ["Playdates", "Music"]
        assert set(uids(results)) == {"chelsea", "inwood"}

    async def test_similar_without_interests_falls_back_to_nearby(self, search_service):
        me = make_profile("me", "10001", interests=[])
        similar = await search_service.search_similar_parents("me", me, radius=25, limit=10)
        nearby = await search_service.get_nearby_parents("me", "10001", radius=25, limit=10)
        assert uids(similar) == uids(nearby)


class TestSearchUtils:
    """Filtres en mémoire et classement."""

    def test_matches_any(self):
        assert matches_any(["A", "B"], ["B"]) is True
        assert matches_any(["A", "B"], ["C"]) is False
        assert matches_any(["A"], []) is False

    def test_single_value_lists_not_post_filtered(self):
        utils = SearchUtils()
        records = [make_profile("x", "10011", interests=["Other"])]
        kept = utils.apply_post_filters(records, SearchFilters(zip_code="10001", interests=["A"]), "me")
        # un seul élément : le prédicat du dépôt suffit
        assert [r.uid for r in kept] == ["x"]

    def test_rank_drops_unresolvable_and_far(self):
        utils = SearchUtils()
        records = [
            make_profile("far", "90001"),
            make_profile("unknown", "00000"),
            make_profile("b", "10002"),
            make_profile("a", "10011"),
        ]
        ranked = utils.rank_by_distance(records, "10001", 25)
        assert [r.uid for r, _ in ranked] == ["a", "b"]
        assert all(d is not None for _, d in ranked)
