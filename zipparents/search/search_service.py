"""Module contenant le service de recherche de parents."""
import time
from dataclasses import dataclass
from typing import List, Optional, Union

import psutil

from zipparents.config import settings
from zipparents.db.profile_store import ProfileQuery, ProfileStore
from zipparents.logger import logger
from zipparents.models import (
    ProfileRecord,
    PublicProfile,
    SearchFilters,
    SearchResponse,
    SearchResult,
)
from zipparents.profiles.privacy import sanitize_profile_for_public
from zipparents.search.search_utils import SearchUtils


@dataclass
class SearchContext:
    """Contexte d'une recherche en cours."""
    current_user_id: str
    filters: SearchFilters
    limit: int
    radius: int
    start_time: float


class SearchService:
    """Recherche de parents : requête au dépôt de profils + classement par distance."""

    def __init__(self, profile_store: ProfileStore, utils: Optional[SearchUtils] = None):
        self.profile_store = profile_store
        self.utils = utils or SearchUtils()

    def _build_profile_query(self, ctx: SearchContext) -> ProfileQuery:
        """Traduit les filtres en ProfileQuery (limit + 1 pour détecter has_more)."""
        filters = ctx.filters

        age_ranges: List[str] = []
        if filters.age_range:
            age_ranges = (
                list(filters.age_range)
                if isinstance(filters.age_range, list)
                else [filters.age_range]
            )

        return ProfileQuery(
            exclude_uid=ctx.current_user_id,
            limit=ctx.limit + 1,
            age_ranges=age_ranges,
            relationship_statuses=list(filters.relationship_status or []),
            interests=list(filters.interests or []),
            children_age_ranges=list(filters.children_age_ranges or []),
        )

    async def search_parents(
        self, current_user_id: str, filters: SearchFilters
    ) -> SearchResponse:
        """Recherche les parents correspondant aux filtres.

        Args:
            current_user_id: uid du parent qui cherche (exclu des résultats).
            filters: Code postal, rayon et filtres de profil.

        Returns:
            SearchResponse triée du plus proche au plus lointain.
        """
        ctx = SearchContext(
            current_user_id=current_user_id,
            filters=filters,
            limit=filters.limit or settings.DEFAULT_LIMIT,
            radius=filters.radius or settings.DEFAULT_SEARCH_RADIUS,
            start_time=time.time(),
        )

        # Les erreurs du dépôt remontent telles quelles à l'appelant
        records = await self.profile_store.find_profiles(self._build_profile_query(ctx))
        candidates = self.utils.apply_post_filters(records, filters, current_user_id)
        ranked = self.utils.rank_by_distance(candidates, filters.zip_code, ctx.radius)

        has_more = len(ranked) > ctx.limit
        if has_more:
            ranked = ranked[:ctx.limit]

        results = [
            SearchResult(
                profile=sanitize_profile_for_public(record, viewer_uid=current_user_id),
                distance=distance,
            )
            for record, distance in ranked
        ]

        self._log_search(ctx, fetched=len(records), returned=len(results), has_more=has_more)

        return SearchResponse(results=results, total=len(results), has_more=has_more)

    async def get_nearby_parents(
        self,
        current_user_id: str,
        zip_code: str,
        radius: int = settings.DEFAULT_SEARCH_RADIUS,
        limit: int = settings.NEARBY_DEFAULT_LIMIT,
    ) -> List[SearchResult]:
        """Recherche simple : code postal et rayon uniquement."""
        response = await self.search_parents(
            current_user_id,
            SearchFilters(zip_code=zip_code, radius=radius, limit=limit),
        )
        return response.results

    async def search_similar_parents(
        self,
        current_user_id: str,
        current_profile: Union[ProfileRecord, PublicProfile],
        radius: int = settings.DEFAULT_SEARCH_RADIUS,
        limit: int = settings.NEARBY_DEFAULT_LIMIT,
    ) -> List[SearchResult]:
        """
        Recherche les parents proches partageant au moins un centre d'intérêt.

        Sans centres d'intérêt sur le profil, on retombe sur get_nearby_parents.
        """
        if not current_profile.interests:
            return await self.get_nearby_parents(
                current_user_id, current_profile.zip_code, radius, limit
            )

        response = await self.search_parents(
            current_user_id,
            SearchFilters(
                zip_code=current_profile.zip_code,
                radius=radius,
                interests=list(current_profile.interests),
                limit=limit,
            ),
        )
        return response.results

    def _log_search(self, ctx: SearchContext, fetched: int, returned: int, has_more: bool):
        duration = time.time() - ctx.start_time
        memory_mb = (
            psutil.Process().memory_info().rss / 1024 / 1024
            if settings.ENABLE_METRICS
            else 0.0
        )
        logger.info(
            "Recherche (user: {user_id}, zip: {zip_code}, radius: {radius}) : "
            "{fetched} candidats -> {returned} résultats (has_more={has_more}) | "
            "Durée = {duration:.4f}s | RAM = {memory:.2f} Mo",
            user_id=ctx.current_user_id,
            zip_code=ctx.filters.zip_code,
            radius=ctx.radius,
            fetched=fetched,
            returned=returned,
            has_more=has_more,
            duration=duration,
            memory=memory_mb,
        )
