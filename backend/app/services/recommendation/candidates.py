"""
Candidate generation against the catalog
"""
from typing import List
import logging

from app.core.config import settings
from app.schemas.movie import MovieFilters, MoviePage
from app.schemas.recommendation import TasteProfile
from app.services.catalog import CatalogGateway

logger = logging.getLogger(__name__)

TOP_GENRE_COUNT = 2


def select_top_genres(profile: TasteProfile, limit: int = TOP_GENRE_COUNT) -> List[int]:
    """Highest weighted genre ids, ties broken by the lower id"""
    ranked = sorted(profile.genre_weights.items(), key=lambda item: (-item[1], item[0]))
    return [genre_id for genre_id, _ in ranked[:limit]]


def build_discover_filters(profile: TasteProfile, genre_id: int) -> MovieFilters:
    return MovieFilters(
        genres=[genre_id],
        release_date_from=f"{profile.year_preference.preferred_start_year:04d}-01-01",
        min_rating=profile.rating_preference.min_rating,
        min_vote_count=settings.RECOMMENDATION_MIN_VOTE_COUNT,
        sort_by="rating",
        sort_order="desc",
    )


class CandidateGenerator:
    """Fetches one page of candidates matching the user's strongest genre"""

    def __init__(self, gateway: CatalogGateway):
        self.gateway = gateway

    async def generate_candidates(self, profile: TasteProfile, page: int = 1) -> MoviePage:
        top_genres = select_top_genres(profile)

        if not top_genres:
            logger.info("No genre weights in profile, falling back to popular movies")
            return await self.gateway.popular(page)

        # Only the strongest genre is queried; the runner-up is selected
        # but not used.
        filters = build_discover_filters(profile, top_genres[0])
        result = await self.gateway.discover(filters, page)

        logger.info(
            f"Generated {len(result.movies)} candidates for genre {top_genres[0]} "
            f"(page {result.page}/{result.total_pages})"
        )
        return result
