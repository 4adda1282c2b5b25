"""
Taste profile builder

Turns a user's liked and disliked movies into the weighting the scorer uses.
Profiles are rebuilt on every request and never stored.
"""
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence
import logging

from app.schemas.movie import CatalogMovie
from app.schemas.recommendation import RatingPreference, TasteProfile, YearPreference
from app.services.recommendation.history import HistoryStore

logger = logging.getLogger(__name__)

DEFAULT_START_YEAR = 2000
EARLIEST_YEAR = 1900
MIN_YEAR_RANGE = 5
RATING_FLOOR = 5.0
RATING_SLACK = 1.0
PREFERRED_RATING = 10.0


def compute_genre_weights(liked: Sequence[CatalogMovie]) -> Dict[int, float]:
    """
    weight(g) = freq(g) * avgRating(g) / 10, normalized so the top genre is 1.0.
    A missing vote average counts as 0.
    """
    if not liked:
        return {}

    counts: Dict[int, int] = defaultdict(int)
    rating_sums: Dict[int, float] = defaultdict(float)
    for movie in liked:
        for genre_id in set(movie.genre_ids):
            counts[genre_id] += 1
            rating_sums[genre_id] += movie.vote_average or 0.0

    if not counts:
        return {}

    total = len(liked)
    raw = {
        genre_id: (count / total) * ((rating_sums[genre_id] / count) / 10.0)
        for genre_id, count in counts.items()
    }

    top = max(raw.values())
    if top <= 0:
        # every liked movie is unrated; rank by frequency alone
        logger.warning("Liked movies carry no ratings, weighting genres by frequency")
        top_count = max(counts.values())
        return {genre_id: count / top_count for genre_id, count in counts.items()}

    return {genre_id: weight / top for genre_id, weight in raw.items()}


def compute_avoided_genres(disliked: Sequence[CatalogMovie]) -> Dict[int, float]:
    if not disliked:
        return {}

    counts: Dict[int, int] = defaultdict(int)
    for movie in disliked:
        for genre_id in set(movie.genre_ids):
            counts[genre_id] += 1

    total = len(disliked)
    return {genre_id: count / total for genre_id, count in counts.items()}


def compute_year_preference(liked: Sequence[CatalogMovie], current_year: int) -> YearPreference:
    years = [movie.year for movie in liked if movie.year is not None]
    if not years:
        return YearPreference(preferred_start_year=DEFAULT_START_YEAR, preferred_end_year=current_year)

    # whole years: the average is truncated before the half range is applied,
    # so the window can sit up to a year later than avg - range / 2
    avg_year = int(sum(years) / len(years))
    half_range = max(MIN_YEAR_RANGE, max(years) - min(years)) // 2

    return YearPreference(
        preferred_start_year=max(EARLIEST_YEAR, avg_year - half_range),
        preferred_end_year=min(current_year, avg_year + half_range),
    )


def compute_rating_preference(liked: Sequence[CatalogMovie]) -> RatingPreference:
    if not liked:
        return RatingPreference(min_rating=RATING_FLOOR, preferred_rating=PREFERRED_RATING)

    # an unrated like drags the minimum to 0, so the floor applies
    lowest = min(movie.vote_average or 0.0 for movie in liked)
    return RatingPreference(
        min_rating=max(RATING_FLOOR, lowest - RATING_SLACK),
        preferred_rating=PREFERRED_RATING,
    )


def build_taste_profile(
    liked: Sequence[CatalogMovie],
    disliked: Sequence[CatalogMovie],
    current_year: Optional[int] = None
) -> TasteProfile:
    """Pure profile computation over a history snapshot"""
    if current_year is None:
        current_year = datetime.now().year

    return TasteProfile(
        genre_weights=compute_genre_weights(liked),
        avoided_genres=compute_avoided_genres(disliked),
        year_preference=compute_year_preference(liked, current_year),
        rating_preference=compute_rating_preference(liked),
        avoided_movie_ids=[movie.id for movie in disliked],
    )


class TasteProfileBuilder:
    """Builds a profile from the user's stored history"""

    def __init__(self, history: HistoryStore):
        self.history = history

    def build_profile(self, user_id: int, current_year: Optional[int] = None) -> TasteProfile:
        liked: List[CatalogMovie] = self.history.get_liked(user_id)
        disliked: List[CatalogMovie] = self.history.get_disliked(user_id)

        profile = build_taste_profile(liked, disliked, current_year)

        logger.info(
            f"Built taste profile for user {user_id}: {len(liked)} liked, "
            f"{len(disliked)} disliked, {len(profile.genre_weights)} weighted genres"
        )
        return profile
