"""
Scoring and ranking of recommendation candidates
"""
from typing import Iterable, List
import logging

from app.schemas.movie import CatalogMovie
from app.schemas.recommendation import ScoredMovie, TasteProfile

logger = logging.getLogger(__name__)

GENRE_WEIGHT = 0.4
YEAR_WEIGHT = 0.1
RATING_WEIGHT = 0.4
POPULARITY_WEIGHT = 0.1

AVOIDED_GENRE_PENALTY = 2.0
NEUTRAL_YEAR_SCORE = 0.5
YEAR_DECAY = 10.0
RATING_DECAY = 5.0
POPULARITY_CAP = 1000.0
MIN_SCORE = 0.2


def genre_score(movie: CatalogMovie, profile: TasteProfile) -> float:
    score = 0.0
    for genre_id in movie.genre_ids:
        score += profile.genre_weights.get(genre_id, 0.0)
        score -= AVOIDED_GENRE_PENALTY * profile.avoided_genres.get(genre_id, 0.0)
    return score


def year_score(movie: CatalogMovie, profile: TasteProfile) -> float:
    year = movie.year
    if year is None:
        return NEUTRAL_YEAR_SCORE

    start_year = profile.year_preference.preferred_start_year
    if year >= start_year:
        return 1.0
    return max(0.0, 1.0 - abs(year - start_year) / YEAR_DECAY)


def rating_score(movie: CatalogMovie, profile: TasteProfile) -> float:
    vote_average = movie.vote_average or 0.0
    preference = profile.rating_preference
    if vote_average < preference.min_rating:
        return 0.0
    return max(0.0, 1.0 - abs(vote_average - preference.preferred_rating) / RATING_DECAY)


def popularity_score(movie: CatalogMovie) -> float:
    return min(1.0, (movie.popularity or 0.0) / POPULARITY_CAP)


def score_movie(movie: CatalogMovie, profile: TasteProfile) -> ScoredMovie:
    """Weighted composite of the four components, clamped at zero"""
    genre = genre_score(movie, profile)
    year = year_score(movie, profile)
    rating = rating_score(movie, profile)
    popularity = popularity_score(movie)

    composite = (
        GENRE_WEIGHT * genre
        + YEAR_WEIGHT * year
        + RATING_WEIGHT * rating
        + POPULARITY_WEIGHT * popularity
    )

    return ScoredMovie(
        movie=movie,
        composite_score=max(0.0, composite),
        genre_component=genre,
        year_component=year,
        rating_component=rating,
        popularity_component=popularity,
    )


def score_and_rank(candidates: Iterable[CatalogMovie], profile: TasteProfile) -> List[ScoredMovie]:
    """
    Score every candidate, drop weak matches and explicitly disliked movies,
    and order by score, then vote average, then catalog id.
    """
    avoided = set(profile.avoided_movie_ids)
    kept: List[ScoredMovie] = []
    dropped = 0

    for movie in candidates:
        if movie.id in avoided:
            dropped += 1
            continue

        scored = score_movie(movie, profile)
        if scored.composite_score <= MIN_SCORE:
            dropped += 1
            continue

        kept.append(scored)

    kept.sort(key=lambda s: (-s.composite_score, -(s.movie.vote_average or 0.0), s.movie.id))

    logger.debug(f"Ranked {len(kept)} candidates, dropped {dropped}")
    return kept
