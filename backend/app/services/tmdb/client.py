"""
TMDB API client for fetching movie data
"""
import httpx
from typing import List, Optional, Dict, Any
import logging

from pydantic import ValidationError

from app.core.config import settings
from app.schemas.movie import CatalogMovie, Genre, MovieFilters, MoviePage
from app.services.catalog import CatalogGateway
from app.services.tmdb.genre_cache import GenreCache
from app.services.tmdb.models import (
    TMDBMovie, TMDBMovieDetails, TMDBPagedResponse, TMDBGenreListResponse
)
from app.utils.exceptions import TMDBAPIError
from app.utils.helpers import build_image_url

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "popularity": "popularity",
    "rating": "vote_average",
    "release_date": "release_date",
    "title": "original_title",
}


class TMDBClient(CatalogGateway):
    """Client for interacting with TMDB API"""

    def __init__(
        self,
        genre_cache: Optional[GenreCache] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.TMDB_BASE_URL).rstrip("/")
        self.api_key = api_key or settings.TMDB_API_KEY
        self.image_base_url = settings.TMDB_IMAGE_BASE_URL
        self.language = settings.TMDB_LANGUAGE
        self.timeout = timeout if timeout is not None else settings.TMDB_TIMEOUT
        self.genre_cache = genre_cache or GenreCache()
        self._transport = transport
        self.session = None

    async def _get_session(self) -> httpx.AsyncClient:
        """Get or create HTTP session"""
        if self.session is None:
            self.session = httpx.AsyncClient(
                timeout=self.timeout,
                limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self.session

    async def _make_request(self, endpoint: str, params: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        GET an endpoint and return its JSON body.

        A non-success status or a body that is not JSON (TMDB occasionally
        answers with an HTML error page) is retried once; the second failure
        raises TMDBAPIError. Timeouts and transport errors are not retried.
        """
        session = await self._get_session()

        query = dict(params or {})
        query["api_key"] = self.api_key
        url = f"{self.base_url}{endpoint}"

        status_code = None
        for attempt in (1, 2):
            try:
                response = await session.get(url, params=query)
            except httpx.TimeoutException as e:
                logger.error(f"TMDB API timeout on {endpoint}: {e}")
                raise TMDBAPIError(f"TMDB request timed out: {endpoint}", operation=endpoint) from e
            except httpx.RequestError as e:
                logger.error(f"TMDB API request error on {endpoint}: {e}")
                raise TMDBAPIError(f"TMDB request failed: {endpoint}", operation=endpoint) from e

            status_code = response.status_code
            if response.is_success:
                try:
                    return response.json()
                except ValueError:
                    logger.warning(f"TMDB returned a non-JSON body for {endpoint} (attempt {attempt})")
                    continue

            logger.warning(f"TMDB API HTTP error on {endpoint}: {status_code} (attempt {attempt})")

        logger.error(f"TMDB API request failed for {endpoint} with status {status_code}")
        raise TMDBAPIError(
            f"TMDB request failed: {endpoint} ({status_code})",
            operation=endpoint,
            status_code=status_code
        )

    async def _fetch_genres(self) -> List[Genre]:
        data = await self._make_request("/genre/movie/list", {"language": self.language})
        try:
            response = TMDBGenreListResponse(**data)
        except ValidationError as e:
            raise TMDBAPIError("Malformed TMDB genre list", operation="genres") from e
        return [Genre(id=g.id, name=g.name) for g in response.genres]

    def _convert(self, tmdb_movie: TMDBMovie, genres: List[Genre]) -> CatalogMovie:
        """Convert a TMDB movie into the normalized catalog record"""
        return CatalogMovie(
            id=tmdb_movie.id,
            title=tmdb_movie.display_title,
            overview=tmdb_movie.overview,
            release_date=tmdb_movie.release_date or None,
            vote_average=tmdb_movie.vote_average,
            vote_count=tmdb_movie.vote_count,
            popularity=tmdb_movie.popularity,
            genres=genres,
            poster_path=tmdb_movie.poster_path,
            backdrop_path=tmdb_movie.backdrop_path,
            poster_url=build_image_url(self.image_base_url, "w500", tmdb_movie.poster_path),
            backdrop_url=build_image_url(self.image_base_url, "w1280", tmdb_movie.backdrop_path),
            adult=tmdb_movie.adult,
            original_language=tmdb_movie.original_language,
            original_title=tmdb_movie.original_title,
        )

    async def _convert_row(self, row: Any, endpoint: str) -> Optional[CatalogMovie]:
        """Normalize one list row; rows the catalog left unusable are skipped"""
        try:
            tmdb_movie = TMDBMovie.model_validate(row)
            if not tmdb_movie.display_title:
                logger.warning(f"Skipping untitled TMDB movie {tmdb_movie.id} from {endpoint}")
                return None
            genres = await self.genre_cache.resolve(tmdb_movie.genre_ids, self._fetch_genres)
            return self._convert(tmdb_movie, genres)
        except ValidationError as e:
            logger.warning(f"Skipping malformed TMDB movie row from {endpoint}: {e}")
            return None

    async def _get_page(self, endpoint: str, params: Dict[str, Any] = None) -> MoviePage:
        """Fetch one page of a list endpoint and normalize it"""
        data = await self._make_request(endpoint, params)
        try:
            paged = TMDBPagedResponse(**data)
        except ValidationError as e:
            logger.error(f"Malformed TMDB response from {endpoint}: {e}")
            raise TMDBAPIError(f"Malformed TMDB response: {endpoint}", operation=endpoint) from e

        movies = []
        for row in paged.results:
            movie = await self._convert_row(row, endpoint)
            if movie is not None:
                movies.append(movie)

        logger.info(f"Retrieved {len(movies)} movies from TMDB {endpoint}")
        return MoviePage(
            movies=movies,
            page=paged.page,
            total_pages=paged.total_pages,
            total_results=paged.total_results
        )

    async def discover(self, filters: MovieFilters, page: int = 1) -> MoviePage:
        """Discover movies with filters"""
        params: Dict[str, Any] = {"page": page, "language": self.language}

        if filters.genres:
            params["with_genres"] = ",".join(map(str, filters.genres))

        if filters.release_date_from:
            params["primary_release_date.gte"] = filters.release_date_from

        if filters.release_date_to:
            params["primary_release_date.lte"] = filters.release_date_to

        if filters.min_rating is not None:
            params["vote_average.gte"] = filters.min_rating

        if filters.max_rating is not None:
            params["vote_average.lte"] = filters.max_rating

        if filters.min_vote_count is not None:
            params["vote_count.gte"] = filters.min_vote_count

        if filters.language:
            params["with_original_language"] = filters.language

        if filters.include_adult is not None:
            params["include_adult"] = str(filters.include_adult).lower()

        sort_field = SORT_FIELDS.get(filters.sort_by or "popularity", "popularity")
        params["sort_by"] = f"{sort_field}.{filters.sort_order or 'desc'}"

        return await self._get_page("/discover/movie", params)

    async def popular(self, page: int = 1) -> MoviePage:
        return await self._get_page("/movie/popular", {"page": page, "language": self.language})

    async def top_rated(self, page: int = 1) -> MoviePage:
        return await self._get_page("/movie/top_rated", {"page": page, "language": self.language})

    async def trending(self, page: int = 1) -> MoviePage:
        return await self._get_page("/trending/movie/week", {"page": page, "language": self.language})

    async def now_playing(self, page: int = 1) -> MoviePage:
        return await self._get_page("/movie/now_playing", {"page": page, "language": self.language})

    async def search(self, query: str, page: int = 1, include_adult: bool = False) -> MoviePage:
        """Search for movies by title"""
        params = {
            "query": query,
            "page": page,
            "include_adult": str(include_adult).lower(),
            "language": self.language,
        }
        return await self._get_page("/search/movie", params)

    async def genres(self) -> List[Genre]:
        """Get list of movie genres"""
        return await self.genre_cache.get_genres(self._fetch_genres)

    async def movie_by_id(self, movie_id: int) -> Optional[CatalogMovie]:
        """Get a single movie, or None if TMDB does not know it"""
        try:
            data = await self._make_request(f"/movie/{movie_id}", {"language": self.language})
        except TMDBAPIError as e:
            if e.status_code == 404:
                logger.info(f"TMDB has no movie {movie_id}")
                return None
            raise

        try:
            details = TMDBMovieDetails(**data)
            genres = [Genre(id=g.id, name=g.name) for g in details.genres]
            movie = self._convert(details, genres)
        except ValidationError as e:
            raise TMDBAPIError(f"Malformed TMDB movie {movie_id}", operation="movie_by_id") from e

        self.genre_cache.prime(genres)
        return movie

    async def similar(self, movie_id: int, page: int = 1) -> MoviePage:
        """Get movies similar to the given movie"""
        return await self._get_page(f"/movie/{movie_id}/similar", {"page": page, "language": self.language})

    async def recommendations_for(self, movie_id: int, page: int = 1) -> MoviePage:
        """Get TMDB's own recommendations for a movie"""
        return await self._get_page(
            f"/movie/{movie_id}/recommendations",
            {"page": page, "language": self.language}
        )

    async def close(self):
        """Close HTTP session"""
        if self.session:
            await self.session.aclose()
            self.session = None
