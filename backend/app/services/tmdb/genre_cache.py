"""
Read-through cache of catalog genre id -> name
"""
import asyncio
from typing import Awaitable, Callable, Dict, Iterable, List, Optional
import logging

from app.core.config import settings
from app.schemas.movie import Genre
from app.services.cache.redis_client import RedisCache

logger = logging.getLogger(__name__)

GenreLoader = Callable[[], Awaitable[List[Genre]]]


class GenreCache:
    """
    Owned by a catalog gateway instance. The genre list is static catalog
    data, so it is loaded once (optionally mirrored in Redis) and then served
    from memory.
    """

    CACHE_KEY = "catalog:movie_genres"

    def __init__(self, store: Optional[RedisCache] = None, ttl: Optional[int] = None):
        self.store = store
        self.ttl = ttl if ttl is not None else settings.CACHE_TTL_GENRES
        self._names: Dict[int, str] = {}
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def prime(self, genres: Iterable[Genre]) -> None:
        """Record genres learned from another response (e.g. a detail call)"""
        for genre in genres:
            self._names[genre.id] = genre.name

    async def clear(self) -> None:
        """Forget the genre list here and in Redis so the next lookup refetches it"""
        self._names = {}
        self._loaded = False
        if self.store:
            await self.store.delete(self.CACHE_KEY)

    async def _ensure_loaded(self, loader: GenreLoader) -> None:
        if self._loaded:
            return

        async with self._lock:
            if self._loaded:
                return

            cached = await self.store.get(self.CACHE_KEY) if self.store else None
            if cached:
                genres = [Genre(**item) for item in cached]
                logger.debug(f"Loaded {len(genres)} genres from Redis")
            else:
                genres = await loader()
                if self.store:
                    await self.store.set(
                        self.CACHE_KEY,
                        [genre.model_dump() for genre in genres],
                        ttl=self.ttl
                    )
                logger.info(f"Loaded {len(genres)} genres from catalog")

            self.prime(genres)
            self._loaded = True

    async def get_genres(self, loader: GenreLoader) -> List[Genre]:
        await self._ensure_loaded(loader)
        return [Genre(id=genre_id, name=name) for genre_id, name in sorted(self._names.items())]

    async def resolve(self, genre_ids: Iterable[int], loader: GenreLoader) -> List[Genre]:
        """Map ids to genres, dropping ids the catalog does not list"""
        await self._ensure_loaded(loader)

        resolved = []
        for genre_id in genre_ids:
            name = self._names.get(genre_id)
            if name is None:
                logger.debug(f"Unknown genre id {genre_id}, skipping")
                continue
            resolved.append(Genre(id=genre_id, name=name))
        return resolved
