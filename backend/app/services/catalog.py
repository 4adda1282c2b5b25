"""
Catalog gateway interface
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from app.schemas.movie import CatalogMovie, Genre, MovieFilters, MoviePage


class CatalogGateway(ABC):
    """
    Capability interface over an external movie catalog.

    Implementations return normalized CatalogMovie records (genre names
    resolved, catalog ids as `id`) and raise RetrievalError on I/O failure.
    """

    @abstractmethod
    async def discover(self, filters: MovieFilters, page: int = 1) -> MoviePage:
        """Filtered catalog query"""
        pass

    @abstractmethod
    async def popular(self, page: int = 1) -> MoviePage:
        pass

    @abstractmethod
    async def top_rated(self, page: int = 1) -> MoviePage:
        pass

    @abstractmethod
    async def trending(self, page: int = 1) -> MoviePage:
        pass

    @abstractmethod
    async def now_playing(self, page: int = 1) -> MoviePage:
        pass

    @abstractmethod
    async def search(self, query: str, page: int = 1, include_adult: bool = False) -> MoviePage:
        pass

    @abstractmethod
    async def genres(self) -> List[Genre]:
        pass

    @abstractmethod
    async def movie_by_id(self, movie_id: int) -> Optional[CatalogMovie]:
        """Single movie, or None when the catalog does not know the id"""
        pass

    @abstractmethod
    async def similar(self, movie_id: int, page: int = 1) -> MoviePage:
        pass

    @abstractmethod
    async def recommendations_for(self, movie_id: int, page: int = 1) -> MoviePage:
        pass

    async def close(self) -> None:
        """Release any network resources"""
        return None
