from typing import Dict, List, Optional

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read at import time, so the environment must be in place first
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-long-enough-1234567890")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TMDB_API_KEY", "test-tmdb-key")
os.environ.setdefault("REDIS_URL", "")

from app.core.database import Base, get_db  # noqa: E402
from app.core.security import security  # noqa: E402
import app.models  # noqa: E402,F401
from app.models.user import User  # noqa: E402
from app.schemas.movie import CatalogMovie, Genre, MovieFilters, MoviePage  # noqa: E402
from app.services.catalog import CatalogGateway  # noqa: E402
from app.utils.dependencies import get_catalog_gateway  # noqa: E402

GENRES = {
    28: "Action",
    12: "Adventure",
    35: "Comedy",
    18: "Drama",
    27: "Horror",
    878: "Science Fiction",
}


def build_movie(
    movie_id: int,
    genre_ids: List[int] = (),
    vote_average: Optional[float] = 7.0,
    release_date: Optional[str] = "2015-06-01",
    popularity: Optional[float] = 100.0,
    title: Optional[str] = None,
) -> CatalogMovie:
    return CatalogMovie(
        id=movie_id,
        title=title or f"Movie {movie_id}",
        overview="",
        release_date=release_date,
        vote_average=vote_average,
        vote_count=500,
        popularity=popularity,
        genres=[Genre(id=g, name=GENRES.get(g, f"Genre {g}")) for g in genre_ids],
    )


class FakeCatalogGateway(CatalogGateway):
    """In-memory catalog that records the calls made against it"""

    def __init__(self, movies: Optional[Dict[int, CatalogMovie]] = None):
        self.movies: Dict[int, CatalogMovie] = dict(movies or {})
        self.discover_page: Optional[MoviePage] = None
        self.popular_page: Optional[MoviePage] = None
        self.error: Optional[Exception] = None
        self.calls: List[tuple] = []

    def add(self, *movies: CatalogMovie):
        for movie in movies:
            self.movies[movie.id] = movie

    def _page(self, page: Optional[MoviePage], number: int) -> MoviePage:
        if self.error:
            raise self.error
        if page is not None:
            return page
        movies = list(self.movies.values())
        return MoviePage(movies=movies, page=number, total_pages=1, total_results=len(movies))

    async def discover(self, filters: MovieFilters, page: int = 1) -> MoviePage:
        self.calls.append(("discover", filters, page))
        return self._page(self.discover_page, page)

    async def popular(self, page: int = 1) -> MoviePage:
        self.calls.append(("popular", page))
        return self._page(self.popular_page, page)

    async def top_rated(self, page: int = 1) -> MoviePage:
        self.calls.append(("top_rated", page))
        return self._page(None, page)

    async def trending(self, page: int = 1) -> MoviePage:
        self.calls.append(("trending", page))
        return self._page(None, page)

    async def now_playing(self, page: int = 1) -> MoviePage:
        self.calls.append(("now_playing", page))
        return self._page(None, page)

    async def search(self, query: str, page: int = 1, include_adult: bool = False) -> MoviePage:
        self.calls.append(("search", query, page))
        if self.error:
            raise self.error
        movies = [m for m in self.movies.values() if query.lower() in m.title.lower()]
        return MoviePage(movies=movies, page=page, total_pages=1, total_results=len(movies))

    async def genres(self) -> List[Genre]:
        return [Genre(id=g, name=n) for g, n in sorted(GENRES.items())]

    async def movie_by_id(self, movie_id: int) -> Optional[CatalogMovie]:
        self.calls.append(("movie_by_id", movie_id))
        if self.error:
            raise self.error
        return self.movies.get(movie_id)

    async def similar(self, movie_id: int, page: int = 1) -> MoviePage:
        self.calls.append(("similar", movie_id, page))
        return self._page(None, page)

    async def recommendations_for(self, movie_id: int, page: int = 1) -> MoviePage:
        self.calls.append(("recommendations_for", movie_id, page))
        return self._page(None, page)


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def make_movie():
    return build_movie


@pytest.fixture()
def fake_gateway():
    return FakeCatalogGateway()


@pytest.fixture()
def user(db_session):
    db_user = User(
        email="viewer@example.com",
        username="viewer",
        hashed_password=security.get_password_hash("password123"),
        is_active=True,
    )
    db_session.add(db_user)
    db_session.commit()
    db_session.refresh(db_user)
    return db_user


@pytest.fixture()
def auth_headers(user):
    token = security.create_access_token(subject=user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def test_client(db_session, fake_gateway):
    from app.main import app

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_catalog_gateway] = lambda: fake_gateway

    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
