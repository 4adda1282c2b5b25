import pytest

from app.models.like_list import LikeStatus
from app.models.movie import Genre
from app.services.like_list_service import LikeListService
from app.services.movie_repository import MovieRepository
from app.utils.exceptions import MovieNotFound

ACTION, DRAMA, HORROR = 28, 18, 27


async def test_history_store_views(db_session, user, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]), make_movie(2, [DRAMA]), make_movie(3, [HORROR]))
    service = LikeListService(db_session, fake_gateway)

    await service.set_status(user.id, 1, LikeStatus.LIKED)
    await service.set_status(user.id, 2, LikeStatus.LIKED)
    await service.set_status(user.id, 3, LikeStatus.DISLIKED)

    assert service.count_liked(user.id) == 2
    assert service.count_disliked(user.id) == 1
    assert sorted(m.id for m in service.get_liked(user.id)) == [1, 2]
    assert [m.genres[0].name for m in service.get_disliked(user.id)] == ["Horror"]

    # flipping a status moves the movie between the two views
    await service.set_status(user.id, 3, LikeStatus.LIKED)
    assert service.count_liked(user.id) == 3
    assert service.count_disliked(user.id) == 0
    assert service.get_status(user.id, 3) == "liked"


async def test_local_genres_without_catalog_id_are_dropped(db_session, user, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]))
    service = LikeListService(db_session, fake_gateway)
    await service.set_status(user.id, 1, LikeStatus.LIKED)

    movie = MovieRepository(db_session).get_by_tmdb_id(1)
    movie.genres.append(Genre(name="Arthouse"))
    db_session.commit()

    liked = service.get_liked(user.id)
    assert [g.id for g in liked[0].genres] == [ACTION]


async def test_import_reuses_genre_by_name(db_session, fake_gateway, make_movie):
    db_session.add(Genre(name="Action"))
    db_session.commit()
    fake_gateway.add(make_movie(5, [ACTION]))

    movie = await MovieRepository(db_session, fake_gateway).get_or_import(5)

    assert [g.tmdb_id for g in movie.genres] == [ACTION]
    assert db_session.query(Genre).count() == 1

    # a second lookup is served locally
    await MovieRepository(db_session, fake_gateway).get_or_import(5)
    assert fake_gateway.calls.count(("movie_by_id", 5)) == 1


async def test_import_unknown_movie(db_session, fake_gateway):
    with pytest.raises(MovieNotFound):
        await MovieRepository(db_session, fake_gateway).get_or_import(404)

    with pytest.raises(MovieNotFound):
        await MovieRepository(db_session).get_or_import(404)
