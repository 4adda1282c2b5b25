from app.models.like_list import LikeList, LikeStatus
from app.models.movie import Genre, Movie

ACTION, SCIFI = 28, 878


def test_requires_auth(test_client):
    res = test_client.get("/api/v1/likelist")
    assert res.status_code in (401, 403)


def test_like_imports_movie_from_catalog(test_client, auth_headers, fake_gateway, make_movie, db_session):
    fake_gateway.add(make_movie(603, [ACTION, SCIFI], vote_average=8.2, title="The Matrix"))

    res = test_client.post("/api/v1/likelist", json={"movie_id": 603, "status": 1}, headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["movie_id"] == 603
    assert data["status"] == LikeStatus.LIKED
    assert data["movie"]["title"] == "The Matrix"
    assert sorted(g["id"] for g in data["movie"]["genres"]) == [ACTION, SCIFI]

    movie = db_session.query(Movie).filter(Movie.tmdb_id == 603).one()
    assert sorted(g.tmdb_id for g in movie.genres) == [ACTION, SCIFI]


def test_import_reuses_seeded_genre_by_name(test_client, auth_headers, fake_gateway, make_movie, db_session):
    db_session.add(Genre(name="Action"))
    db_session.commit()
    fake_gateway.add(make_movie(1, [ACTION]))

    test_client.post("/api/v1/likelist", json={"movie_id": 1, "status": 1}, headers=auth_headers)

    genres = db_session.query(Genre).all()
    assert len(genres) == 1
    assert genres[0].tmdb_id == ACTION


def test_status_upsert_replaces_previous(test_client, auth_headers, fake_gateway, make_movie, db_session):
    fake_gateway.add(make_movie(603, [ACTION]))

    test_client.post("/api/v1/likelist", json={"movie_id": 603, "status": 1}, headers=auth_headers)
    res = test_client.post("/api/v1/likelist", json={"movie_id": 603, "status": 2}, headers=auth_headers)

    assert res.status_code == 200
    assert db_session.query(LikeList).count() == 1
    status = test_client.get("/api/v1/likelist/status/603", headers=auth_headers).json()
    assert status == {"status": "disliked"}
    # only fetched from the catalog once
    assert fake_gateway.calls.count(("movie_by_id", 603)) == 1


def test_unknown_movie_is_404(test_client, auth_headers):
    res = test_client.post("/api/v1/likelist", json={"movie_id": 999, "status": 1}, headers=auth_headers)
    assert res.status_code == 404


def test_invalid_status_rejected(test_client, auth_headers):
    res = test_client.post("/api/v1/likelist", json={"movie_id": 1, "status": 3}, headers=auth_headers)
    assert res.status_code == 422


def test_list_and_remove(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]), make_movie(2, [SCIFI]))
    test_client.post("/api/v1/likelist", json={"movie_id": 1, "status": 1}, headers=auth_headers)
    test_client.post("/api/v1/likelist", json={"movie_id": 2, "status": 2}, headers=auth_headers)

    items = test_client.get("/api/v1/likelist", headers=auth_headers).json()
    assert sorted(item["movie_id"] for item in items) == [1, 2]

    assert test_client.delete("/api/v1/likelist/1", headers=auth_headers).status_code == 204
    assert test_client.delete("/api/v1/likelist/1", headers=auth_headers).status_code == 404
    assert test_client.get("/api/v1/likelist/status/1", headers=auth_headers).json() == {"status": "none"}
