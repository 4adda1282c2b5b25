from app.core.security import security
from app.models.movie import Genre
from app.models.user import User
from app.utils.exceptions import TMDBAPIError


def test_popular(test_client, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1), make_movie(2))

    res = test_client.get("/api/v1/movies/popular?page=2")

    assert res.status_code == 200
    assert res.json()["page"] == 2
    assert len(res.json()["movies"]) == 2
    assert ("popular", 2) in fake_gateway.calls


def test_search_sanitizes_query(test_client, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, title="Alien"), make_movie(2, title="Heat"))

    res = test_client.get("/api/v1/movies/search", params={"q": "<alien>"})

    assert res.status_code == 200
    assert [m["id"] for m in res.json()["movies"]] == [1]
    assert fake_gateway.calls[-1] == ("search", "alien", 1)


def test_discover_parses_genre_list(test_client, fake_gateway):
    res = test_client.get("/api/v1/movies/discover", params={"genres": "28,12", "min_rating": 6.5, "sort_by": "rating"})

    assert res.status_code == 200
    _, filters, _ = fake_gateway.calls[-1]
    assert filters.genres == [28, 12]
    assert filters.min_rating == 6.5
    assert filters.sort_by == "rating"


def test_discover_rejects_bad_sort(test_client):
    assert test_client.get("/api/v1/movies/discover", params={"sort_by": "budget"}).status_code == 422


def test_movie_details(test_client, fake_gateway, make_movie):
    fake_gateway.add(make_movie(603, [28], title="The Matrix"))

    assert test_client.get("/api/v1/movies/tmdb/603").json()["title"] == "The Matrix"
    assert test_client.get("/api/v1/movies/tmdb/604").status_code == 404


def test_catalog_outage(test_client, fake_gateway):
    fake_gateway.error = TMDBAPIError("down")

    res = test_client.get("/api/v1/movies/trending")

    assert res.status_code == 503


def test_genre_crud(test_client, auth_headers, db_session):
    res = test_client.post("/api/v1/genres", json={"name": "Noir", "tmdb_id": None}, headers=auth_headers)
    assert res.status_code == 201
    genre_id = res.json()["id"]

    dup = test_client.post("/api/v1/genres", json={"name": "Noir"}, headers=auth_headers)
    assert dup.status_code == 409

    res = test_client.put(f"/api/v1/genres/{genre_id}", json={"name": "Film Noir"}, headers=auth_headers)
    assert res.json()["name"] == "Film Noir"

    assert [g["name"] for g in test_client.get("/api/v1/genres").json()] == ["Film Noir"]

    assert test_client.delete(f"/api/v1/genres/{genre_id}", headers=auth_headers).status_code == 204
    assert db_session.query(Genre).count() == 0


def test_catalog_genres(test_client):
    res = test_client.get("/api/v1/genres/catalog")

    assert res.status_code == 200
    assert {"id": 28, "name": "Action"} in res.json()


def test_ratings(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(603))

    res = test_client.post("/api/v1/ratings", json={"movie_id": 603, "score": 4}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["movie_id"] == 603

    # rating again replaces the score
    test_client.post("/api/v1/ratings", json={"movie_id": 603, "score": 2}, headers=auth_headers)

    average = test_client.get("/api/v1/ratings/average/movie/603").json()
    assert average == {"movie_id": 603, "average_score": 2.0, "rating_count": 1}

    ratings = test_client.get("/api/v1/ratings/movie/603").json()
    assert len(ratings) == 1

    assert test_client.post("/api/v1/ratings", json={"movie_id": 603, "score": 6}, headers=auth_headers).status_code == 422

    rating_id = ratings[0]["id"]
    assert test_client.delete(f"/api/v1/ratings/{rating_id}", headers=auth_headers).status_code == 204


def test_health(test_client):
    res = test_client.get("/health")
    assert res.json()["status"] == "healthy"
    assert "X-Process-Time" in res.headers


def test_local_movie_crud(test_client, auth_headers, db_session):
    drama = Genre(name="Drama", tmdb_id=18)
    db_session.add(drama)
    db_session.commit()

    payload = {
        "tmdb_id": 238,
        "title": "The Godfather",
        "release_date": "1972-03-14",
        "vote_average": 8.7,
        "genre_ids": [drama.id, 999],
    }
    res = test_client.post("/api/v1/movies", json=payload, headers=auth_headers)
    assert res.status_code == 201
    movie = res.json()
    assert movie["tmdb_id"] == 238
    assert [g["name"] for g in movie["genres"]] == ["Drama"]

    assert test_client.post("/api/v1/movies", json=payload, headers=auth_headers).status_code == 409

    listed = test_client.get("/api/v1/movies", params={"page": 1, "page_size": 10}).json()
    assert [m["id"] for m in listed] == [movie["id"]]

    payload.update(title="The Godfather Part I", genre_ids=[])
    res = test_client.put(f"/api/v1/movies/{movie['id']}", json=payload, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["title"] == "The Godfather Part I"
    assert res.json()["genres"] == []

    assert test_client.get(f"/api/v1/movies/{movie['id']}").json()["title"] == "The Godfather Part I"
    assert test_client.delete(f"/api/v1/movies/{movie['id']}", headers=auth_headers).status_code == 204
    assert test_client.get(f"/api/v1/movies/{movie['id']}").status_code == 404


def test_rating_lookup_and_update(test_client, auth_headers, fake_gateway, make_movie, db_session):
    fake_gateway.add(make_movie(603))
    rating = test_client.post(
        "/api/v1/ratings", json={"movie_id": 603, "score": 3, "comment": "ok"}, headers=auth_headers
    ).json()

    assert [r["id"] for r in test_client.get("/api/v1/ratings").json()] == [rating["id"]]
    assert test_client.get(f"/api/v1/ratings/{rating['id']}").json()["comment"] == "ok"
    assert test_client.get("/api/v1/ratings/9999").status_code == 404

    res = test_client.put(
        f"/api/v1/ratings/{rating['id']}", json={"score": 5, "comment": "better"}, headers=auth_headers
    )
    assert res.status_code == 200
    assert (res.json()["score"], res.json()["movie_id"]) == (5, 603)

    other = User(email="other@example.com", username="other", hashed_password="x", is_active=True)
    db_session.add(other)
    db_session.commit()
    other_headers = {"Authorization": f"Bearer {security.create_access_token(subject=other.id)}"}

    res = test_client.put(f"/api/v1/ratings/{rating['id']}", json={"score": 1}, headers=other_headers)
    assert res.status_code == 403
    assert test_client.put("/api/v1/ratings/9999", json={"score": 1}, headers=auth_headers).status_code == 404
