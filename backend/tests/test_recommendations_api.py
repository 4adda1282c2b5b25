from app.schemas.movie import MoviePage
from app.utils.exceptions import TMDBAPIError

ACTION, SCIFI, HORROR = 28, 878, 27


def _set(client, headers, movie_id, status):
    res = client.post("/api/v1/likelist", json={"movie_id": movie_id, "status": status}, headers=headers)
    assert res.status_code == 200


def test_new_user_gets_prompt(test_client, auth_headers, fake_gateway):
    res = test_client.get("/api/v1/recommendations/personalized?page=3", headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["strategy"] == "InsufficientData"
    assert data["movies"] == []
    assert data["page"] == 3
    assert data["total_pages"] == 1
    assert data["total_results"] == 0
    assert "Like at least 2 movies" in data["message"]
    assert fake_gateway.calls == []


def test_one_like_is_still_insufficient(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]), make_movie(2, [HORROR]), make_movie(3, [HORROR]))
    _set(test_client, auth_headers, 1, 1)
    _set(test_client, auth_headers, 2, 2)
    _set(test_client, auth_headers, 3, 2)

    data = test_client.get("/api/v1/recommendations/personalized", headers=auth_headers).json()

    assert data["strategy"] == "InsufficientData"


def test_personalized_recommendations(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(
        make_movie(1, [ACTION, SCIFI], vote_average=8.7, release_date="2014-11-05"),
        make_movie(2, [ACTION], vote_average=8.0, release_date="2010-07-16"),
        make_movie(3, [HORROR], vote_average=6.0),
    )
    _set(test_client, auth_headers, 1, 1)
    _set(test_client, auth_headers, 2, 1)
    _set(test_client, auth_headers, 3, 2)

    fake_gateway.discover_page = MoviePage(
        movies=[
            make_movie(10, [ACTION], vote_average=8.2, release_date="2019-01-01", popularity=300.0),
            make_movie(3, [ACTION], vote_average=9.5, popularity=999.0),
            make_movie(11, [ACTION, SCIFI], vote_average=8.8, release_date="2016-01-01", popularity=800.0),
        ],
        page=1,
        total_pages=4,
        total_results=80,
    )

    res = test_client.get("/api/v1/recommendations/personalized", headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["strategy"] == "Advanced"
    assert [m["id"] for m in data["movies"]] == [11, 10]
    assert data["total_pages"] == 4
    assert data["total_results"] == 80

    discover = [c for c in fake_gateway.calls if c[0] == "discover"]
    assert len(discover) == 1
    filters = discover[0][1]
    assert filters.genres == [ACTION]
    assert filters.min_rating == 7.0
    assert filters.release_date_from == "2010-01-01"


def test_catalog_failure_is_503(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]), make_movie(2, [ACTION]))
    _set(test_client, auth_headers, 1, 1)
    _set(test_client, auth_headers, 2, 1)
    fake_gateway.error = TMDBAPIError("timeout", operation="/discover/movie")

    res = test_client.get("/api/v1/recommendations/personalized", headers=auth_headers)

    assert res.status_code == 503
    assert res.json()["detail"] == "Could not compute recommendations"


def test_user_data(test_client, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(1, [ACTION]), make_movie(2, [SCIFI]), make_movie(3, [HORROR]))
    _set(test_client, auth_headers, 1, 1)
    _set(test_client, auth_headers, 2, 1)
    _set(test_client, auth_headers, 3, 2)

    data = test_client.get("/api/v1/recommendations/user-data", headers=auth_headers).json()

    assert data["liked_count"] == 2
    assert data["disliked_count"] == 1
    assert data["strategy"] == "Advanced"
    assert sorted(m["id"] for m in data["liked_movies"]) == [1, 2]
    assert [m["id"] for m in data["disliked_movies"]] == [3]


def test_invalid_page(test_client, auth_headers):
    res = test_client.get("/api/v1/recommendations/personalized?page=0", headers=auth_headers)
    assert res.status_code == 400
