from app.core.security import security


def _create(client, **overrides):
    payload = {"email": "second@example.com", "username": "second", "password": "password456"}
    payload.update(overrides)
    return client.post("/api/v1/users", json=payload)


def test_create_and_fetch_user(test_client, auth_headers):
    res = _create(test_client)
    assert res.status_code == 201
    created = res.json()
    assert "hashed_password" not in created

    assert test_client.get(f"/api/v1/users/{created['id']}", headers=auth_headers).json()["username"] == "second"
    assert test_client.get("/api/v1/users/9999", headers=auth_headers).status_code == 404

    usernames = [u["username"] for u in test_client.get("/api/v1/users", headers=auth_headers).json()]
    assert usernames == ["viewer", "second"]


def test_create_user_rejects_duplicates(test_client, user):
    res = _create(test_client, username=user.username)
    assert res.status_code == 400
    assert res.json()["detail"] == "Username already taken"

    res = _create(test_client, email=user.email)
    assert res.json()["detail"] == "Email already registered"


def test_users_can_only_change_themselves(test_client, user, auth_headers):
    other = _create(test_client).json()

    res = test_client.put(f"/api/v1/users/{user.id}", json={"first_name": "Vi"}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["first_name"] == "Vi"

    assert test_client.put(f"/api/v1/users/{other['id']}", json={"first_name": "X"}, headers=auth_headers).status_code == 403
    assert test_client.delete(f"/api/v1/users/{other['id']}", headers=auth_headers).status_code == 403

    other_headers = {"Authorization": f"Bearer {security.create_access_token(subject=other['id'])}"}
    assert test_client.delete(f"/api/v1/users/{other['id']}", headers=other_headers).status_code == 204


def test_user_ratings(test_client, user, auth_headers, fake_gateway, make_movie):
    fake_gateway.add(make_movie(603), make_movie(604))
    test_client.post("/api/v1/ratings", json={"movie_id": 603, "score": 4}, headers=auth_headers)
    test_client.post("/api/v1/ratings", json={"movie_id": 604, "score": 2}, headers=auth_headers)

    ratings = test_client.get(f"/api/v1/users/{user.id}/ratings").json()

    assert sorted((r["movie_id"], r["score"]) for r in ratings) == [(603, 4), (604, 2)]
    assert test_client.get("/api/v1/users/9999/ratings").status_code == 404
