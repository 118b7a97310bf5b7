from pymongo.errors import PyMongoError

from services import exercise_service


def test_register_new_user(client):
    r = client.post("/api/exercise/new-user", json={"username": "alice"})
    assert r.status_code == 200
    body = r.json()
    assert body["username"] == "alice"
    assert 0 <= body["userId"] < 100000


def test_register_from_form_fields(client):
    r = client.post("/api/exercise/new-user", data={"username": "carol"})
    assert r.status_code == 200
    assert r.json()["username"] == "carol"


def test_register_duplicate_username(client, register):
    register("alice")
    r = client.post("/api/exercise/new-user", json={"username": "alice"})
    assert r.status_code == 200
    assert r.json() == {"Error": "Username already exists"}

    users = client.get("/api/exercise/users").json()
    assert [u["username"] for u in users].count("alice") == 1


def test_register_retries_colliding_user_id(client, register, monkeypatch):
    ids = iter([7, 7, 8])
    monkeypatch.setattr(exercise_service, "generate_user_id", lambda: next(ids))
    assert register("alice")["userId"] == 7
    assert register("bob")["userId"] == 8


def test_register_gives_up_after_repeated_collisions(client, register, monkeypatch):
    monkeypatch.setattr(exercise_service, "generate_user_id", lambda: 42)
    register("alice")
    r = client.post("/api/exercise/new-user", json={"username": "bob"})
    assert "Error" in r.json()


def test_register_missing_username_is_bad_request(client):
    r = client.post("/api/exercise/new-user", json={})
    assert r.status_code == 400
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "username: Field required"


def test_register_invalid_json_is_bad_request(client):
    r = client.post(
        "/api/exercise/new-user",
        content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert r.text == "Invalid JSON body"


def test_list_users(client, register):
    register("alice")
    register("bob")
    users = client.get("/api/exercise/users").json()
    assert sorted(u["username"] for u in users) == ["alice", "bob"]
    assert all(isinstance(u["_id"], str) for u in users)


def test_list_users_store_error(client, monkeypatch):
    async def failing(database):
        raise PyMongoError("connection refused")
    monkeypatch.setattr(exercise_service, "list_users", failing)
    r = client.get("/api/exercise/users")
    assert r.status_code == 200
    assert r.json() == {"Error": "connection refused"}
