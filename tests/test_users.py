# tests/test_users.py
from fastapi.testclient import TestClient
from app.core import URL_SAFE_ALPHABET
from app.database import MemoryStore
from app.main import app, get_user_store

client = TestClient(app)

def reset(records=None):
    app.dependency_overrides.clear()
    store = MemoryStore(records)
    app.dependency_overrides[get_user_store] = lambda: store
    return store

def test_create_assigns_random_token_id():
    store = reset()
    r = client.post("/api/users", json={"name": "Anna", "age": 27})
    assert r.status_code == 201
    body = r.json()
    assert len(body["id"]) == 6
    assert set(body["id"]) <= set(URL_SAFE_ALPHABET)
    assert body == {"id": body["id"], "name": "Anna", "age": 27}
    assert store.records == [body]

def test_created_ids_are_distinct():
    reset([{"id": "aaaaaa", "name": "old", "age": 1}])
    ids = {client.post("/api/users", json={"name": f"u{i}", "age": i}).json()["id"] for i in range(20)}
    assert len(ids) == 20
    assert "aaaaaa" not in ids

def test_create_ignores_body_id():
    reset()
    r = client.post("/api/users", json={"id": "hacked", "name": "Boris", "age": 40})
    assert r.json()["id"] != "hacked"

def test_get_matches_exact_string_id():
    reset([{"id": "Ab_3-x", "name": "Anna", "age": 27}, {"id": "1", "name": "Numeric", "age": 5}])
    assert client.get("/api/users/Ab_3-x").json()["name"] == "Anna"
    assert client.get("/api/users/1").json()["name"] == "Numeric"
    r = client.get("/api/users/ab_3-x")
    assert r.status_code == 404
    assert r.json() == {"message": "Пользователь не найден"}

def test_update_merges_and_preserves_id():
    store = reset([{"id": "Ab_3-x", "name": "Anna", "age": 27}])
    r = client.put("/api/users/Ab_3-x", json={"id": "other1", "age": 28})
    assert r.status_code == 200
    assert r.json() == {"id": "Ab_3-x", "name": "Anna", "age": 28}
    assert store.records == [r.json()]

def test_update_missing_user():
    reset()
    r = client.put("/api/users/nobody", json={"age": 1})
    assert r.status_code == 404
    assert r.json() == {"message": "Пользователь не найден"}

def test_delete_then_delete_again():
    store = reset([{"id": "Ab_3-x", "name": "Anna", "age": 27}, {"id": "Zz9_0-", "name": "Ivan", "age": 33}])
    r = client.delete("/api/users/Ab_3-x")
    assert r.status_code == 200
    assert r.json() == {"message": "Пользователь удален"}
    assert [u["id"] for u in store.records] == ["Zz9_0-"]
    assert client.delete("/api/users/Ab_3-x").status_code == 404

def test_list_users():
    reset()
    client.post("/api/users", json={"name": "Anna", "age": 27})
    client.post("/api/users", json={"name": "Ivan"})
    users = client.get("/api/users").json()
    assert [u["name"] for u in users] == ["Anna", "Ivan"]
    assert "age" not in users[1]

def test_bodiless_create_and_update():
    store = reset([{"id": "Ab_3-x", "name": "Anna", "age": 27}])
    r = client.post("/api/users")
    assert r.status_code == 201
    assert list(r.json()) == ["id"]
    r2 = client.put("/api/users/Ab_3-x")
    assert r2.status_code == 200
    assert r2.json() == {"id": "Ab_3-x", "name": "Anna", "age": 27}
    assert len(store.records) == 2
