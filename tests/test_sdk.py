# tests/test_sdk.py
import asyncio
import httpx
import pytest
import requests
from requests.adapters import BaseAdapter
from fastapi.testclient import TestClient
from app.database import MemoryStore
from app.main import app, get_product_store, get_user_store
from sdk.catalog import CatalogClient, _parse_field

class ASGIAdapter(BaseAdapter):
    """Serves a requests.Session from the app in-process."""

    def __init__(self, app):
        super().__init__()
        self.client = TestClient(app)

    def send(self, request, **kwargs):
        r = self.client.request(request.method, request.url, content=request.body, headers=dict(request.headers))
        resp = requests.Response()
        resp.status_code = r.status_code
        resp._content = r.content
        resp.headers.update(r.headers)
        resp.url = request.url
        resp.request = request
        resp.encoding = "utf-8"
        return resp

    def close(self):
        self.client.close()

def reset():
    app.dependency_overrides.clear()
    products, users = MemoryStore(), MemoryStore()
    app.dependency_overrides[get_product_store] = lambda: products
    app.dependency_overrides[get_user_store] = lambda: users
    session = requests.Session()
    session.mount("http://testserver", ASGIAdapter(app))
    return CatalogClient(base_url="http://testserver", session=session)

def test_product_calls():
    c = reset()
    p = c.create_product("Chess", "Strategy", "Classic", 500, 10)
    assert p == {"id": 1, "name": "Chess", "category": "Strategy", "description": "Classic", "price": 500, "stock": 10}
    assert c.create_product("Go", "Abstract", "Stones", 900, 3, rating=4.7)["rating"] == 4.7
    assert c.get_product(1) == p
    assert c.update_product(1, stock=9)["stock"] == 9
    assert [x["name"] for x in c.list_products()] == ["Chess", "Go"]
    assert c.delete_product(1) == {"message": "Товар удален"}
    with pytest.raises(requests.exceptions.HTTPError) as exc:
        c.get_product(1)
    assert exc.value.response.status_code == 404
    assert exc.value.response.json() == {"message": "Товар не найден"}

def test_user_calls():
    c = reset()
    u = c.create_user("Anna", 27)
    assert c.get_user(u["id"]) == u
    assert c.update_user(u["id"], name="Anya") == {"id": u["id"], "name": "Anya", "age": 27}
    assert len(c.list_users()) == 1
    assert c.delete_user(u["id"]) == {"message": "Пользователь удален"}
    with pytest.raises(requests.exceptions.HTTPError):
        c.delete_user(u["id"])

def test_default_session_is_requests():
    assert isinstance(CatalogClient().session, requests.Session)

def test_create_product_async():
    c = reset()
    transport = httpx.ASGITransport(app=app)
    p = asyncio.run(c.create_product_async({"name": "Azul"}, transport=transport))
    assert p == {"id": 1, "name": "Azul"}

def test_parse_field():
    assert _parse_field("stock=3") == ("stock", 3)
    assert _parse_field("price=9.5") == ("price", 9.5)
    assert _parse_field("name=Azul") == ("name", "Azul")
