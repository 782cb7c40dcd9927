import json

from fastapi.testclient import TestClient

from postquery.api import deps
from postquery.api.main import create_app
from postquery.common.config import settings
from postquery.query.categories import load_category_lookup


def test_health_and_help():
    client = TestClient(create_app())
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers["x-request-id"]

    r = client.get("/help")
    assert "author:<name>" in r.json()["help"]


def test_interpret_with_inline_categories():
    client = TestClient(create_app())
    r = client.post(
        "/interpret",
        json={
            "q": "category:Intel Quick Updates foo origin:WordPress",
            "prior": {"author": "smith", "origin": "manual"},
            "categories": [{"id": 5, "name": "Intel Quick Updates"}],
        },
    )
    assert r.status_code == 200
    data = r.json()
    assert data["query"]["category_id"] == "5"
    assert data["query"]["author"] == "smith"
    assert data["query"]["origin"] == "wordpress"
    assert data["query"]["free_text"] == "foo"
    assert data["terms"] == {"phrases": [], "words": ["foo"]}
    assert data["params"] == {"search": "foo", "author": "smith", "category": "5", "origin": "wordpress"}


def test_interpret_uses_configured_categories(tmp_path, monkeypatch):
    path = tmp_path / "categories.json"
    path.write_text(json.dumps([{"id": "7", "name": "BOLO"}]), encoding="utf-8")
    monkeypatch.setattr(settings, "categories_path", str(path))

    client = TestClient(create_app())
    r = client.post("/interpret", json={"q": "category:bolo"})
    assert r.status_code == 200
    assert r.json()["query"]["category_id"] == "7"


def test_configured_categories_loaded_once(tmp_path, monkeypatch):
    path = tmp_path / "categories.json"
    path.write_text(json.dumps([{"id": "7", "name": "BOLO"}]), encoding="utf-8")
    monkeypatch.setattr(settings, "categories_path", str(path))

    calls = []

    def counting_load(p):
        calls.append(p)
        return load_category_lookup(p)

    monkeypatch.setattr(deps, "load_category_lookup", counting_load)
    deps._category_file.cache_clear()

    client = TestClient(create_app())
    for _ in range(3):
        r = client.post("/interpret", json={"q": "category:bolo"})
        assert r.json()["query"]["category_id"] == "7"
    assert calls == [str(path)]


def test_interpret_rejects_long_query(monkeypatch):
    monkeypatch.setattr(settings, "max_query_length", 5)
    client = TestClient(create_app())
    r = client.post("/interpret", json={"q": "much too long"})
    assert r.status_code == 422


def test_highlight_endpoint():
    client = TestClient(create_app())
    r = client.post(
        "/highlight",
        json={
            "q": '"traffic stop" stop author:jdoe',
            "posts": [
                {"id": 1, "title": "Routine traffic stop", "content": "<p>traffic stop and stop</p>"},
            ],
        },
    )
    assert r.status_code == 200
    data = r.json()
    assert data["query"]["author"] == "jdoe"
    post = data["posts"][0]
    assert post["title"] == [
        {"text": "Routine ", "matched": False},
        {"text": "traffic stop", "matched": True},
    ]
    assert [s["text"] for s in post["content"] if s["matched"]] == ["traffic stop", "stop"]
    assert post["content_matches"] == 3
