import inspect
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from backend.app import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_parse_counts(client):
    resp = client.post("/parse", json={"name": "p.flow", "text": "A.A\n...\n"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["counts"] == {"cells": 6, "edges": 7, "colors": 1}
    assert body["terminals"] == {"A": [0, 2]}


def test_graph_payload(client):
    resp = client.post("/graph", json={"text": "A.A"})
    cells = resp.json()["graph"]["cells"]
    assert [c["terminal"] for c in cells] == [True, False, True]
    assert resp.json()["graph"]["edges"] == [[0, 1], [1, 2]]


def test_solve(client):
    resp = client.post("/solve", json={"text": "A.A", "origin_x": 10})
    assert resp.status_code == 200
    body = resp.json()
    assert body["solved"] is True
    assert body["paths"] == {"A": [0, 1, 2]}
    assert body["cell_color"] == {"0": "A", "1": "A", "2": "A"}
    events = body["strokes"][0]["events"]
    assert events[0] == ["move", 10.0, 0.0]
    assert events[1][0] == "down" and events[-1][0] == "up"
    assert [c["next"] for c in body["graph"]["cells"]] == [1, 2, None]


def test_solve_unsolvable(client):
    body = client.post("/solve", json={"text": "AB\nBA"}).json()
    assert body["solved"] is False
    assert body["reason"] == "search exhausted"
    assert body["strokes"] == []


def test_bad_input_is_400(client):
    assert client.post("/solve", json={"text": "A.A\n.."}).status_code == 400
    assert client.post("/parse", json={"name": "x.json", "text": '{"cells": [{"neighbors": [0]}]}'}).status_code == 400
    assert client.post("/solve", json={"text": "A.A", "timeout_ms": 0}).status_code == 422


def test_server_is_launched_only_from_root_app():
    import backend.app

    assert "uvicorn" not in inspect.getsource(backend.app)
    root_launcher = Path(__file__).resolve().parents[1] / "app.py"
    assert 'uvicorn.run("backend.app:app"' in root_launcher.read_text(encoding="utf-8")
