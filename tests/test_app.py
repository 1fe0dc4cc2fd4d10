import json

import pytest

from color_path.app import create_app

ANCHORS = json.dumps([[0, 1, 0.5], [240, 1, 0.5]])


@pytest.fixture
def client():
    app = create_app({"TESTING": True, "MAX_STEPS": 64})
    return app.test_client()


def test_functions(client):
    resp = client.get("/functions")
    assert resp.status_code == 200
    assert "sinusoidal" in resp.get_json()


def test_palette(client):
    resp = client.get("/palette", query_string={"anchors": ANCHORS, "steps": 5, "model": "hsl"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["colors"]) == 5
    assert body["colors"][0] == "#ff0000"
    assert body["colors"][-1] == "#0000ff"
    assert "anchors=" in body["query"]


def test_palette_steps_clamped(client):
    resp = client.get("/palette", query_string={"anchors": ANCHORS, "steps": 5000})
    assert len(resp.get_json()["colors"]) == 64
    resp = client.get("/palette", query_string={"anchors": ANCHORS, "steps": 0})
    assert len(resp.get_json()["colors"]) == 1


def test_palette_hue_shift(client):
    resp = client.get(
        "/palette", query_string={"anchors": ANCHORS, "steps": 2, "hueShift": 120}
    )
    anchors = resp.get_json()["anchors"]
    assert anchors[0][0] == pytest.approx(120.0)
    assert anchors[1][0] == pytest.approx(0.0)


def test_random_palette_is_seeded(client):
    a = client.get("/palette", query_string={"seed": 7}).get_json()
    b = client.get("/palette", query_string={"seed": 7}).get_json()
    assert a["anchors"] == b["anchors"]
    assert len(a["colors"]) == 16


def test_bad_request(client):
    resp = client.get("/palette", query_string={"anchors": "[[0,1,0.5]]"})
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    resp = client.get("/palette", query_string={"anchors": ANCHORS, "steps": "x"})
    assert resp.status_code == 400


def test_color_at(client):
    resp = client.get("/color-at", query_string={"anchors": ANCHORS, "t": 1.7, "model": "hsl"})
    body = resp.get_json()
    assert body["t"] == 1.0
    assert body["hex"] == "#0000ff"
    assert client.get("/color-at", query_string={"anchors": ANCHORS, "t": "x"}).status_code == 400


def test_palette_export_values(client):
    resp = client.get("/palette", query_string={"anchors": ANCHORS, "steps": 3, "model": "hsl"})
    body = resp.get_json()
    assert body["export"][0] == "#ff0000"
    assert len(body["export"]) == 3


def test_palette_css(client):
    resp = client.get(
        "/palette/css",
        query_string={"anchors": ANCHORS, "steps": 2, "model": "hsl", "title": "Red Blue"},
    )
    assert resp.status_code == 200
    assert resp.mimetype == "text/css"
    text = resp.get_data(as_text=True)
    assert "--redBlue-50: #ff0000;" in text
    assert "--redBlue-100: #0000ff;" in text


def test_palette_svg(client):
    resp = client.get("/palette/svg", query_string={"anchors": ANCHORS, "steps": 4})
    assert resp.status_code == 200
    assert resp.mimetype == "image/svg+xml"
    assert resp.get_data(as_text=True).count("<rect") == 4
    assert client.get("/palette/svg", query_string={"anchors": "[[0,1,0.5]]"}).status_code == 400
