"""
API tests — shapes listing, stateless compute, session lifecycle, saving and
CSV export over HTTP.
"""

import csv
import io

from api.main import DEFAULT_CORS_ORIGINS, cors_origins
from sectioncalc import CSV_HEADER, ShapeKind


# ============================================================
# Shapes + compute
# ============================================================

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_list_shapes(client):
    response = client.get("/api/shapes")
    assert response.status_code == 200
    shapes = response.json()
    assert [s["shape"] for s in shapes] == [k.value for k in ShapeKind]

    i_section = shapes[-1]
    assert i_section["name"] == "I Section"
    assert [p["symbol"] for p in i_section["parameters"]] == ["b_f", "t_f", "t_w", "D", "d_1"]
    assert i_section["parameters"][3]["label"] == "Overall Depth"
    assert len(i_section["equations"]) == 5


def test_compute_solid_circle(client):
    response = client.post("/api/compute", json={"shape": "solidCircle", "parameters": {"r": "10"}})
    assert response.status_code == 200
    data = response.json()
    assert data["parameters"] == {"r": 10.0}
    assert data["result"]["rx"] == 5.0
    assert data["formatted"]["A"] == "314"
    assert data["formatted"]["Ix"] == "7.85e+3"


def test_compute_accepts_numbers_and_text(client):
    response = client.post(
        "/api/compute",
        json={"shape": "solidRectangle", "parameters": {"b": 50, "h": "100"}},
    )
    assert response.json()["result"]["A"] == 5000


def test_compute_incomplete_returns_zeros(client):
    response = client.post("/api/compute", json={"shape": "rectangleHollow", "parameters": {"b_o": "100"}})
    assert response.status_code == 200
    data = response.json()
    assert all(v == 0 for v in data["result"].values())
    assert all(v == "0.000" for v in data["formatted"].values())


def test_compute_invalid_hollow_returns_zeros(client):
    response = client.post(
        "/api/compute",
        json={
            "shape": "rectangleHollow",
            "parameters": {"b_o": "100", "h_o": "200", "b_i": "150", "h_i": "100"},
        },
    )
    assert response.json()["result"]["A"] == 0


def test_compute_unknown_shape_is_422(client):
    response = client.post("/api/compute", json={"shape": "hexagon", "parameters": {}})
    assert response.status_code == 422


DEPTH_BELOW_CLEAR_DISTANCE = {"b_f": 127, "t_f": 10.7, "t_w": 7.1, "D": 3, "d_1": 283}


def test_compute_degenerate_i_section_returns_zeros(client):
    response = client.post(
        "/api/compute",
        json={"shape": "iSection", "parameters": DEPTH_BELOW_CLEAR_DISTANCE},
    )
    assert response.status_code == 200
    data = response.json()
    assert all(v == 0 for v in data["result"].values())
    assert all(v == "0.000" for v in data["formatted"].values())


def test_compute_overflowing_hollow_returns_zeros(client):
    response = client.post(
        "/api/compute",
        json={
            "shape": "rectangleHollow",
            "parameters": {"b_o": 5e102, "h_o": 5e102, "b_i": 4e102, "h_i": 4e102},
        },
    )
    assert response.status_code == 200
    assert all(v == 0 for v in response.json()["result"].values())


# ============================================================
# Sessions
# ============================================================

def test_create_session_defaults(client):
    response = client.post("/api/sessions", json={})
    assert response.status_code == 201
    data = response.json()
    assert data["shape"] == "solidCircle"
    assert data["parameters"] == {"r": ""}
    assert data["saved_count"] == 0
    assert data["can_export"] is False


def test_create_session_with_shape_and_parameters(client):
    response = client.post(
        "/api/sessions",
        json={"shape": "solidSquare", "parameters": {"a": "100"}},
    )
    data = response.json()
    assert data["current"]["result"]["Sx"] == 250_000


def test_unknown_session_is_404(client):
    assert client.get("/api/sessions/nope").status_code == 404
    assert client.post("/api/sessions/nope/results").status_code == 404
    assert client.get("/api/sessions/nope/export").status_code == 404
    assert client.delete("/api/sessions/nope").status_code == 404


def test_select_shape_and_update_parameters(client, session_id):
    response = client.put(f"/api/sessions/{session_id}/shape", json={"shape": "solidRectangle"})
    assert response.json()["parameters"] == {"b": "", "h": ""}

    response = client.put(
        f"/api/sessions/{session_id}/parameters",
        json={"parameters": {"b": "50", "h": "100"}},
    )
    data = response.json()
    assert data["parameters"] == {"b": "50", "h": "100"}
    assert data["current"]["formatted"]["Zx"] == "8.33e+4"


def test_save_and_list_results(client, session_id):
    client.put(f"/api/sessions/{session_id}/parameters", json={"parameters": {"r": "10"}})
    for n in range(3):
        response = client.post(f"/api/sessions/{session_id}/results")
        assert response.status_code == 201
        assert response.json()["shape"] == "solidCircle"

    results = client.get(f"/api/sessions/{session_id}/results").json()
    assert len(results) == 3
    assert len({r["id"] for r in results}) == 3
    assert client.get(f"/api/sessions/{session_id}").json()["saved_count"] == 3


def test_export_empty_session_is_no_content(client, session_id):
    response = client.get(f"/api/sessions/{session_id}/export")
    assert response.status_code == 204
    assert response.content == b""


def test_export_csv(client, session_id):
    client.put(f"/api/sessions/{session_id}/parameters", json={"parameters": {"r": "10"}})
    client.post(f"/api/sessions/{session_id}/results")
    client.put(f"/api/sessions/{session_id}/shape", json={"shape": "iSection"})
    client.put(
        f"/api/sessions/{session_id}/parameters",
        json={"parameters": {"b_f": "100", "t_f": "10", "t_w": "5", "D": "200", "d_1": "180"}},
    )
    client.post(f"/api/sessions/{session_id}/results")

    response = client.get(f"/api/sessions/{session_id}/export")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    disposition = response.headers["content-disposition"]
    assert 'filename="section-properties-' in disposition
    assert disposition.endswith('.csv"')

    rows = list(csv.reader(io.StringIO(response.text)))
    assert tuple(rows[0]) == CSV_HEADER
    assert [r[0] for r in rows[1:]] == ["solidCircle", "iSection"]
    assert len(rows[2][2].split("; ")) == 5
    assert client.get(f"/api/sessions/{session_id}").json()["can_export"] is True


def test_session_with_degenerate_i_section_saves_zero_row(client, session_id):
    client.put(f"/api/sessions/{session_id}/shape", json={"shape": "iSection"})
    response = client.put(
        f"/api/sessions/{session_id}/parameters",
        json={"parameters": DEPTH_BELOW_CLEAR_DISTANCE},
    )
    assert response.status_code == 200
    assert all(v == 0 for v in response.json()["current"]["result"].values())

    response = client.post(f"/api/sessions/{session_id}/results")
    assert response.status_code == 201

    export = client.get(f"/api/sessions/{session_id}/export")
    assert export.status_code == 200
    row = list(csv.reader(io.StringIO(export.text)))[1]
    assert row[3:] == ["0.000"] * 11


def test_sessions_are_isolated(client):
    a = client.post("/api/sessions", json={"parameters": {"r": "10"}}).json()["session_id"]
    b = client.post("/api/sessions", json={}).json()["session_id"]
    client.post(f"/api/sessions/{a}/results")
    assert client.get(f"/api/sessions/{a}").json()["saved_count"] == 1
    assert client.get(f"/api/sessions/{b}").json()["saved_count"] == 0


def test_end_session(client, session_id):
    assert client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert client.get(f"/api/sessions/{session_id}").status_code == 404


# ============================================================
# Verification endpoint
# ============================================================

def test_verify_rejects_invalid_dimensions(client):
    response = client.post(
        "/api/verify",
        json={"shape": "circularHollow", "parameters": {"r_o": "10", "r_i": "10"}},
    )
    assert response.status_code == 422


def test_verify_rejects_too_few_circle_segments(client):
    response = client.post(
        "/api/verify",
        json={"shape": "solidCircle", "parameters": {"r": "10"}, "circle_segments": 3},
    )
    assert response.status_code == 422


def test_verify_solid_rectangle(client):
    response = client.post(
        "/api/verify",
        json={"shape": "solidRectangle", "parameters": {"b": "50", "h": "100"}},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["closed_form"]["A"] == 5000
    assert abs(data["mesh"]["A"] - 5000) < 1e-6
    assert data["relative_differences"]["Ix"] < 1e-6
    assert data["element_count"] > 0


# ============================================================
# CORS configuration
# ============================================================

def test_cors_defaults_to_dev_origins():
    assert cors_origins(None) == list(DEFAULT_CORS_ORIGINS)
    assert cors_origins("") == list(DEFAULT_CORS_ORIGINS)


def test_cors_appends_extra_origins_without_duplicates():
    origins = cors_origins(" https://calc.example.com/ ,http://localhost:5173,,https://calc.example.com")
    assert origins == [*DEFAULT_CORS_ORIGINS, "https://calc.example.com"]


def test_cors_wildcard_allows_all():
    assert cors_origins("https://calc.example.com, *") == ["*"]


def test_cors_header_for_dev_origin(client):
    response = client.get("/health", headers={"Origin": "http://localhost:5173"})
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
