from fastapi.testclient import TestClient

from api.main import app

client = TestClient(app)


def test_health():
    assert client.get("/health").json() == {"ok": True}

def test_solve_endpoint():
    out = client.post("/solve", json={"equation": "x^2-3x+2=0"}).json()
    assert out["ok"]
    assert out["sections"]["solution"]["results"] == [1.0, 2.0]
    assert [p["name"] for p in out["points"]] == ["A", "B"]

def test_each_request_has_its_own_points():
    client.post("/solve", json={"equation": "x^2-1=0"})
    out = client.post("/solve", json={"equation": "x-5=0"}).json()
    assert [(p["name"], p["x"]) for p in out["points"]] == [("A", 5.0)]

def test_solve_endpoint_reports_user_errors():
    res = client.post("/solve", json={"equation": "x^2+"})
    assert res.status_code == 200
    out = res.json()
    assert out["ok"] is False
    assert out["error_kind"] == "user_input"

def test_factor_endpoint():
    out = client.post("/factor", json={"expression": "x^3-x"}).json()
    assert out["sections"]["factorization"]["factors"] == ["x^2-1", "x"]

def test_study_endpoint_serializes_infinite_bounds_as_null():
    out = client.post("/study", json={"expression": "y=x^2-1", "operations": ["positivity"]}).json()
    positive = out["sections"]["positivity"]["positive"]
    assert positive == [{"start": None, "end": -1.0}, {"start": 1.0, "end": None}]

def test_study_endpoint_area():
    out = client.post("/study", json={"expression": "y=x", "operations": ["area"], "area_points": [0, 2]}).json()
    assert out["sections"]["area"]["value"] == 2.0

def test_worksheet_endpoint():
    sheet = "title: t\nfunctions:\n  - {id: line, expr: 'y=2x+3', operations: [slope]}\n"
    out = client.post("/worksheet", json={"yaml": sheet}).json()
    assert out["title"] == "t"
    assert out["results"]["line"]["sections"]["slope"]["value"] == 2.0

def test_worksheet_endpoint_rejects_malformed_sheet():
    assert client.post("/worksheet", json={"yaml": "functions: []"}).status_code == 400

def test_graph_endpoint():
    out = client.post("/graph", json={"functions": ["y=x^2"], "points": [{"x": 0, "y": 0, "name": "A"}]}).json()
    assert out["functions"] == '["y=x^2"]'
    assert '"name": "A"' in out["points"]
