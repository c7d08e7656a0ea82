from fastapi.testclient import TestClient

from md2latex.main import app

client = TestClient(app)


def test_convert_endpoint_returns_latex():
    r = client.post("/api/v1/convert", json={"markdown": "## Title\n\nSee [`k`].\n"})
    assert r.status_code == 200
    data = r.json()
    assert data["latex"].startswith("\\section{Title}\n")
    assert "\\cite{k}" in data["latex"]
    assert data["preprocessed"] is None


def test_convert_endpoint_can_return_preprocessed_text():
    r = client.post(
        "/api/v1/convert",
        json={"markdown": "$$ e\nx\n$$\n", "include_preprocessed": True},
    )
    assert r.status_code == 200
    assert r.json()["preprocessed"] == "``` block_equation{e}\nx\n```\n"


def test_convert_endpoint_validates_body():
    r = client.post("/api/v1/convert", json={})
    assert r.status_code == 422
