import importlib.util
import json
import sys
from pathlib import Path

import pytest
from conftest import DATA_DIR
from fastapi.testclient import TestClient

API_MAIN = Path(__file__).resolve().parents[1] / "services" / "api" / "main.py"


@pytest.fixture(scope="module")
def api(request):
    monkeypatch = pytest.MonkeyPatch()
    monkeypatch.setenv("WIREFRAME_DATA_DIR", str(DATA_DIR))
    monkeypatch.setenv("ENVIRONMENT", "dev")
    spec = importlib.util.spec_from_file_location("wireframe_api_main", API_MAIN)
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    request.addfinalizer(monkeypatch.undo)
    return module


@pytest.fixture
def client(api):
    return TestClient(api.app)


def _inline_document() -> dict:
    return json.loads((DATA_DIR / "login-form.json").read_text(encoding="utf-8"))


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_render_inline_wireframe_returns_svg(client):
    response = client.post("/v1/wireframes:render", json={"wireframe": _inline_document(), "options": {"padding": 10}})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.headers["x-render-diagnostics"] == "1"
    assert 'viewBox="0 0 420 320"' in response.text


def test_render_stored_wireframe(client):
    response = client.post("/v1/wireframes:render", json={"source": "repository", "record_id": "login-form"})

    assert response.status_code == 200
    assert 'data-group-id="credentials"' in response.text


def test_render_missing_record_is_404(client):
    response = client.post("/v1/wireframes:render", json={"record_id": "does-not-exist"})
    assert response.status_code == 404


def test_render_without_document_is_422(client):
    assert client.post("/v1/wireframes:render", json={}).status_code == 422


def test_render_job_completes(client):
    queued = client.post("/v1/renders", json={"wireframe": _inline_document()})
    assert queued.status_code == 200
    job_id = queued.json()["job_id"]

    job = client.get(f"/v1/jobs/{job_id}").json()
    assert job["status"] == "COMPLETED"
    assert job["outputs"]["svg"].startswith("<svg")
    assert job["outputs"]["diagnostics"] == ["'Button' control type not implemented"]


def test_render_job_records_failures(client):
    queued = client.post("/v1/renders", json={"record_id": "does-not-exist"})
    job = client.get(f"/v1/jobs/{queued.json()['job_id']}").json()

    assert job["status"] == "FAILED"
    assert "does-not-exist" in job["errors"][0]


def test_unknown_job_is_404(client):
    assert client.get("/v1/jobs/render_missing").status_code == 404


def test_requests_without_font_share_the_default_converter(api):
    assert api._converter_for(api.ConvertOptions()) is api.converter


def test_caller_font_is_registered_on_a_private_measurer(api, client, monkeypatch):
    measurers = []

    async def record_load(family, url, measurer):
        measurers.append(measurer)

    monkeypatch.setattr(api.font_loader, "load", record_load)
    response = client.post(
        "/v1/wireframes:render",
        json={
            "wireframe": _inline_document(),
            "options": {"fontFamily": "sans-serif", "fontURL": "https://fonts.example.com/hand.ttf"},
        },
    )

    assert response.status_code == 200
    assert len(measurers) == 1
    assert measurers[0] is not api.measurer


@pytest.mark.parametrize("font_url", ["/etc/passwd", "/etc/nonexistent", "file:///etc/hosts", "fonts/hand.ttf"])
def test_local_font_locations_are_rejected(client, font_url):
    response = client.post(
        "/v1/wireframes:render",
        json={"wireframe": _inline_document(), "options": {"fontURL": font_url}},
    )

    assert response.status_code == 422
    messages = [error["msg"] for error in response.json()["detail"]]
    assert messages == ["Value error, fontURL must be an http or https URL"]


def test_queued_render_rejects_local_font_locations(client):
    response = client.post("/v1/renders", json={"record_id": "login-form", "options": {"fontURL": "/etc/passwd"}})
    assert response.status_code == 422
