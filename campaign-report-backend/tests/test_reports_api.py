from fastapi.testclient import TestClient

from app.integrations import StoreAccessDeniedError
from app.main import app
from app.services.report_form import ReportForm


def _form_body(**overrides):
    body = {
        "brand_name": "Acme",
        "start_month": "January",
        "end_month": "March",
        "year": 2025,
        "platforms": [{"id": "row1", "name": "Meta", "impressions": 1000, "clicks": 10, "ctr": 1.0}],
        "channels": [{"id": "row2", "name": "Social", "active_months": [True] + [False] * 11}],
    }
    body.update(overrides)
    return body


def test_store_status(use_store, report_store):
    client = TestClient(app)
    use_store(report_store)
    assert client.get("/api/v1/reports/status").json()["configured"] is True

    use_store(None)
    body = client.get("/api/v1/reports/status").json()
    assert body["configured"] is False
    assert body["message"] == "Report store is not configured. Save & load is disabled."


def test_save_list_update_load(client):
    r = client.post("/api/v1/reports/", json=_form_body())
    assert r.status_code == 201
    saved = r.json()
    report_id = saved["id"]
    assert saved["report_name"].startswith("[Acme] - [January-Mar 2025] - [")
    assert saved["notification"]["type"] == "success"
    assert [rep["id"] for rep in saved["reports"]] == [report_id]

    r = client.get("/api/v1/reports/")
    assert r.status_code == 200
    listed = r.json()
    assert listed["configured"] is True
    assert listed["reports"] == [{"id": report_id, "name": saved["report_name"]}]
    assert listed["notification"]["message"] == "Successfully fetched 1 report(s)."

    r = client.put(f"/api/v1/reports/{report_id}", json=_form_body(brand_name="Acme Corp", end_month=""))
    assert r.status_code == 200
    assert r.json()["report_name"].startswith("[Acme Corp] - [January 2025] - [")

    r = client.get(f"/api/v1/reports/{report_id}")
    assert r.status_code == 200
    loaded = r.json()
    assert loaded["form"]["brand_name"] == "Acme Corp"
    assert loaded["form"]["platforms"][0]["name"] == "Meta"
    assert loaded["form"]["platforms"][0]["id"] != "row1"
    assert loaded["notification"]["message"].endswith("loaded successfully!")


def test_save_requires_brand_name(client, report_store):
    r = client.post("/api/v1/reports/", json=_form_body(brand_name=""))
    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["status"] == "validation_failed"
    assert body["notification"] == {"message": "Brand Name and Start Month are required.", "type": "error"}
    assert "request_id" in body
    assert report_store.list() == []


def test_unknown_report(client):
    r = client.get("/api/v1/reports/unknown")
    assert r.status_code == 404
    assert r.json()["notification"]["message"] == "Report not found."

    r = client.put("/api/v1/reports/unknown", json=_form_body())
    assert r.status_code == 404


def test_not_configured(unconfigured_client):
    r = unconfigured_client.get("/api/v1/reports/")
    assert r.status_code == 200
    assert r.json()["configured"] is False
    assert r.json()["reports"] == []

    r = unconfigured_client.post("/api/v1/reports/", json=_form_body())
    assert r.status_code == 503
    assert r.json()["status"] == "not_configured"
    assert r.json()["message"] == "Report store is not configured. Cannot save."


def test_unavailable_store(use_store, failing_store_factory):
    use_store(failing_store_factory())
    client = TestClient(app)
    r = client.get("/api/v1/reports/")
    assert r.status_code == 503
    assert r.json()["notification"]["message"] == "Connection Error: Check internet and report store setup."


def test_denied_store(use_store, failing_store_factory):
    use_store(failing_store_factory(StoreAccessDeniedError("rules")))
    client = TestClient(app)
    r = client.post("/api/v1/reports/", json=_form_body())
    assert r.status_code == 403
    assert r.json()["status"] == "denied"


def test_read_only_store_denies_update(use_store, report_store, read_only_store):
    report_id = report_store.create(ReportForm().payload())
    use_store(read_only_store)
    client = TestClient(app)
    r = client.put(f"/api/v1/reports/{report_id}", json=_form_body())
    assert r.status_code == 403


def test_load_malformed_document(client, stored_document, malformed_document):
    stored_document("bad", malformed_document)
    r = client.get("/api/v1/reports/bad")
    assert r.status_code == 502
    body = r.json()
    assert body["success"] is False
    assert body["status"] == "corrupt"
    assert body["notification"]["message"] == "Failed to load report. Stored data is invalid."
