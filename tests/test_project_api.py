# File: tests/test_project_api.py

from io import BytesIO

import httpx
from fastapi.testclient import TestClient
from pypdf import PdfReader
from sqlalchemy import func, select

from firefly.api.deps import get_app_settings
from firefly.main import app
from firefly.models.building import Area, Building, Commodity, Room
from firefly.models.safety import SpecialRisk
from firefly.services import webhook_service

client = TestClient(app)

URL = "/api/v1/projects"


def draft(**overrides):
    body = {
        "name": "Acme cold store",
        "company_name": "Acme Foods",
        "client_name": "Mary Client",
        "construction_year": 1998,
        "facility_location": {"town": "Paarl", "province": "Western Cape"},
        "buildings": [
            {
                "name": "Warehouse",
                "classification": "J2",
                "total_building_area": 1200,
                "areas": [
                    {
                        "name": "Racking",
                        "rooms": [{"name": "Dispatch"}],
                        "commodities": [{"name": "Pallets", "category": "III"}],
                    },
                    {"name": "Offices"},
                ],
            },
            {"name": "Workshop"},
        ],
        "special_risks": [{"risk_type": "diesel_tank", "location": "North yard"}],
    }
    body.update(overrides)
    return body


def count(session_factory, model) -> int:
    with session_factory() as db:
        return db.scalar(select(func.count()).select_from(model))


def create(**overrides) -> dict:
    resp = client.post(URL + "/", json=draft(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_returns_aggregate_with_ids():
    project = create()

    assert project["status"] == "draft"
    assert project["version"] == 1
    assert project["facility_location"]["province"] == "Western Cape"
    assert [b["name"] for b in project["buildings"]] == ["Warehouse", "Workshop"]
    assert all(b["id"] for b in project["buildings"])
    assert project["buildings"][0]["areas"][0]["commodities"][0]["category"] == "III"


def test_repeated_saves_do_not_duplicate(session_factory):
    project = create()

    for _ in range(2):
        current = client.get(f"{URL}/{project['id']}").json()
        resp = client.put(f"{URL}/{project['id']}", json=current)
        assert resp.status_code == 200, resp.text

    assert count(session_factory, Building) == 2
    assert count(session_factory, Area) == 2
    assert count(session_factory, Room) == 1
    assert count(session_factory, Commodity) == 1
    assert count(session_factory, SpecialRisk) == 1


def test_save_keeps_ids_and_removes_missing_items(session_factory):
    project = create()
    warehouse = project["buildings"][0]
    warehouse["name"] = "Main warehouse"
    warehouse["areas"] = warehouse["areas"][:1]

    resp = client.put(
        f"{URL}/{project['id']}",
        json={**project, "buildings": [warehouse]},
    )
    assert resp.status_code == 200
    saved = resp.json()

    assert [b["id"] for b in saved["buildings"]] == [warehouse["id"]]
    assert saved["buildings"][0]["name"] == "Main warehouse"
    assert count(session_factory, Building) == 1
    assert count(session_factory, Area) == 1
    assert count(session_factory, Room) == 1


def test_omitted_collection_is_left_alone_and_empty_list_clears(session_factory):
    project = create()
    scalars = {k: project[k] for k in ("name", "company_name", "client_name")}

    resp = client.put(f"{URL}/{project['id']}", json=scalars)
    assert resp.status_code == 200
    assert len(resp.json()["buildings"]) == 2
    assert resp.json()["facility_location"]["town"] == "Paarl"

    resp = client.put(f"{URL}/{project['id']}", json={**scalars, "buildings": [], "facility_location": None})
    assert resp.status_code == 200
    assert resp.json()["buildings"] == []
    assert resp.json()["facility_location"] is None
    assert count(session_factory, Area) == 0


def test_scalars_are_overwritten_not_patched():
    project = create()
    resp = client.put(f"{URL}/{project['id']}", json={"name": "Renamed"})

    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["company_name"] is None


def test_stale_version_conflicts():
    project = create()

    resp = client.put(f"{URL}/{project['id']}", json={"name": "First", "version": 1})
    assert resp.status_code == 200
    assert resp.json()["version"] == 2

    resp = client.put(f"{URL}/{project['id']}", json={"name": "Second", "version": 1})
    assert resp.status_code == 409
    assert client.get(f"{URL}/{project['id']}").json()["name"] == "First"


def test_foreign_child_id_conflicts():
    first = create()
    second = create()
    stolen = first["buildings"][0]

    resp = client.put(f"{URL}/{second['id']}", json={"buildings": [stolen]})
    assert resp.status_code == 409


def test_validation_errors():
    assert client.post(URL + "/", json=draft(construction_year=1200)).status_code == 422
    bad_building = {"buildings": [{"name": "Shed", "classification": "Z9"}]}
    assert client.post(URL + "/", json=bad_building).status_code == 422


def test_delete_cascades(session_factory):
    project = create()

    resp = client.delete(f"{URL}/{project['id']}")
    assert resp.status_code == 204

    assert client.get(f"{URL}/{project['id']}").status_code == 404
    for model in (Building, Area, Room, Commodity, SpecialRisk):
        assert count(session_factory, model) == 0


def test_unknown_project():
    assert client.get(f"{URL}/nope").json() == {"detail": "Project not found"}
    assert client.put(f"{URL}/nope", json={}).status_code == 404
    assert client.delete(f"{URL}/nope").status_code == 404


def test_list_and_stats():
    client.post(URL + "/?owner_id=u1", json={"name": "A"})
    client.post(URL + "/?owner_id=u1", json={"name": "B", "status": "review"})
    client.post(URL + "/?owner_id=u1", json={"name": "C", "status": "rejected"})
    client.post(URL + "/?owner_id=u2", json={"name": "D", "status": "approved"})

    names = [p["name"] for p in client.get(URL + "/", params={"owner_id": "u1"}).json()]
    assert names == ["C", "B", "A"]

    review = client.get(URL + "/", params={"status": "review"}).json()
    assert [p["name"] for p in review] == ["B"]

    stats = client.get(URL + "/stats", params={"owner_id": "u1"}).json()
    assert stats == {
        "total": 3,
        "drafts": 1,
        "in_progress": 1,
        "approved": 0,
        "requires_attention": 1,
    }
    assert client.get(URL + "/stats").json()["total"] == 4


def test_placeholders_endpoint():
    project = create()
    resp = client.get(f"{URL}/{project['id']}/placeholders")

    assert resp.status_code == 200
    data = resp.json()
    values = {p["name"]: p["value"] for p in data["items"]}
    assert values["company_name"] == "Acme Foods"
    assert values["building_1_area"] == "1200"
    assert values["building_2_name"] == "Workshop"
    assert values["risk_1_type"] == "diesel_tank"
    assert data["total"] == len(data["items"])
    assert data["groups"][0]["category"] == "Project Info"

    assert client.get(f"{URL}/nope/placeholders").status_code == 404


def test_project_document_with_overrides_and_failing_webhook(monkeypatch, test_settings):
    calls = []

    def failing_post(url, json=None, timeout=None):
        calls.append((url, json))
        raise httpx.ConnectError("connection refused")

    monkeypatch.setattr(webhook_service.httpx, "post", failing_post)
    hooked = test_settings.model_copy(update={"webhook_url": "http://hooks.test/report"})
    app.dependency_overrides[get_app_settings] = lambda: hooked

    project = create()
    resp = client.post(
        f"{URL}/{project['id']}/document",
        json={"placeholders": {"client_name": "Edited Client"}},
    )

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    text = PdfReader(BytesIO(resp.content)).pages[0].extract_text()
    assert "Acme Foods" in text
    assert "Edited Client" in text
    assert "Mary Client" not in text

    assert len(calls) == 1
    url, payload = calls[0]
    assert url == "http://hooks.test/report"
    assert payload["projectData"]["id"] == project["id"]


def test_project_document_unknown_project():
    resp = client.post(f"{URL}/nope/document", json={})

    assert resp.status_code == 404
    assert resp.json() == {"message": "Project not found"}
