import pytest


def test_health_ok(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.data == b"OK"


def test_root_links(client):
    data = client.get("/v1/").get_json()
    assert data["categories"].endswith("/v1/categories.json")
    assert data["parts"].endswith("/v1/parts")


def test_categories_derived_from_ipns(seeded, client):
    data = client.get("/v1/categories.json").get_json()
    assert data == [
        {"id": "CAP", "name": "Capacitors", "description": "Capacitor components"},
        {"id": "RES", "name": "Resistors", "description": "Resistor components"},
    ]


def test_parts_by_category(seeded, client):
    data = client.get("/v1/parts/category/CAP.json").get_json()
    assert [p["id"] for p in data] == ["CAP-001-0001", "CAP-002-0001"]
    assert data[0]["name"] == "100nF 0402"
    assert client.get("/v1/parts/category/XYZ.json").get_json() == []


def test_part_detail(seeded, client):
    data = client.get("/v1/parts/RES-001-0001.json").get_json()
    assert data["id"] == "RES-001-0001"
    assert data["revision"] == "0001"
    assert data["symbolIdStr"] == "Device:R"
    assert data["exclude_from_bom"] == "false"
    assert data["fields"]["MPN2"] == {"value": "CRCW060310K0FKEA"}


def test_part_detail_not_found(seeded, client):
    response = client.get("/v1/parts/RES-999-0001.json")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_update_rewrites_sources(seeded, client):
    response = client.put("/v1/parts/RES-001-0001.json", json={
        "description": "10k 1% 0603",
        "sources": [{"manufacturer": "Vishay", "mpn": "CRCW060310K0FKEA"}],
    })
    assert response.status_code == 200
    fields = response.get_json()["fields"]
    assert fields["Description"]["value"] == "10k 1% 0603"
    assert fields["Manufacturer"]["value"] == "Vishay"
    assert "Manufacturer2" not in fields
    assert "MPN2" not in fields

    again = client.get("/v1/parts/RES-001-0001.json").get_json()
    assert again["fields"] == fields


def test_update_clearing_sources_removes_keys(seeded, client):
    response = client.put("/v1/parts/CAP-001-0001.json", json={
        "description": "100nF 0402",
        "sources": [{"manufacturer": "", "mpn": ""}],
    })
    fields = response.get_json()["fields"]
    assert "Manufacturer" not in fields
    assert "MPN" not in fields
    assert fields["Footprint"]["value"] == "C_0402"
    assert fields["Value"]["value"] == "100nF"


def test_update_keeps_interior_blank_source(seeded, client):
    response = client.put("/v1/parts/CAP-002-0001.json", json={
        "description": "10uF 0805",
        "sources": [
            {"manufacturer": "", "mpn": ""},
            {"manufacturer": "Murata", "mpn": "GRM21BR61A106KE19L"},
        ],
    })
    fields = response.get_json()["fields"]
    assert fields["Manufacturer"]["value"] == ""
    assert fields["Manufacturer2"]["value"] == "Murata"


def test_update_without_description_keeps_it(seeded, client):
    response = client.put("/v1/parts/CAP-001-0001.json", json={
        "sources": [{"manufacturer": "TDK", "mpn": "C1005X7R1C104K"}],
    })
    fields = response.get_json()["fields"]
    assert fields["Description"]["value"] == "100nF 0402"
    assert fields["MPN"]["value"] == "C1005X7R1C104K"


def test_update_rejects_bad_body(seeded, client):
    assert client.put("/v1/parts/CAP-001-0001.json", data="nope").status_code == 400
    response = client.put("/v1/parts/CAP-001-0001.json", json={"sources": "TI"})
    assert response.status_code == 400
    assert client.put("/v1/parts/CAP-999-0001.json", json={}).status_code == 404


def test_create_part(seeded, client):
    response = client.post("/v1/parts.json", json={
        "id": "res-002-0001", "name": "1k 0402", "category": "RES"})
    assert response.status_code == 201
    assert response.get_json() == {
        "id": "RES-002-0001", "name": "1k 0402", "description": "1k 0402"}
    ids = [p["id"] for p in client.get("/v1/parts/category/RES.json").get_json()]
    assert ids == ["RES-001-0001", "RES-002-0001"]


@pytest.mark.parametrize("body, status", [
    ({"id": "RES-001-0001", "category": "RES"}, 409),
    ({"id": "RES-2-1", "category": "RES"}, 400),
    ({"id": "CAP-003-0001", "category": "RES"}, 400),
])
def test_create_part_rejections(seeded, client, body, status):
    assert client.post("/v1/parts.json", json=body).status_code == status


def test_start_revision_copies_fields(seeded, client):
    response = client.post("/v1/parts/RES-001-0001/revision")
    assert response.status_code == 200
    data = response.get_json()
    assert data["id"] == "RES-001-0002"
    assert data["revision"] == "0002"
    original = client.get("/v1/parts/RES-001-0001.json").get_json()
    assert data["fields"] == original["fields"]


def test_revision_skips_existing_numbers(seeded, client):
    client.post("/v1/parts/CAP-001-0001/revision")
    data = client.post("/v1/parts/CAP-001-0001/revision").get_json()
    assert data["id"] == "CAP-001-0003"


def test_revision_of_missing_part(seeded, client):
    assert client.post("/v1/parts/CAP-404-0001/revision").status_code == 404


def test_token_required_when_configured(tmp_path):
    from main import create_app
    app = create_app(db_url=f"sqlite:///{tmp_path / 'auth.sqlite'}", token="s3cret")
    c = app.test_client()
    assert c.get("/v1/categories.json").status_code == 401
    ok = c.get("/v1/categories.json", headers={"Authorization": "Token s3cret"})
    assert ok.status_code == 200
    assert c.get("/health").status_code == 200


def _add_part(ipn, values):
    from db import get_session
    from services.parts_service import PartsService

    session = get_session()
    try:
        PartsService.create(session, ipn, values=values)
        session.commit()
    finally:
        session.close()


def test_update_keeps_source_keys_past_a_gap(seeded, client):
    _add_part("CAP-009-0001", {
        "Description": "1uF 0603", "Manufacturer": "Murata", "MPN": "GRM188R61C105KA93D",
        "Manufacturer3": "Yageo", "MPN3": "CC0603KRX5R7BB105",
    })
    response = client.put("/v1/parts/CAP-009-0001.json", json={
        "description": "1uF 0603",
        "sources": [{"manufacturer": "Murata", "mpn": "GRM188R61C105KA93D"}],
    })
    assert response.status_code == 200
    fields = response.get_json()["fields"]
    assert fields["Manufacturer3"]["value"] == "Yageo"
    assert fields["MPN3"]["value"] == "CC0603KRX5R7BB105"
    assert "Manufacturer2" not in fields


def test_revision_overflow_is_a_conflict(seeded, client):
    _add_part("CAP-010-9999", {"Description": "last revision"})
    response = client.post("/v1/parts/CAP-010-9999/revision")
    assert response.status_code == 409
    assert "overflow" in response.get_json()["error"]
    ids = [p["id"] for p in client.get("/v1/parts/category/CAP.json").get_json()]
    assert "CAP-010-9999" in ids
    assert len([i for i in ids if i.startswith("CAP-010")]) == 1
