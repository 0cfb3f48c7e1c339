import pytest

from catalog.models import Category, PartSummary
from tests.fakes import FakeCatalogClient, make_part


@pytest.fixture
def fake_client():
    client = FakeCatalogClient()
    client.categories = [
        Category(id="RES", name="Resistors"),
        Category(id="CAP", name="Capacitors"),
        Category(id="ANA", name="Analog ICs"),
    ]
    client.parts_by_category = {
        "RES": [PartSummary(id="RES-1234-A", name="10k 0603")],
        "CAP": [PartSummary(id="CAP-001-0001", name="100nF")],
    }
    client.parts = {
        "RES-1234-A": make_part("RES-1234-A", {
            "Description": "10k 0603",
            "Value": "10k",
            "Manufacturer": "Yageo",
            "MPN": "RC0603FR-0710KL",
        }),
        "ANA-001-0001": make_part("ANA-001-0001", {
            "Description": "op-amp",
            "Manufacturer": "TI",
            "MPN": "LM358",
            "Manufacturer2": "ON",
            "MPN2": "NE555",
        }),
    }
    client.revisions = {"RES-1234-A": "RES-1234-B"}
    return client


@pytest.fixture
def app(tmp_path):
    """Reference catalog service on a throw-away SQLite file."""
    from main import create_app
    app = create_app(db_url=f"sqlite:///{tmp_path / 'catalog.sqlite'}", token="")
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture
def seeded(app):
    """Database with a few parts across two categories."""
    from db import get_session
    from services.parts_service import PartsService

    session = get_session()
    try:
        PartsService.create(session, "CAP-001-0001", values={
            "Description": "100nF 0402", "Value": "100nF",
            "Manufacturer": "Murata", "MPN": "GRM155R71C104KA88D",
            "Footprint": "C_0402",
        })
        PartsService.create(session, "CAP-002-0001", values={
            "Description": "10uF 0805", "Manufacturer": "Samsung",
            "MPN": "CL21A106KOQNNNE",
        })
        PartsService.create(session, "RES-001-0001", values={
            "Description": "10k 0603", "Manufacturer": "Yageo",
            "MPN": "RC0603FR-0710KL", "Manufacturer2": "Vishay",
            "MPN2": "CRCW060310K0FKEA",
        })
        session.commit()
    finally:
        session.close()
    return app
