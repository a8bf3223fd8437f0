"""
Tests for the projects router
"""
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from src.sitelot.api.dependencies import get_db, get_lot_sync_service
from src.sitelot.db.models import Lot, Project
from src.sitelot.db.repository import LotRepository, ProjectRepository
from src.sitelot.exceptions import GeocodeNotFoundError, UpstreamServiceError
from src.sitelot.services.lot_sync import LotSyncService


class TestCreateProject:
    """Tests for POST /api/projects"""

    def test_create_minimal_project_links_lot(self, client):
        response = client.post(
            "/api/projects",
            json={"siteAddress": "1 Test St", "projectType": "New Dwelling"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["siteAddress"] == "1 Test St"
        assert body["projectType"] == "New Dwelling"
        assert body["lotId"] is not None
        assert body["lot"]["id"] == body["lotId"]
        assert body["lot"]["zoneCode"] == "R2"
        assert body["lot"]["fsr"] == 0.5
        assert body["lot"]["minLotSizeSqm"] == 450

    def test_empty_site_address_rejected(self, client, database):
        response = client.post(
            "/api/projects",
            json={"siteAddress": "   ", "projectType": "New Dwelling"},
        )

        assert response.status_code == 400
        assert "siteAddress" in response.json()["error"]
        with database.session() as session:
            assert LotRepository().count(session) == 0
            assert ProjectRepository().count(session) == 0

    def test_missing_project_type_rejected(self, client):
        response = client.post("/api/projects", json={"siteAddress": "1 Test St"})

        assert response.status_code == 400
        assert "projectType" in response.json()["error"]

    def test_non_object_body_rejected(self, client):
        response = client.post("/api/projects", json=["1 Test St"])

        assert response.status_code == 400
        assert "error" in response.json()

    def test_optional_fields_are_coerced(self, client):
        response = client.post(
            "/api/projects",
            json={
                "siteAddress": " 1 Test St ",
                "projectType": "Duplex",
                "sizeStoreys": "2",
                "budgetBand": "",
                "targetTimeline": "2027-03-01T00:00:00Z",
            },
        )

        body = response.json()
        assert response.status_code == 201
        assert body["siteAddress"] == "1 Test St"
        assert body["sizeStoreys"] == 2
        assert body["budgetBand"] is None
        assert body["targetTimeline"] == "2027-03-01"

    def test_invalid_optional_fields_become_null(self, client):
        response = client.post(
            "/api/projects",
            json={
                "siteAddress": "1 Test St",
                "projectType": "Duplex",
                "sizeStoreys": "two",
                "targetTimeline": "next spring",
            },
        )

        body = response.json()
        assert response.status_code == 201
        assert body["sizeStoreys"] is None
        assert body["targetTimeline"] is None

    def test_legacy_form_fields(self, client):
        response = client.post(
            "/api/projects",
            json={"name": "5 Legacy Rd", "description": "Renovation"},
        )

        body = response.json()
        assert response.status_code == 201
        assert body["siteAddress"] == "5 Legacy Rd"
        assert body["projectType"] == "Renovation"

    def test_no_geocode_match_returns_404_and_keeps_project(self, app, client, database):
        def not_found(address):
            raise GeocodeNotFoundError(address)

        app.dependency_overrides[get_lot_sync_service] = lambda: LotSyncService(
            not_found, normalized_address_match=False
        )

        response = client.post(
            "/api/projects",
            json={"siteAddress": "Nowhere", "projectType": "New Dwelling"},
        )

        assert response.status_code == 404
        assert response.json() == {"error": "No geocode result for that address"}
        with database.session() as session:
            projects = ProjectRepository().list_recent(session)
            assert len(projects) == 1
            assert projects[0].site_address == "Nowhere"
            assert projects[0].lot_id is None
            assert LotRepository().count(session) == 0

    def test_upstream_failure_returns_502_and_keeps_project(self, app, client, database):
        def geocoder_down(address):
            raise UpstreamServiceError("geocoder", "Geocode failed (503)", status_code=503)

        app.dependency_overrides[get_lot_sync_service] = lambda: LotSyncService(
            geocoder_down, normalized_address_match=False
        )

        response = client.post(
            "/api/projects",
            json={"siteAddress": "1 Test St", "projectType": "New Dwelling"},
        )

        assert response.status_code == 502
        assert response.json() == {"error": "Geocode failed (503)"}
        with database.session() as session:
            projects = ProjectRepository().list_recent(session)
            assert len(projects) == 1
            assert projects[0].lot_id is None
            assert LotRepository().count(session) == 0

    def test_same_address_reuses_lot(self, client, database):
        first = client.post("/api/projects", json={"siteAddress": "1 Test St", "projectType": "A"}).json()
        second = client.post("/api/projects", json={"siteAddress": "1 Test St", "projectType": "B"}).json()

        assert first["lotId"] == second["lotId"]
        with database.session() as session:
            assert LotRepository().count(session) == 1


class TestListProjects:
    """Tests for GET /api/projects"""

    def test_empty_list(self, client):
        response = client.get("/api/projects")

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first_with_lot(self, client, database):
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        with database.session() as session:
            lot = Lot(address="2 Second St", zone_code="R3")
            session.add(lot)
            session.flush()
            session.add(Project(site_address="1 First St", project_type="A", created_at=base))
            session.add(Project(
                site_address="2 Second St",
                project_type="B",
                created_at=base + timedelta(days=1),
                lot_id=lot.id,
            ))

        body = client.get("/api/projects").json()

        assert [p["siteAddress"] for p in body] == ["2 Second St", "1 First St"]
        assert body[0]["lot"]["zoneCode"] == "R3"
        assert body[1]["lot"] is None

    def test_without_lot(self, client, database):
        with database.session() as session:
            lot = Lot(address="1 Test St")
            session.add(lot)
            session.flush()
            session.add(Project(site_address="1 Test St", project_type="A", lot_id=lot.id))

        body = client.get("/api/projects", params={"includeLot": "false"}).json()

        assert body[0]["lotId"] is not None
        assert body[0]["lot"] is None

    def test_limited_to_fifty(self, client, database):
        with database.session() as session:
            for i in range(55):
                session.add(Project(site_address=f"{i} Test St", project_type="A"))

        body = client.get("/api/projects").json()

        assert len(body) == 50

    def test_unreachable_store_returns_empty_list(self, app, client):
        """Data-store failures degrade to an empty 200 response"""
        def broken_db():
            session = MagicMock()
            session.execute.side_effect = OperationalError(
                "SELECT projects", {}, Exception("connection refused")
            )
            yield session

        app.dependency_overrides[get_db] = broken_db

        response = client.get("/api/projects")

        assert response.status_code == 200
        assert response.json() == []
