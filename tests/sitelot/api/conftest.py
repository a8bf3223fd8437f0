"""
Shared fixtures for API tests

The app runs against an in-memory SQLite Database and a stub zoning
fetcher, so no outbound HTTP calls are made.
"""
import pytest
from fastapi.testclient import TestClient

from src.sitelot.api.dependencies import get_lot_sync_service, get_remote_lot_sync_service
from src.sitelot.api.main import create_app
from src.sitelot.db.session import Database
from src.sitelot.models.zoning import ZoningPayload
from src.sitelot.services.lot_sync import LotSyncService

STUB_ZONING = ZoningPayload(
    council="Example Shire",
    zone_code="R2",
    lat=-33.8688,
    lng=151.2093,
    max_height_m=8.5,
    fsr=0.5,
    min_lot_size_sqm=450,
)


def stub_zoning_fetcher(address: str) -> ZoningPayload:
    return STUB_ZONING


@pytest.fixture
def database():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def app(database):
    app = create_app(database=database)
    stub_sync = lambda: LotSyncService(stub_zoning_fetcher, normalized_address_match=False)
    app.dependency_overrides[get_lot_sync_service] = stub_sync
    app.dependency_overrides[get_remote_lot_sync_service] = stub_sync
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
