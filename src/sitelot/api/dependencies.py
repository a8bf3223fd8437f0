"""
FastAPI Dependencies

Provides dependency injection for database sessions, settings, and the
enrichment services. The Database and HTTP session live on app.state and
are created by the application lifespan.
"""
from typing import Generator

import requests
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from config.settings import Settings, settings as default_settings
from src.sitelot.db.session import Database
from src.sitelot.scrapers.geocoder import NominatimGeocoder
from src.sitelot.scrapers.planning_layers import PlanningLayerScraper
from src.sitelot.services.lookup_client import LookupEndpointClient
from src.sitelot.services.lot_sync import LotSyncService
from src.sitelot.services.zoning_lookup import ZoningLookupService


def get_settings(request: Request) -> Settings:
    """
    Settings dependency.

    Returns:
        The settings the app was built with
    """
    return getattr(request.app.state, "settings", None) or default_settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """
    Database session dependency.

    Handlers commit explicitly; the session is always closed.

    Yields:
        SQLAlchemy database session
    """
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_http_session(request: Request) -> requests.Session:
    return request.app.state.http_session


def get_zoning_lookup_service(
    http_session: requests.Session = Depends(get_http_session),
    app_settings: Settings = Depends(get_settings),
) -> ZoningLookupService:
    """In-process geocode + planning layer lookup."""
    geocoder = NominatimGeocoder(
        base_url=app_settings.nominatim_url,
        session=http_session,
        timeout=app_settings.http_timeout_seconds,
    )
    layer_scraper = PlanningLayerScraper(
        base_url=app_settings.epi_base_url,
        layer_ids={
            "zoning": app_settings.layer_zoning_id,
            "height": app_settings.layer_height_id,
            "fsr": app_settings.layer_fsr_id,
            "lot_size": app_settings.layer_lot_size_id,
        },
        session=http_session,
        timeout=app_settings.http_timeout_seconds,
    )
    return ZoningLookupService(geocoder=geocoder, layer_scraper=layer_scraper)


def get_lot_sync_service(
    lookup_service: ZoningLookupService = Depends(get_zoning_lookup_service),
    app_settings: Settings = Depends(get_settings),
) -> LotSyncService:
    """Lot sync that fetches zoning in-process (used on project creation)."""
    return LotSyncService(
        lookup_service.fetch_zoning,
        normalized_address_match=app_settings.lot_match_normalized_address,
    )


def get_remote_lot_sync_service(
    http_session: requests.Session = Depends(get_http_session),
    app_settings: Settings = Depends(get_settings),
) -> LotSyncService:
    """Lot sync that fetches zoning through the app's own lookup endpoint."""
    client = LookupEndpointClient(
        base_url=app_settings.app_base_url,
        session=http_session,
        timeout=app_settings.http_timeout_seconds,
    )
    return LotSyncService(
        client.fetch_zoning,
        normalized_address_match=app_settings.lot_match_normalized_address,
    )
