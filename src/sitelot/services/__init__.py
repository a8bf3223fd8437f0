"""
Services Module

Zoning lookup orchestration and lot upsert/link.
"""
from src.sitelot.services.zoning_lookup import ZoningLookupService
from src.sitelot.services.lookup_client import LookupEndpointClient
from src.sitelot.services.lot_sync import LotSyncService

__all__ = ["ZoningLookupService", "LookupEndpointClient", "LotSyncService"]
