"""
Lookup Router

Address to planning controls lookup (geocode, planning layers, normalized summary).
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from src.sitelot.api.dependencies import get_zoning_lookup_service
from src.sitelot.exceptions import GeocodeNotFoundError, UpstreamServiceError
from src.sitelot.models.zoning import LookupResult
from src.sitelot.services.zoning_lookup import ZoningLookupService

router = APIRouter(prefix="/api/lep", tags=["lookup"])


@router.get("/lookup", response_model=LookupResult)
def lookup_address(
    address: Optional[str] = Query(None, description="Free-text site address"),
    service: ZoningLookupService = Depends(get_zoning_lookup_service),
):
    """
    Look up zoning and planning controls for an address.

    Raises:
        HTTPException: 400 missing address, 404 no geocode match,
            502 geocoder or planning layer failure
    """
    if not address or not address.strip():
        raise HTTPException(status_code=400, detail="Missing address query param")

    try:
        return service.lookup(address)
    except GeocodeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamServiceError as e:
        raise HTTPException(status_code=502, detail=e.message)
