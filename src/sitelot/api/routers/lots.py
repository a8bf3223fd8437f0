"""
Lots Router

Endpoint for syncing a project's lot from the lookup endpoint.
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from src.sitelot.api.dependencies import get_db, get_remote_lot_sync_service
from src.sitelot.api.schemas import LotRead, LotSyncRequest, LotSyncResponse
from src.sitelot.exceptions import ProjectNotFoundError, UpstreamServiceError
from src.sitelot.services.lot_sync import LotSyncService

router = APIRouter(prefix="/api/lots", tags=["lots"])


@router.post("/sync", response_model=LotSyncResponse)
def sync_lot(
    payload: LotSyncRequest,
    db: Session = Depends(get_db),
    lot_sync: LotSyncService = Depends(get_remote_lot_sync_service),
):
    """
    Look up an address, upsert its lot, and link it to the project.

    Raises:
        HTTPException: 400 missing fields, 404 unknown project, 502 lookup failure
    """
    if not payload.project_id or not payload.address:
        raise HTTPException(status_code=400, detail="projectId and address are required")

    try:
        lot = lot_sync.sync_lot_for_project(db, payload.project_id, payload.address)
    except UpstreamServiceError as e:
        db.rollback()
        raise HTTPException(status_code=502, detail=e.message)
    except ProjectNotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    return LotSyncResponse(lot=LotRead.model_validate(lot), project_id=payload.project_id)
