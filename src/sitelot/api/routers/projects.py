"""
Projects Router

Endpoints for creating and listing projects. Creating a project enriches it
with a lot as a side effect.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.sitelot.api.dependencies import get_db, get_lot_sync_service, get_settings
from src.sitelot.api.schemas import LotRead, ProjectCreate, ProjectDetail, ProjectRead
from src.sitelot.db.models import Project
from src.sitelot.db.repository import ProjectRepository
from src.sitelot.exceptions import GeocodeNotFoundError, UpstreamServiceError
from src.sitelot.services.lot_sync import LotSyncService
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])


def log_enrichment_failure(project_id: str, error: Exception) -> None:
    logger.warning(
        "project_lot_enrichment_failed",
        project_id=project_id,
        error=str(error),
        error_type=type(error).__name__
    )


def to_detail(project: Project, include_lot: bool = True) -> ProjectDetail:
    """Build the response schema, touching the lot relationship only when asked."""
    base = ProjectRead.model_validate(project)
    lot = LotRead.model_validate(project.lot) if include_lot and project.lot else None
    return ProjectDetail(**base.model_dump(), lot=lot)


@router.get("", response_model=List[ProjectDetail])
def list_projects(
    include_lot: bool = Query(True, alias="includeLot", description="Nest the linked lot"),
    db: Session = Depends(get_db),
    app_settings=Depends(get_settings),
):
    """
    List the most recent projects, newest first.

    Data-store failures are logged and answered with an empty list.
    """
    try:
        projects = ProjectRepository().list_recent(
            db,
            limit=app_settings.project_list_limit,
            include_lot=include_lot,
        )
        return [to_detail(project, include_lot) for project in projects]
    except SQLAlchemyError as e:
        logger.error(
            "project_list_failed",
            error=str(e),
            error_type=type(e).__name__
        )
        return []


@router.post("", response_model=ProjectDetail, status_code=201)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    lot_sync: LotSyncService = Depends(get_lot_sync_service),
):
    """
    Create a project and link it to a lot for its site address.

    The project row is committed before enrichment runs, so it survives an
    enrichment failure without a lot.

    Raises:
        HTTPException: 400 if siteAddress or projectType is missing,
            404 no geocode match, 502 geocoder or planning layer failure
    """
    if not payload.site_address:
        raise HTTPException(status_code=400, detail="siteAddress is required")
    if not payload.project_type:
        raise HTTPException(status_code=400, detail="projectType is required")

    project = ProjectRepository().create(db, **payload.model_dump())
    db.commit()
    project_id = project.id
    logger.info("project_created", project_id=project_id, site_address=project.site_address)

    try:
        lot_sync.sync_lot_for_project(db, project_id, project.site_address)
        db.commit()
    except GeocodeNotFoundError as e:
        db.rollback()
        log_enrichment_failure(project_id, e)
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamServiceError as e:
        db.rollback()
        log_enrichment_failure(project_id, e)
        raise HTTPException(status_code=502, detail=e.message)

    db.refresh(project)
    return to_detail(project)
