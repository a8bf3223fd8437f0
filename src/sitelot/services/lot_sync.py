"""
Lot Sync Service

Finds or creates the Lot for an address and links it to a Project.

The steps are not wrapped in one transaction: each is flushed on the
caller's session and the caller decides when to commit. There is no
uniqueness constraint on Lot.address, so concurrent syncs for a new
address can each create a row.
"""
from typing import Callable, Optional

from sqlalchemy.orm import Session

from config.settings import settings
from src.sitelot.db.models import Lot
from src.sitelot.db.repository import LotRepository, ProjectRepository
from src.sitelot.exceptions import ProjectNotFoundError
from src.sitelot.models.zoning import ZoningPayload
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)

ZoningFetcher = Callable[[str], ZoningPayload]


class LotSyncService:
    """
    Upserts a Lot by address and links it to a Project.

    Args:
        zoning_fetcher: Callable returning lot field values for an address
        normalized_address_match: Match existing lots case-insensitively,
            ignoring surrounding whitespace (defaults to settings)
    """

    def __init__(
        self,
        zoning_fetcher: ZoningFetcher,
        normalized_address_match: Optional[bool] = None,
    ):
        self.zoning_fetcher = zoning_fetcher
        self.normalized_address_match = (
            settings.lot_match_normalized_address
            if normalized_address_match is None
            else normalized_address_match
        )
        self.lot_repository = LotRepository()
        self.project_repository = ProjectRepository()

    def sync_lot_for_project(self, session: Session, project_id: str, address: str) -> Lot:
        """
        Refresh the lot for an address and point the project at it.

        An existing lot is overwritten with the fetched values, not merged.

        Args:
            session: Database session (not committed here)
            project_id: Project to link
            address: Address to look up and match lots by

        Returns:
            The created or updated Lot

        Raises:
            ProjectNotFoundError: project_id does not exist
        """
        zoning = self.zoning_fetcher(address)
        fields = zoning.model_dump()

        existing = self.lot_repository.find_by_address(
            session, address, normalized=self.normalized_address_match
        )
        if existing:
            lot = self.lot_repository.update(session, existing.id, address=address, **fields)
            logger.info("lot_updated", lot_id=lot.id, address=address)
        else:
            lot = self.lot_repository.create(session, address=address, **fields)
            logger.info("lot_created", lot_id=lot.id, address=address)

        project = self.project_repository.link_lot(session, project_id, lot.id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        logger.info("project_lot_linked", project_id=project_id, lot_id=lot.id)
        return lot
