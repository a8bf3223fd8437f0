"""
Repository Pattern for Data Access

Provides CRUD operations and domain-specific queries for projects and lots.
"""
from typing import List, Optional, Any, Type, TypeVar

from sqlalchemy import select, func, literal
from sqlalchemy.orm import Session, joinedload

from src.sitelot.db.models import Project, Lot
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class BaseRepository:
    """
    Base repository with common CRUD operations.

    Generic repository that can be extended for specific models.
    """

    def __init__(self, model: Type[T]):
        """
        Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def get_by_id(self, session: Session, id_value: Any) -> Optional[T]:
        """
        Get single record by primary key.

        Args:
            session: Database session
            id_value: Primary key value

        Returns:
            Model instance or None
        """
        result = session.get(self.model, id_value)
        logger.debug(
            "repository_get_by_id",
            model=self.model.__name__,
            id=id_value,
            found=result is not None
        )
        return result

    def create(self, session: Session, **kwargs) -> T:
        """
        Create new record.

        Args:
            session: Database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        session.flush()
        logger.info("repository_created", model=self.model.__name__, id=getattr(instance, 'id', None))
        return instance

    def update(self, session: Session, id_value: Any, **kwargs) -> Optional[T]:
        """
        Update existing record.

        Args:
            session: Database session
            id_value: Primary key value
            **kwargs: Fields to update

        Returns:
            Updated model instance or None
        """
        instance = self.get_by_id(session, id_value)
        if not instance:
            logger.warning("repository_update_not_found", model=self.model.__name__, id=id_value)
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        session.flush()
        logger.info("repository_updated", model=self.model.__name__, id=id_value)
        return instance

    def count(self, session: Session) -> int:
        """
        Count total records.

        Args:
            session: Database session

        Returns:
            Total count
        """
        count = session.scalar(select(func.count()).select_from(self.model))
        logger.debug("repository_count", model=self.model.__name__, count=count)
        return count


class ProjectRepository(BaseRepository):
    """Repository for Project model with specialized queries."""

    def __init__(self):
        super().__init__(Project)

    def list_recent(self, session: Session, limit: int = 50, include_lot: bool = True) -> List[Project]:
        """
        Get the most recently created projects.

        Args:
            session: Database session
            limit: Maximum number of projects
            include_lot: Eager-load the linked lot

        Returns:
            Projects ordered by created_at descending
        """
        query = select(Project).order_by(Project.created_at.desc()).limit(limit)
        if include_lot:
            query = query.options(joinedload(Project.lot))

        result = session.execute(query).scalars().all()
        logger.debug("projects_listed", count=len(result), limit=limit, include_lot=include_lot)
        return list(result)

    def link_lot(self, session: Session, project_id: str, lot_id: str) -> Optional[Project]:
        """
        Point a project at a lot.

        Args:
            session: Database session
            project_id: Project primary key
            lot_id: Lot primary key

        Returns:
            Updated project or None if the project does not exist
        """
        return self.update(session, project_id, lot_id=lot_id)


class LotRepository(BaseRepository):
    """Repository for Lot model with address matching."""

    def __init__(self):
        super().__init__(Lot)

    def find_by_address(self, session: Session, address: str, normalized: bool = False) -> Optional[Lot]:
        """
        Find the first lot recorded for an address.

        Args:
            session: Database session
            address: Address to match
            normalized: Compare with the database's lower(trim(...)) applied to
                both sides instead of by exact string equality

        Returns:
            Oldest matching lot or None
        """
        if normalized:
            condition = func.lower(func.trim(Lot.address)) == func.lower(func.trim(literal(address)))
        else:
            condition = Lot.address == address

        query = select(Lot).where(condition).order_by(Lot.created_at).limit(1)
        lot = session.execute(query).scalars().first()
        logger.debug("lot_find_by_address", address=address, normalized=normalized, found=lot is not None)
        return lot

    def list_by_address(self, session: Session, address: str) -> List[Lot]:
        """Get every lot recorded under an exact address."""
        query = select(Lot).where(Lot.address == address).order_by(Lot.created_at)
        return list(session.execute(query).scalars().all())
