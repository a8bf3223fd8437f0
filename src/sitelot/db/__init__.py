"""
Database Package

Database models, connection management, and data persistence layer.
"""
from src.sitelot.db.base import Base
from src.sitelot.db.session import (
    Database,
    normalize_database_url,
    engine_options,
    log_database_url,
)
from src.sitelot.db.models import Project, Lot
from src.sitelot.db.repository import (
    BaseRepository,
    ProjectRepository,
    LotRepository,
)

__all__ = [
    # Base
    "Base",
    # Session management
    "Database",
    "normalize_database_url",
    "engine_options",
    "log_database_url",
    # Models
    "Project",
    "Lot",
    # Repositories
    "BaseRepository",
    "ProjectRepository",
    "LotRepository",
]
