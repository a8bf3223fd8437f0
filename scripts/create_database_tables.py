"""
Create Database Tables Using SQLAlchemy

This script creates all database tables directly using SQLAlchemy's create_all()
method. This bypasses Alembic migrations and is useful for local development
and testing.
"""
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.settings import settings
from src.sitelot.db.session import Database
from src.sitelot.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main():
    """Create all database tables."""
    setup_logging()
    database = Database(settings.direct_database_url or settings.database_url, echo=settings.database_echo)
    try:
        database.create_all()
        if not database.health_check():
            return 1
    finally:
        database.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
