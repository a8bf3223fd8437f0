"""
Database Session Management

Provides an explicitly constructed Database (engine plus session factory)
whose lifecycle is owned by the application: create at startup, dispose at
shutdown.
"""
from contextlib import contextmanager
from typing import Generator, Optional, Tuple

from sqlalchemy import create_engine, event, exc, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)

# Query parameters understood by connection-pooler aware clients but rejected by libpq
POOLER_QUERY_PARAMS = ("pgbouncer", "connection_limit", "pool_timeout", "prepared_statements")


def normalize_database_url(raw_url: str) -> Tuple[URL, bool]:
    """
    Parse a database URL and strip pooler-only query parameters.

    Args:
        raw_url: Connection string as found in the environment

    Returns:
        Tuple of (SQLAlchemy URL, whether the URL asked for pooler mode)
    """
    if raw_url.startswith("postgres://"):
        raw_url = "postgresql://" + raw_url[len("postgres://"):]

    url = make_url(raw_url)
    pooler = str(url.query.get("pgbouncer", "")).lower() == "true"
    stripped = [key for key in POOLER_QUERY_PARAMS if key in url.query]
    if stripped:
        url = url.difference_update_query(stripped)
    return url, pooler


def engine_options(url: URL, pooler: bool = False, echo: bool = False) -> dict:
    """
    Build create_engine keyword arguments for a URL.

    Pooler mode keeps a single logical connection and disables prepared
    statements, which transaction-mode poolers cannot route.
    """
    options: dict = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        options["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            options["poolclass"] = StaticPool
        return options

    options["pool_pre_ping"] = True
    if pooler:
        options["pool_size"] = 1
        options["max_overflow"] = 0
        if url.get_driver_name() == "psycopg":
            options["connect_args"] = {"prepare_threshold": None}
    return options


def log_database_url(raw_url: Optional[str]) -> None:
    """
    Log which database the process talks to, without the password.

    Called once from the application startup hook.
    """
    try:
        if not raw_url:
            raise ValueError("empty database url")
        url = make_url(raw_url.replace("postgres://", "postgresql://", 1))
        logger.info(
            "database_url",
            user=url.username,
            host=url.host,
            database=url.database,
            pooler=str(url.query.get("pgbouncer", "")).lower() == "true",
            prepared_statements=url.query.get("prepared_statements"),
        )
    except (exc.ArgumentError, ValueError) as e:
        logger.warning("database_url_unparsable", error=str(e))


class Database:
    """
    Engine and session factory for one database.

    Usage:
        database = Database.from_settings(settings)
        with database.session() as session:
            session.execute(...)
        database.dispose()
    """

    def __init__(self, url: str, pooler: bool = False, echo: bool = False):
        self.url, url_pooler = normalize_database_url(url)
        self.pooler = pooler or url_pooler
        self.engine = create_engine(self.url, **engine_options(self.url, self.pooler, echo))
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False
        )
        event.listen(self.engine, "connect", self._on_connect)
        logger.info(
            "database_initialized",
            backend=self.url.get_backend_name(),
            host=self.url.host,
            pooler=self.pooler
        )

    @classmethod
    def from_settings(cls, settings) -> "Database":
        return cls(
            settings.database_url,
            pooler=settings.database_pooler,
            echo=settings.database_echo,
        )

    @staticmethod
    def _on_connect(dbapi_conn, connection_record):
        logger.debug("database_connection_established")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Get database session with automatic commit, rollback and cleanup.

        Yields:
            Database session

        Raises:
            Exception: Re-raises any exception after rollback
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except exc.SQLAlchemyError as e:
            session.rollback()
            logger.error(
                "database_session_rollback",
                error=str(e),
                error_type=type(e).__name__
            )
            raise
        except Exception as e:
            session.rollback()
            logger.error(
                "database_session_error",
                error=str(e),
                error_type=type(e).__name__
            )
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """
        Check database connection health.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            logger.info("database_health_check_success")
            return True
        except Exception as e:
            logger.error(
                "database_health_check_failed",
                error=str(e),
                error_type=type(e).__name__
            )
            return False

    def create_all(self) -> None:
        """
        Create all tables defined in models.

        WARNING: Use Alembic migrations instead in production.
        """
        from src.sitelot.db.base import Base, import_all_models

        import_all_models()
        Base.metadata.create_all(bind=self.engine)
        logger.info("database_tables_created")

    def drop_all(self) -> None:
        """Drop all tables. Only use in development/testing."""
        from src.sitelot.db.base import Base, import_all_models

        import_all_models()
        Base.metadata.drop_all(bind=self.engine)
        logger.warning("all_database_tables_dropped")

    def dispose(self) -> None:
        """Close all pooled connections. Called on application shutdown."""
        logger.info("closing_database_connections")
        self.engine.dispose()
        logger.info("database_connections_closed")
