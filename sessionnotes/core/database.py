"""
Database Configuration.

SQLAlchemy async engine and session factory construction for the remote
store. Nothing here is cached at module level: the bootstrap code builds
one engine at process start and hands the session factory to the gateway.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from sessionnotes.core.logging import get_logger

logger = get_logger(__name__)


def create_engine(url: str | None = None) -> AsyncEngine:
    """
    Create the async engine for the remote store.

    Args:
        url: Explicit connection URL. When omitted the URL is built from
            database.yaml and the DB_PASSWORD secret.

    Returns:
        SQLAlchemy async engine
    """
    if url is None:
        from sessionnotes.core.config import get_app_config, get_database_url

        db_config = get_app_config().database
        engine = create_async_engine(
            get_database_url(),
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_recycle=db_config.pool_recycle,
            echo=db_config.echo,
        )
        logger.debug("Database engine created", host=db_config.host, name=db_config.name)
        return engine

    if url.startswith("sqlite") and ":memory:" in url:
        # Every session must see the same in-memory database.
        engine = create_async_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(url)
    logger.debug("Database engine created", dialect=engine.dialect.name)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Build the session factory the gateway opens one session per call from."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
