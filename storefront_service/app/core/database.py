from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from ..models import StorefrontBase
from ..utils.logging import setup_storefront_logging as setup_logging
from .setting import get_settings

# Setup structured logging for database operations
logger = setup_logging(
    "storefront_service.database", log_level=get_settings().LOG_LEVEL
)


def _mask_credentials(database_url: str) -> str:
    if "@" not in database_url:
        return database_url
    scheme, _, rest = database_url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


class StorefrontDatabaseManager:
    """Owns the async engine and session factory for the Storefront Service."""

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
    ) -> None:
        logger.info(
            "Initializing Storefront database manager",
            extra={
                "operation": "database_manager_init",
                "database_url": _mask_credentials(database_url),
                "echo": echo,
            },
        )

        engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}

        if "sqlite" in database_url:
            # SQLite for local development and tests; no pooling so a
            # connection never outlives the event loop that opened it
            engine_kwargs["connect_args"] = {
                "timeout": 60,
                "check_same_thread": False,
            }
            engine_kwargs["poolclass"] = NullPool
            database_type = "sqlite"
        else:
            engine_kwargs.update(
                {
                    "pool_size": pool_size,
                    "max_overflow": max_overflow,
                    "pool_timeout": 30,
                    "pool_recycle": 3600,
                    "pool_pre_ping": True,
                }
            )
            database_type = "postgresql"

        self.database_type = database_type
        self.async_engine = create_async_engine(database_url, **engine_kwargs)
        self.async_session_maker = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(
            "Storefront database manager initialized",
            extra={
                "operation": "database_manager_init_complete",
                "database_type": database_type,
            },
        )

    async def create_tables(self) -> None:
        """Create all Storefront database tables that do not exist yet."""
        try:
            async with self.async_engine.begin() as conn:
                await conn.run_sync(StorefrontBase.metadata.create_all, checkfirst=True)
            logger.info(
                "Database tables created successfully",
                extra={"operation": "create_tables"},
            )
        except Exception as e:
            # Another instance may own the schema already
            logger.warning(
                "Database table creation failed",
                extra={"operation": "create_tables", "error": str(e)},
            )

    async def drop_tables(self) -> None:
        async with self.async_engine.begin() as conn:
            await conn.run_sync(StorefrontBase.metadata.drop_all)

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.async_session_maker() as session:
            yield session

    async def health_check(self) -> bool:
        """Run a trivial query against the database"""
        try:
            async with self.async_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(
                "Database health check failed",
                extra={"operation": "database_health_check", "error": str(e)},
            )
            return False

    async def close(self) -> None:
        """Dispose the engine and every pooled connection."""
        logger.info(
            "Closing Storefront database connections",
            extra={"operation": "database_close"},
        )
        await self.async_engine.dispose()


settings = get_settings()
database_manager = StorefrontDatabaseManager(
    database_url=settings.database_url,
    echo=settings.DEBUG,
    pool_size=settings.DATABASE_POOL_SIZE,
    max_overflow=settings.DATABASE_MAX_OVERFLOW,
)


# Dependency injection function for FastAPI
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session for dependency injection."""
    async for session in database_manager.get_async_session():
        yield session
