from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.engine.url import make_url
from sqlalchemy.pool import NullPool
from config.settings import settings
from db.base import Base
import logging

logger = logging.getLogger(__name__)

def make_async_engine(database_url: str = None, **kwargs) -> AsyncEngine:
    """Build the async engine for the enrichment database"""
    url = make_url(database_url or settings.DATABASE_URL_ASYNC)
    if url.drivername.startswith("sqlite"):
        # aiosqlite connections are bound to the loop that opened them
        kwargs.setdefault("poolclass", NullPool)
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_pre_ping", True)
        kwargs.setdefault("pool_recycle", 300)
    return create_async_engine(
        url,
        echo=True if settings.LOG_LEVEL == "DEBUG" else False,
        **kwargs
    )

def make_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create sessionmaker bound to the given engine"""
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)

async def create_tables_async(engine: AsyncEngine):
    """Create all tables async"""
    # Register models on the metadata before create_all
    import models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created/verified")
