from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from foodcourt.core.config import settings
from foodcourt.models.base import Base


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=echo, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        # pysqlite's implicit BEGIN defers locking until the first write, so two
        # order creations could both read the same sequence. Take the write lock
        # up front instead.
        @event.listens_for(engine.sync_engine, "connect")
        def _disable_pysqlite_begin(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None

        @event.listens_for(engine.sync_engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


if not settings.database_url:
    raise ValueError("❌ DATABASE_URL is not set!")

# Create engine
engine = build_engine(settings.database_url, echo=settings.database_echo)

# Async session maker
async_session = build_sessionmaker(engine)


# Dependency
async def get_db():
    async with async_session() as session:
        yield session


async def create_db_and_tables(bind: AsyncEngine = engine):
    import foodcourt.models  # registers all models via models/__init__.py

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
