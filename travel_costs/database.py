"""
Pripojenie k databáze / Database connection.
Podporuje SQLite (dev) a PostgreSQL (prod) cez SQLAlchemy 2.0 async.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from travel_costs.config import settings

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

# Konfigurácia motora / Engine configuration
_engine_kwargs: dict = {
    "echo": False,
}

if not _is_sqlite:
    _engine_kwargs.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    })

engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs)

if _is_sqlite:
    # pysqlite/aiosqlite neriadia BEGIN sami, SAVEPOINT by inak nefungoval
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT works on SQLite
    @event.listens_for(engine.sync_engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncSession:
    """FastAPI závislosť pre DB session / FastAPI dependency for DB session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Vytvoriť tabuľky pri štarte / Create tables on startup."""
    # Registrácia všetkých modelov v metadátach / Register all models in metadata
    import travel_costs.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Zmazať všetky tabuľky (testy) / Drop all tables (tests)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
