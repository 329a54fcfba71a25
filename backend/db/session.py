"""
Logistics Back Office Database Session Management

Async SQLAlchemy engine and session factory, owned by an explicit
``Database`` handle. The API creates one in its lifespan and disposes it on
shutdown; scripts and tests build their own.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from core.config import Settings


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy models."""
    pass


class Database:
    """Engine + session factory with an explicit lifecycle."""

    def __init__(self, url: str, *, echo: bool = False, ssl: bool = False):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **_engine_options(url, ssl))
        self.sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.resolved_database_url,
            echo=settings.database_echo,
            ssl=settings.database_ssl,
        )

    async def create_all(self) -> None:
        # models must be imported so every table registers on Base.metadata
        import db.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def _engine_options(url: str, ssl: bool) -> dict:
    if url.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.endswith("://"):
            # one shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options

    options = {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_pre_ping": True,
    }
    if ssl:
        options["connect_args"] = {"ssl": "require"}
    return options
