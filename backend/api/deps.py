"""
Logistics Back Office API Dependencies

Dependency injection for DB sessions.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import Database


def get_database(request: Request) -> Database:
    """The ``Database`` handle created in the application lifespan."""
    return request.app.state.db


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async database session."""
    async with get_database(request).sessionmaker() as session:
        try:
            yield session
        finally:
            await session.close()
