"""Engine and session scope for the realm configuration store.

The engine is created on first use from ``Settings.DATABASE_URL``.
Renders read the store once, so a session is short-lived: open it, load
the ``LocalizationContext``, and let ``get_session()`` commit.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from realm_i18n.core.config import get_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def _factory() -> async_sessionmaker[AsyncSession]:
    global _engine, _session_factory  # noqa: PLW0603
    if _session_factory is None:
        _engine = create_async_engine(get_settings().DATABASE_URL, pool_pre_ping=True)
        # Translators outlive the session; loaded rows must stay readable.
        _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _session_factory


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on exit and rolls back on error."""
    async with _factory()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        await session.commit()


async def dispose_engine() -> None:
    """Close pooled connections; the next ``get_session()`` reconnects."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
