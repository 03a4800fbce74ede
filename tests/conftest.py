"""Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run
without an external PostgreSQL instance.
"""

from __future__ import annotations

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from realm_i18n.core.config import get_settings
from realm_i18n.db.models import Base, Realm, User
from realm_i18n.db.repos import RealmRepo, UserRepo
from realm_i18n.i18n.theme import ThemeBundle

# Locales the admin console offers in the i18n scenarios.
SUPPORTED_LOCALES = ["en", "de", "de-CH", "fo"]


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch: pytest.MonkeyPatch):
    """Provide required settings and reset the cached singleton."""
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite://")
    monkeypatch.delenv("FALLBACK_LOCALE", raising=False)
    monkeypatch.delenv("DEFAULT_NAMESPACE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine():
    """Create an async in-memory SQLite engine with all tables."""
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)

    # SQLite doesn't enforce FK by default; enable it.
    @event.listens_for(eng.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, _):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine):
    """Yield an async session bound to the test engine."""
    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as sess:
        yield sess
        await sess.rollback()


@pytest.fixture
async def realm(session: AsyncSession) -> Realm:
    """The ``master`` realm with the i18n test locales enabled."""
    await RealmRepo.get_or_create(session, "master")
    return await RealmRepo.update_supported_locales(session, "master", SUPPORTED_LOCALES)


@pytest.fixture
async def user(session: AsyncSession, realm: Realm) -> User:
    """An admin user without a locale preference."""
    return await UserRepo.create(session, realm.id, "user_i18n_test")


@pytest.fixture
def theme() -> ThemeBundle:
    """A small theme mirroring the admin console's bundled strings."""
    return ThemeBundle(
        {
            "en": {
                "common:realmSettings": "Realm settings",
                "user-federation:addProvider_one": "Add {{provider}} provider",
                "user-federation:addProvider_other": "Add {{provider}} providers",
            },
            "de": {
                "common:realmSettings": "Realm-Einstellungen",
            },
        },
        fallback_locale="en",
    )
