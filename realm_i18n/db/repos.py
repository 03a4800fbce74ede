"""Database repositories: thin CRUD layer over SQLAlchemy models.

Locale tags and keys are validated and normalised here, before any SQL
is issued: a malformed tag or key is a caller defect and raises
``InvalidLocaleError`` / ``InvalidKeyError``.  Keys without a namespace
go to ``Settings.DEFAULT_NAMESPACE`` unless the caller passes one.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realm_i18n.core.config import get_settings
from realm_i18n.db.models import Realm, RealmLocalization, User
from realm_i18n.i18n.errors import RealmNotFoundError, UserNotFoundError
from realm_i18n.i18n.keys import normalize_key
from realm_i18n.i18n.locale import normalize_locale

logger = logging.getLogger(__name__)


def _canonical_key(key: str, default_namespace: str | None) -> str:
    return normalize_key(key, default_namespace or get_settings().DEFAULT_NAMESPACE)


# ---------------------------------------------------------------------------
# RealmRepo
# ---------------------------------------------------------------------------
class RealmRepo:
    """CRUD operations for the ``realms`` table."""

    @staticmethod
    async def get_by_name(session: AsyncSession, name: str) -> Realm:
        """Return the realm called *name*.

        Raises:
            RealmNotFoundError: If no such realm exists.
        """
        result = await session.execute(select(Realm).where(Realm.name == name))
        realm = result.scalar_one_or_none()
        if realm is None:
            raise RealmNotFoundError(f"Realm not found: {name!r}")
        return realm

    @staticmethod
    async def get_or_create(session: AsyncSession, name: str) -> Realm:
        """Return an existing realm or create a new one with no locales."""
        result = await session.execute(select(Realm).where(Realm.name == name))
        realm = result.scalar_one_or_none()
        if realm is not None:
            return realm

        realm = Realm(name=name, supported_locales=[])
        session.add(realm)
        await session.flush()
        logger.info("Realm created: %s", name, extra={"event": "realm_created", "realm": name})
        return realm

    @staticmethod
    async def get_supported_locales(session: AsyncSession, name: str) -> list[str]:
        """Return the realm's supported locale tags, in configured order."""
        realm = await RealmRepo.get_by_name(session, name)
        return list(realm.supported_locales or [])

    @staticmethod
    async def update_supported_locales(
        session: AsyncSession,
        name: str,
        locales: Iterable[str],
    ) -> Realm:
        """Replace the realm's supported locales.

        Tags are normalised and de-duplicated, keeping first occurrence
        order.  Returns the updated ``Realm``.
        """
        normalized = list(dict.fromkeys(normalize_locale(tag) for tag in locales))
        realm = await RealmRepo.get_by_name(session, name)
        realm.supported_locales = normalized
        await session.flush()
        logger.info(
            "Supported locales updated: %s",
            ",".join(normalized) or "-",
            extra={"event": "supported_locales_updated", "realm": name},
        )
        return realm

    @staticmethod
    async def set_default_locale(session: AsyncSession, name: str, locale: str | None) -> Realm:
        """Set (or clear with ``None``) the realm's default locale."""
        realm = await RealmRepo.get_by_name(session, name)
        realm.default_locale = normalize_locale(locale) if locale is not None else None
        await session.flush()
        return realm


# ---------------------------------------------------------------------------
# LocalizationRepo
# ---------------------------------------------------------------------------
class LocalizationRepo:
    """CRUD operations for the ``realm_localizations`` table."""

    @staticmethod
    async def get(
        session: AsyncSession,
        realm_id: uuid.UUID,
        locale: str,
        key: str,
        default_namespace: str | None = None,
    ) -> str | None:
        """Return the override for exactly ``(locale, key)``, or ``None``."""
        stmt = select(RealmLocalization.value).where(
            RealmLocalization.realm_id == realm_id,
            RealmLocalization.locale == normalize_locale(locale),
            RealmLocalization.key == _canonical_key(key, default_namespace),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def set(
        session: AsyncSession,
        realm_id: uuid.UUID,
        locale: str,
        key: str,
        value: str,
        default_namespace: str | None = None,
    ) -> RealmLocalization:
        """Insert or replace the override for ``(locale, key)``.

        Raises:
            InvalidLocaleError: *locale* is malformed.
            InvalidKeyError: *key* is malformed.
        """
        tag = normalize_locale(locale)
        canonical = _canonical_key(key, default_namespace)

        stmt = select(RealmLocalization).where(
            RealmLocalization.realm_id == realm_id,
            RealmLocalization.locale == tag,
            RealmLocalization.key == canonical,
        )
        result = await session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            row = RealmLocalization(realm_id=realm_id, locale=tag, key=canonical, value=value)
            session.add(row)
        else:
            row.value = value
        await session.flush()

        logger.info(
            "Localization override set",
            extra={"event": "override_set", "locale": tag, "key": canonical},
        )
        return row

    @staticmethod
    async def delete(
        session: AsyncSession,
        realm_id: uuid.UUID,
        locale: str,
        key: str,
        default_namespace: str | None = None,
    ) -> bool:
        """Remove one override.

        Returns:
            ``True`` if a row was deleted, ``False`` otherwise.
        """
        stmt = delete(RealmLocalization).where(
            RealmLocalization.realm_id == realm_id,
            RealmLocalization.locale == normalize_locale(locale),
            RealmLocalization.key == _canonical_key(key, default_namespace),
        )
        result = await session.execute(stmt)
        return result.rowcount > 0  # type: ignore[union-attr]

    @staticmethod
    async def delete_all(session: AsyncSession, realm_id: uuid.UUID) -> int:
        """Remove every override of one realm.

        Returns:
            Number of rows deleted.
        """
        stmt = delete(RealmLocalization).where(RealmLocalization.realm_id == realm_id)
        result = await session.execute(stmt)
        count = result.rowcount  # type: ignore[union-attr]
        logger.info(
            "Localization overrides removed: %d",
            count,
            extra={"event": "overrides_cleared"},
        )
        return count

    @staticmethod
    async def snapshot(session: AsyncSession, realm_id: uuid.UUID) -> dict[str, dict[str, str]]:
        """Return all overrides of a realm as ``{locale: {key: value}}``."""
        stmt = (
            select(RealmLocalization.locale, RealmLocalization.key, RealmLocalization.value)
            .where(RealmLocalization.realm_id == realm_id)
            .order_by(RealmLocalization.locale, RealmLocalization.key)
        )
        result = await session.execute(stmt)
        overrides: dict[str, dict[str, str]] = {}
        for locale, key, value in result.all():
            overrides.setdefault(locale, {})[key] = value
        return overrides


# ---------------------------------------------------------------------------
# UserRepo
# ---------------------------------------------------------------------------
class UserRepo:
    """CRUD operations for the ``users`` table."""

    @staticmethod
    async def create(
        session: AsyncSession,
        realm_id: uuid.UUID,
        username: str,
        locale: str | None = None,
    ) -> User:
        """Insert a new user, optionally with a preferred locale."""
        user = User(
            realm_id=realm_id,
            username=username,
            locale=normalize_locale(locale) if locale is not None else None,
        )
        session.add(user)
        await session.flush()
        return user

    @staticmethod
    async def get(session: AsyncSession, user_id: uuid.UUID) -> User:
        """Return the user with *user_id*.

        Raises:
            UserNotFoundError: If no such user exists.
        """
        user = await session.get(User, user_id)
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return user

    @staticmethod
    async def get_by_username(session: AsyncSession, realm_id: uuid.UUID, username: str) -> User | None:
        stmt = select(User).where(User.realm_id == realm_id, User.username == username)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def get_locale(session: AsyncSession, user_id: uuid.UUID) -> str | None:
        """Return the user's preferred locale tag, or ``None`` if unset."""
        user = await UserRepo.get(session, user_id)
        return user.locale

    @staticmethod
    async def update_locale(session: AsyncSession, user_id: uuid.UUID, locale: str | None) -> User:
        """Set (or clear with ``None``) the user's preferred locale.

        Returns:
            The updated ``User``.
        """
        tag = normalize_locale(locale) if locale is not None else None
        stmt = update(User).where(User.id == user_id).values(locale=tag).returning(User)
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()
        if user is None:
            raise UserNotFoundError(f"User not found: {user_id}")
        return user

    @staticmethod
    async def delete(session: AsyncSession, user_id: uuid.UUID) -> bool:
        """Delete a user.

        Returns:
            ``True`` if a row was deleted, ``False`` otherwise.
        """
        result = await session.execute(delete(User).where(User.id == user_id))
        return result.rowcount > 0  # type: ignore[union-attr]
