"""Integration tests for the realm configuration store.

Uses in-memory SQLite via conftest.py fixtures.
"""

from __future__ import annotations

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from realm_i18n.db.models import Realm, RealmLocalization, User
from realm_i18n.db.repos import LocalizationRepo, RealmRepo, UserRepo
from realm_i18n.i18n.errors import (
    InvalidKeyError,
    InvalidLocaleError,
    RealmNotFoundError,
    UserNotFoundError,
)

KEY = "common:realmSettings"


class TestRealmRepo:
    async def test_get_or_create_is_idempotent(self, session: AsyncSession):
        first = await RealmRepo.get_or_create(session, "acme")
        second = await RealmRepo.get_or_create(session, "acme")
        assert first.id == second.id
        assert first.supported_locales == []

    async def test_get_by_name_missing(self, session: AsyncSession):
        with pytest.raises(RealmNotFoundError, match="nope"):
            await RealmRepo.get_by_name(session, "nope")

    async def test_supported_locales_round_trip(self, session: AsyncSession, realm: Realm):
        assert await RealmRepo.get_supported_locales(session, "master") == ["en", "de", "de-CH", "fo"]

    async def test_supported_locales_normalized_and_deduplicated(self, session: AsyncSession, realm: Realm):
        updated = await RealmRepo.update_supported_locales(session, "master", ["fo", "DE-ch", "en", "fo", "de-CH"])
        assert updated.supported_locales == ["fo", "de-CH", "en"]

    async def test_supported_locales_rejects_malformed(self, session: AsyncSession, realm: Realm):
        with pytest.raises(InvalidLocaleError):
            await RealmRepo.update_supported_locales(session, "master", ["en", "de_CH"])
        assert await RealmRepo.get_supported_locales(session, "master") == ["en", "de", "de-CH", "fo"]

    async def test_restore_original_locales(self, session: AsyncSession, realm: Realm):
        original = await RealmRepo.get_supported_locales(session, "master")
        await RealmRepo.update_supported_locales(session, "master", ["en"])
        await RealmRepo.update_supported_locales(session, "master", original)
        assert await RealmRepo.get_supported_locales(session, "master") == original

    async def test_default_locale(self, session: AsyncSession, realm: Realm):
        updated = await RealmRepo.set_default_locale(session, "master", "DE")
        assert updated.default_locale == "de"
        cleared = await RealmRepo.set_default_locale(session, "master", None)
        assert cleared.default_locale is None


class TestLocalizationRepo:
    async def test_set_and_get(self, session: AsyncSession, realm: Realm):
        await LocalizationRepo.set(session, realm.id, "de", KEY, "realmSettings de")
        assert await LocalizationRepo.get(session, realm.id, "de", KEY) == "realmSettings de"

    async def test_get_is_exact(self, session: AsyncSession, realm: Realm):
        await LocalizationRepo.set(session, realm.id, "de", KEY, "realmSettings de")
        assert await LocalizationRepo.get(session, realm.id, "de-CH", KEY) is None
        assert await LocalizationRepo.get(session, realm.id, "en", KEY) is None

    async def test_set_replaces_existing(self, session: AsyncSession, realm: Realm):
        first = await LocalizationRepo.set(session, realm.id, "en", KEY, "one")
        second = await LocalizationRepo.set(session, realm.id, "en", KEY, "two")
        assert first.id == second.id
        assert await LocalizationRepo.get(session, realm.id, "en", KEY) == "two"

    async def test_set_normalizes(self, session: AsyncSession, realm: Realm):
        row = await LocalizationRepo.set(session, realm.id, "DE-ch", "realmSettings", "x")
        assert row.locale == "de-CH"
        assert row.key == KEY

    @pytest.mark.parametrize("locale", ["de_CH", "", "german"])
    async def test_set_rejects_malformed_locale(self, session: AsyncSession, realm: Realm, locale: str):
        with pytest.raises(InvalidLocaleError):
            await LocalizationRepo.set(session, realm.id, locale, KEY, "x")
        assert await LocalizationRepo.snapshot(session, realm.id) == {}

    @pytest.mark.parametrize("key", ["common:", "Common:realmSettings", "common:realm settings"])
    async def test_set_rejects_malformed_key(self, session: AsyncSession, realm: Realm, key: str):
        with pytest.raises(InvalidKeyError):
            await LocalizationRepo.set(session, realm.id, "en", key, "x")

    async def test_delete_one(self, session: AsyncSession, realm: Realm):
        await LocalizationRepo.set(session, realm.id, "en", KEY, "x")
        assert await LocalizationRepo.delete(session, realm.id, "en", KEY) is True
        assert await LocalizationRepo.delete(session, realm.id, "en", KEY) is False

    async def test_delete_all_scoped_to_realm(self, session: AsyncSession, realm: Realm):
        other = await RealmRepo.get_or_create(session, "other")
        await LocalizationRepo.set(session, realm.id, "en", KEY, "a")
        await LocalizationRepo.set(session, realm.id, "de", KEY, "b")
        await LocalizationRepo.set(session, other.id, "en", KEY, "c")

        assert await LocalizationRepo.delete_all(session, realm.id) == 2
        assert await LocalizationRepo.snapshot(session, realm.id) == {}
        assert await LocalizationRepo.snapshot(session, other.id) == {"en": {KEY: "c"}}

    async def test_delete_all_empty(self, session: AsyncSession, realm: Realm):
        assert await LocalizationRepo.delete_all(session, realm.id) == 0

    async def test_snapshot_groups_by_locale(self, session: AsyncSession, realm: Realm):
        await LocalizationRepo.set(session, realm.id, "en", KEY, "realmSettings en")
        await LocalizationRepo.set(session, realm.id, "de", KEY, "realmSettings de")
        await LocalizationRepo.set(
            session, realm.id, "en", "user-federation:addProvider_other", "addProvider_other en: {{provider}}"
        )
        assert await LocalizationRepo.snapshot(session, realm.id) == {
            "de": {KEY: "realmSettings de"},
            "en": {
                KEY: "realmSettings en",
                "user-federation:addProvider_other": "addProvider_other en: {{provider}}",
            },
        }

    async def test_unique_constraint(self, session: AsyncSession, realm: Realm):
        session.add(RealmLocalization(realm_id=realm.id, locale="en", key=KEY, value="a"))
        await session.flush()
        session.add(RealmLocalization(realm_id=realm.id, locale="en", key=KEY, value="b"))
        with pytest.raises(IntegrityError):
            await session.flush()


class TestUserRepo:
    async def test_default_locale_is_none(self, session: AsyncSession, user: User):
        assert await UserRepo.get_locale(session, user.id) is None

    async def test_update_locale_round_trip(self, session: AsyncSession, user: User):
        await UserRepo.update_locale(session, user.id, "de-ch")
        assert await UserRepo.get_locale(session, user.id) == "de-CH"

    async def test_clear_locale(self, session: AsyncSession, user: User):
        await UserRepo.update_locale(session, user.id, "fo")
        await UserRepo.update_locale(session, user.id, None)
        assert await UserRepo.get_locale(session, user.id) is None

    async def test_update_locale_rejects_malformed(self, session: AsyncSession, user: User):
        with pytest.raises(InvalidLocaleError):
            await UserRepo.update_locale(session, user.id, "de_CH")

    async def test_update_locale_unknown_user(self, session: AsyncSession, realm: Realm):
        with pytest.raises(UserNotFoundError):
            await UserRepo.update_locale(session, uuid.uuid4(), "de")

    async def test_get_unknown_user(self, session: AsyncSession):
        with pytest.raises(UserNotFoundError):
            await UserRepo.get_locale(session, uuid.uuid4())

    async def test_create_with_locale(self, session: AsyncSession, realm: Realm):
        created = await UserRepo.create(session, realm.id, "bob", locale="DE")
        assert created.locale == "de"

    async def test_get_by_username(self, session: AsyncSession, realm: Realm, user: User):
        found = await UserRepo.get_by_username(session, realm.id, "user_i18n_test")
        assert found is not None
        assert found.id == user.id
        assert await UserRepo.get_by_username(session, realm.id, "ghost") is None

    async def test_username_unique_per_realm(self, session: AsyncSession, realm: Realm, user: User):
        other = await RealmRepo.get_or_create(session, "other")
        await UserRepo.create(session, other.id, "user_i18n_test")
        with pytest.raises(IntegrityError):
            await UserRepo.create(session, realm.id, "user_i18n_test")

    async def test_delete(self, session: AsyncSession, user: User):
        assert await UserRepo.delete(session, user.id) is True
        assert await UserRepo.delete(session, user.id) is False
