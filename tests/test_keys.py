"""Tests for realm_i18n.i18n.keys: namespaced keys and plural suffixes."""

from __future__ import annotations

import pytest

from realm_i18n.i18n.errors import InvalidKeyError
from realm_i18n.i18n.keys import TranslationKey, normalize_key


class TestParse:
    def test_namespaced(self):
        key = TranslationKey.parse("common:realmSettings")
        assert key.namespace == "common"
        assert key.name == "realmSettings"
        assert str(key) == "common:realmSettings"

    def test_hyphenated_namespace(self):
        key = TranslationKey.parse("user-federation:addProvider_other")
        assert key.namespace == "user-federation"

    def test_default_namespace(self):
        assert normalize_key("realmSettings") == "common:realmSettings"

    def test_custom_default_namespace(self):
        assert normalize_key("save", default_namespace="dashboard") == "dashboard:save"

    @pytest.mark.parametrize(
        "raw",
        ["", ":name", "common:", "Common:name", "common:1st", "common:has space", "a:b:c"],
    )
    def test_malformed_rejected(self, raw):
        with pytest.raises(InvalidKeyError):
            TranslationKey.parse(raw)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidKeyError):
            TranslationKey.parse(None)  # type: ignore[arg-type]


class TestPluralSuffix:
    def test_other_suffix(self):
        key = TranslationKey.parse("user-federation:addProvider_other")
        assert key.plural_category == "other"
        assert str(key.base) == "user-federation:addProvider"

    def test_no_suffix(self):
        key = TranslationKey.parse("user-federation:addProvider")
        assert key.plural_category is None
        assert key.base is key

    def test_non_category_underscore_is_not_suffix(self):
        key = TranslationKey.parse("common:client_id")
        assert key.plural_category is None

    def test_with_category(self):
        key = TranslationKey.parse("user-federation:addProvider")
        assert str(key.with_category("one")) == "user-federation:addProvider_one"

    def test_with_category_replaces_existing_suffix(self):
        key = TranslationKey.parse("user-federation:addProvider_one")
        assert str(key.with_category("few")) == "user-federation:addProvider_few"

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidKeyError, match="plural category"):
            TranslationKey.parse("common:items").with_category("several")
