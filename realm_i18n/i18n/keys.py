"""Translation keys of the form ``namespace:name[_category]``."""

from __future__ import annotations

import re
from dataclasses import dataclass

from realm_i18n.i18n.errors import InvalidKeyError

DEFAULT_NAMESPACE = "common"

# CLDR plural categories.
PLURAL_CATEGORIES: tuple[str, ...] = ("zero", "one", "two", "few", "many", "other")

_NAMESPACE_RE = re.compile(r"^[a-z][a-z0-9-]*$")
_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_.-]*$")


@dataclass(frozen=True)
class TranslationKey:
    """A namespaced translation key.

    ``name`` keeps the plural suffix if there is one; see
    ``plural_category`` and ``base``.
    """

    namespace: str
    name: str

    @classmethod
    def parse(cls, raw: str | TranslationKey, default_namespace: str = DEFAULT_NAMESPACE) -> TranslationKey:
        """Parse *raw*; a key without ``:`` goes to *default_namespace*.

        Raises:
            InvalidKeyError: If the namespace or name is malformed.
        """
        if isinstance(raw, TranslationKey):
            return raw
        if not isinstance(raw, str):
            raise InvalidKeyError(f"Translation key must be a string, got {type(raw).__name__}")
        namespace, sep, name = raw.strip().partition(":")
        if not sep:
            namespace, name = default_namespace, namespace
        if not _NAMESPACE_RE.match(namespace):
            raise InvalidKeyError(f"Malformed namespace in key {raw!r}")
        if not _NAME_RE.match(name):
            raise InvalidKeyError(f"Malformed name in key {raw!r}")
        return cls(namespace=namespace, name=name)

    @property
    def plural_category(self) -> str | None:
        """The ``_one``/``_other``/... suffix, if present."""
        _, sep, suffix = self.name.rpartition("_")
        if sep and suffix in PLURAL_CATEGORIES:
            return suffix
        return None

    @property
    def base(self) -> TranslationKey:
        """This key without its plural suffix."""
        category = self.plural_category
        if category is None:
            return self
        return TranslationKey(self.namespace, self.name[: -len(category) - 1])

    def with_category(self, category: str) -> TranslationKey:
        """Return the plural variant of this key for *category*."""
        if category not in PLURAL_CATEGORIES:
            raise InvalidKeyError(f"Unknown plural category: {category!r}")
        return TranslationKey(self.namespace, f"{self.base.name}_{category}")

    def __str__(self) -> str:
        return f"{self.namespace}:{self.name}"


def normalize_key(raw: str, default_namespace: str = DEFAULT_NAMESPACE) -> str:
    """Return the canonical ``namespace:name`` form of *raw*."""
    return str(TranslationKey.parse(raw, default_namespace))
