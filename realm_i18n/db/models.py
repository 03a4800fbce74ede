"""SQLAlchemy 2.0 declarative models: Realm, RealmLocalization, User.

Locale tags and translation keys are stored in their normalised form
(``de-CH``, ``common:realmSettings``); the repositories normalise on
the way in.  All timestamps are stored as UTC.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Realm(Base):
    """Tenant whose UI strings can be overridden."""

    __tablename__ = "realms"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # Ordered list of locale tags the realm offers; empty = i18n disabled.
    supported_locales: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    default_locale: Mapped[str | None] = mapped_column(String(16), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Realm {self.name} locales={self.supported_locales}>"


class RealmLocalization(Base):
    """A realm-defined override of one key in one locale."""

    __tablename__ = "realm_localizations"
    __table_args__ = (
        UniqueConstraint("realm_id", "locale", "key", name="uq_realm_localization"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    realm_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("realms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    locale: Mapped[str] = mapped_column(String(16), nullable=False)
    key: Mapped[str] = mapped_column(String(255), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<RealmLocalization {self.locale} {self.key}>"


class User(Base):
    """Console user; ``locale`` is the preferred UI locale, if chosen."""

    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("realm_id", "username", name="uq_user_realm_username"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    realm_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("realms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    locale: Mapped[str | None] = mapped_column(String(16), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<User {self.username} locale={self.locale}>"
