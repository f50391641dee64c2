from __future__ import annotations

from datetime import datetime, timezone
from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing_api.db.base import Base
from typing_api.models.tokens import AUTH_PROVIDER_TOKENS, USER_BADGE_TOKENS


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    badge: Mapped[str] = mapped_column(Enum(*USER_BADGE_TOKENS, name="user_badge"), nullable=False, default="DEFAULT")
    auth_provider: Mapped[str] = mapped_column(
        Enum(*AUTH_PROVIDER_TOKENS, name="auth_provider"), nullable=False, default="DEFAULT"
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    test_presets: Mapped[list["TestPreset"]] = relationship(
        "TestPreset", back_populates="user", cascade="all, delete-orphan"
    )
    test_results: Mapped[list["TestResult"]] = relationship(
        "TestResult", back_populates="user", cascade="all, delete-orphan"
    )
    settings: Mapped["UserSettings | None"] = relationship(
        "UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
