"""Saved typing-test configuration. Ownerless presets (user_id NULL) are the public catalogue."""

from datetime import datetime, timezone
from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from typing_api.db.base import Base
from typing_api.models.tokens import TEST_LANGUAGE_TOKENS, TEST_TYPE_TOKENS


class TestPreset(Base):
    __tablename__ = "test_presets"
    __test__ = False  # keep pytest from collecting this model
    __table_args__ = (Index("ix_test_presets_user_id_created_at", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    type: Mapped[str] = mapped_column(Enum(*TEST_TYPE_TOKENS, name="test_type"), nullable=False)
    language: Mapped[str] = mapped_column(Enum(*TEST_LANGUAGE_TOKENS, name="test_language"), nullable=False)
    words: Mapped[int | None] = mapped_column(Integer, nullable=True)
    time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    punctuated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    content: Mapped[str | None] = mapped_column(String(64), nullable=True)  # e.g. "COMMON", "QUOTES"
    creator_image: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )

    user: Mapped["User | None"] = relationship("User", back_populates="test_presets")
