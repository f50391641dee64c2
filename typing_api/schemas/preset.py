"""Pydantic schemas for test preset API."""

from datetime import datetime

from pydantic import BaseModel, Field

from typing_api.schemas.enums import TestLanguage, TestType
from typing_api.schemas.errors import FieldError
from typing_api.schemas.pagination import Connection


class TestPresetCreate(BaseModel):
    """Body for creating a preset."""

    __test__ = False

    type: TestType
    language: TestLanguage = TestLanguage.ENGLISH
    words: int | None = Field(None, ge=1, le=1000)
    time: int | None = Field(None, ge=1, le=3600, description="Duration in seconds")
    punctuated: bool = False
    content: str | None = Field(None, max_length=64)
    creator_image: str | None = Field(None, max_length=512)


class TestPresetFilter(BaseModel):
    """Equality filters for the public preset listing; None means unconstrained."""

    __test__ = False

    id: int | None = None
    content: str | None = None
    language: TestLanguage | None = None
    type: TestType | None = None
    words: int | None = None
    time: int | None = None
    punctuated: bool | None = None


class TestPresetOut(BaseModel):
    """Single preset as returned by the API."""

    __test__ = False

    id: int
    user_id: int | None
    type: TestType
    language: TestLanguage
    words: int | None
    time: int | None
    punctuated: bool
    content: str | None
    creator_image: str | None
    created_at: datetime


class TestPresetResponse(BaseModel):
    __test__ = False

    test_preset: TestPresetOut | None = None
    errors: list[FieldError] = Field(default_factory=list)


TestPresetConnection = Connection[TestPresetOut]
