"""Pydantic schemas for users, their settings and stats."""

from datetime import datetime

from pydantic import BaseModel, Field

from typing_api.schemas.enums import AuthProvider, CaretStyle, UserBadge
from typing_api.schemas.errors import FieldError


class UserOut(BaseModel):
    id: int
    username: str
    image: str | None
    badge: UserBadge
    auth_provider: AuthProvider
    created_at: datetime


class UserResponse(BaseModel):
    user: UserOut | None = None
    errors: list[FieldError] = Field(default_factory=list)


class UserSettingsOut(BaseModel):
    caret_style: CaretStyle


class UserSettingsUpdate(BaseModel):
    caret_style: CaretStyle


class UserSettingsResponse(BaseModel):
    settings: UserSettingsOut | None = None
    errors: list[FieldError] = Field(default_factory=list)


class TestResultCreate(BaseModel):
    """Body for recording a finished typing test."""

    __test__ = False

    wpm: float = Field(..., ge=0)
    accuracy: float = Field(..., ge=0, le=100)
    preset_id: int | None = None


class TestResultOut(BaseModel):
    __test__ = False

    id: int
    preset_id: int | None
    wpm: float
    accuracy: float
    created_at: datetime


class TestResultResponse(BaseModel):
    __test__ = False

    result: TestResultOut | None = None
    errors: list[FieldError] = Field(default_factory=list)


class UserStats(BaseModel):
    username: str
    tests_taken: int
    average_wpm: float
    average_accuracy: float
