"""User profile, caret settings, test results and averaged stats."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.models.preset import TestPreset
from typing_api.models.result import TestResult
from typing_api.models.user import User
from typing_api.models.user_settings import UserSettings
from typing_api.schemas.errors import FieldError
from typing_api.schemas.user import (
    TestResultCreate,
    TestResultOut,
    TestResultResponse,
    UserResponse,
    UserSettingsOut,
    UserSettingsResponse,
    UserSettingsUpdate,
    UserStats,
)
from typing_api.services.enum_mapping import parse_user, parse_user_settings, to_store
from typing_api.services.presets import PRESET_NOT_FOUND
from typing_api.utils import calculate_average

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "Unable to find user with the given username"


async def get_user_by_username(session: AsyncSession, username: str) -> User | None:
    r = await session.execute(select(User).where(User.username == username))
    return r.scalar_one_or_none()


async def user_profile(session: AsyncSession, username: str) -> UserResponse:
    user = await get_user_by_username(session, username)
    if user is None:
        return UserResponse(errors=[FieldError.not_found("user", USER_NOT_FOUND)])
    return UserResponse(user=parse_user(user))


async def _settings_row(session: AsyncSession, user_id: int) -> UserSettings | None:
    r = await session.execute(select(UserSettings).where(UserSettings.user_id == user_id))
    return r.scalar_one_or_none()


async def get_user_settings(session: AsyncSession, user: User) -> UserSettingsOut:
    return parse_user_settings(await _settings_row(session, user.id))


async def update_user_settings(session: AsyncSession, user: User, body: UserSettingsUpdate) -> UserSettingsResponse:
    """Upsert the user's settings row."""
    user_id = user.id
    try:
        row = await _settings_row(session, user_id)
        if row is None:
            row = UserSettings(user_id=user_id)
            session.add(row)
        row.caret_style = to_store(body.caret_style)
        await session.flush()
    except SQLAlchemyError:
        logger.exception("Failed to save settings for user_id=%s", user_id)
        await session.rollback()
        return UserSettingsResponse(errors=[FieldError.store_failure()])
    return UserSettingsResponse(settings=parse_user_settings(row))


async def record_test_result(session: AsyncSession, user: User, body: TestResultCreate) -> TestResultResponse:
    """Store a finished test. A preset_id that names no preset is reported as not_found."""
    user_id = user.id
    try:
        if body.preset_id is not None and await session.get(TestPreset, body.preset_id) is None:
            return TestResultResponse(errors=[FieldError.not_found("preset_id", PRESET_NOT_FOUND)])
        row = TestResult(user_id=user_id, preset_id=body.preset_id, wpm=body.wpm, accuracy=body.accuracy)
        session.add(row)
        await session.flush()
    except SQLAlchemyError:
        logger.exception("Failed to record test result for user_id=%s", user_id)
        await session.rollback()
        return TestResultResponse(errors=[FieldError.store_failure()])
    logger.debug("Recorded test result %s for user_id=%s", row.id, user_id)
    return TestResultResponse(
        result=TestResultOut(
            id=row.id,
            preset_id=row.preset_id,
            wpm=row.wpm,
            accuracy=row.accuracy,
            created_at=row.created_at,
        )
    )


async def user_stats(session: AsyncSession, username: str) -> UserStats | None:
    """Average WPM and accuracy over all of the user's results, or None for unknown users."""
    user = await get_user_by_username(session, username)
    if user is None:
        return None
    r = await session.execute(select(TestResult.wpm, TestResult.accuracy).where(TestResult.user_id == user.id))
    rows = r.all()
    return UserStats(
        username=user.username,
        tests_taken=len(rows),
        average_wpm=calculate_average(row[0] for row in rows),
        average_accuracy=calculate_average(row[1] for row in rows),
    )
