"""Test preset queries and writes.

Reads let store errors propagate. Writes return errors as data: lookups that
miss become not_found errors, bad input becomes validation errors, and any
SQLAlchemyError is logged, rolled back and reported as store_failure.
"""

import logging
from datetime import datetime

from sqlalchemy import ColumnElement, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.config import settings
from typing_api.models.preset import TestPreset
from typing_api.models.user import User
from typing_api.schemas.enums import TestType
from typing_api.schemas.errors import FieldError
from typing_api.schemas.pagination import Connection
from typing_api.schemas.preset import (
    TestPresetCreate,
    TestPresetFilter,
    TestPresetOut,
    TestPresetResponse,
)
from typing_api.schemas.user import UserResponse
from typing_api.services.audit import log_action
from typing_api.services.enum_mapping import parse_test_preset, parse_user, to_store
from typing_api.services.pagination import paginate

logger = logging.getLogger(__name__)

PRESET_NOT_FOUND = "Unable to find preset with the given id"
CREATOR_NOT_FOUND = "This preset has no creator"


def _preset_not_found() -> TestPresetResponse:
    return TestPresetResponse(errors=[FieldError.not_found("preset", PRESET_NOT_FOUND)])


def ownerless_criteria(where: TestPresetFilter) -> list[ColumnElement[bool]]:
    """Criteria for the public catalogue: presets owned by nobody, plus the given equality filters."""
    criteria: list[ColumnElement[bool]] = [TestPreset.user_id.is_(None)]
    if where.id is not None:
        criteria.append(TestPreset.id == where.id)
    if where.content is not None:
        criteria.append(TestPreset.content == where.content)
    if where.language is not None:
        criteria.append(TestPreset.language == to_store(where.language))
    if where.type is not None:
        criteria.append(TestPreset.type == to_store(where.type))
    if where.words is not None:
        criteria.append(TestPreset.words == where.words)
    if where.time is not None:
        criteria.append(TestPreset.time == where.time)
    if where.punctuated is not None:
        criteria.append(TestPreset.punctuated == where.punctuated)
    return criteria


def owned_by_criteria(username: str) -> list[ColumnElement[bool]]:
    return [TestPreset.user.has(User.username == username)]


async def get_test_preset(session: AsyncSession, preset_id: int) -> TestPresetResponse:
    row = await session.get(TestPreset, preset_id)
    if row is None:
        return _preset_not_found()
    return TestPresetResponse(test_preset=parse_test_preset(row))


async def list_all_test_presets(session: AsyncSession) -> list[TestPresetOut]:
    r = await session.execute(select(TestPreset).order_by(TestPreset.created_at.desc(), TestPreset.id.desc()))
    return [parse_test_preset(row) for row in r.scalars().all()]


async def list_test_presets(
    session: AsyncSession,
    where: TestPresetFilter,
    *,
    take: int,
    skip: int = 0,
    after: datetime | None = None,
) -> Connection[TestPresetOut]:
    """Page through the public (ownerless) presets matching where."""
    return await paginate(
        session,
        TestPreset,
        ownerless_criteria(where),
        take=take,
        skip=skip,
        after=after,
        transform=parse_test_preset,
    )


async def list_user_test_presets(
    session: AsyncSession,
    username: str,
    *,
    take: int,
    skip: int = 0,
    after: datetime | None = None,
) -> Connection[TestPresetOut]:
    """Page through presets owned by username. Unknown users yield an empty page."""
    return await paginate(
        session,
        TestPreset,
        owned_by_criteria(username),
        take=take,
        skip=skip,
        after=after,
        transform=parse_test_preset,
    )


async def preset_creator(session: AsyncSession, preset_id: int) -> UserResponse:
    preset = await session.get(TestPreset, preset_id)
    if preset is None:
        return UserResponse(errors=[FieldError.not_found("preset", PRESET_NOT_FOUND)])
    if preset.user_id is None:
        return UserResponse(errors=[FieldError.not_found("user", CREATOR_NOT_FOUND)])
    user = await session.get(User, preset.user_id)
    if user is None:
        return UserResponse(errors=[FieldError.not_found("user", CREATOR_NOT_FOUND)])
    return UserResponse(user=parse_user(user))


def validate_preset(data: TestPresetCreate) -> list[FieldError]:
    """A timed test needs a duration; a word-count test needs a word count."""
    if data.type == TestType.TIME and data.time is None:
        return [FieldError.validation("time", "Timed presets require a time in seconds")]
    if data.type == TestType.WORDS and data.words is None:
        return [FieldError.validation("words", "Word presets require a word count")]
    return []


async def _save_preset(
    session: AsyncSession,
    row: TestPreset,
    *,
    user_id: int | None,
    action: str,
    details: dict | None = None,
) -> TestPresetResponse:
    try:
        session.add(row)
        await session.flush()
        await log_action(session, user_id, action, "test_preset", row.id, details)
    except SQLAlchemyError:
        logger.exception("Failed to save test preset (action=%s, user_id=%s)", action, user_id)
        await session.rollback()
        return TestPresetResponse(errors=[FieldError.store_failure()])
    logger.info("Test preset %s saved (action=%s, user_id=%s)", row.id, action, user_id)
    return TestPresetResponse(test_preset=parse_test_preset(row))


def _row_from_input(data: TestPresetCreate) -> TestPreset:
    return TestPreset(
        type=to_store(data.type),
        language=to_store(data.language),
        words=data.words,
        time=data.time,
        punctuated=data.punctuated,
        content=data.content,
    )


async def create_test_preset(session: AsyncSession, data: TestPresetCreate) -> TestPresetResponse:
    """Create a public (ownerless) preset with the default creator image."""
    errors = validate_preset(data)
    if errors:
        return TestPresetResponse(errors=errors)
    row = _row_from_input(data)
    row.creator_image = settings.default_creator_image
    return await _save_preset(session, row, user_id=None, action="create")


async def create_user_test_preset(session: AsyncSession, data: TestPresetCreate, user: User) -> TestPresetResponse:
    """Create a preset owned by user."""
    errors = validate_preset(data)
    if errors:
        return TestPresetResponse(errors=errors)
    row = _row_from_input(data)
    row.user_id = user.id
    row.creator_image = data.creator_image or user.image
    return await _save_preset(session, row, user_id=user.id, action="create")


async def copy_preset_to_user(session: AsyncSession, preset_id: int, user: User) -> TestPresetResponse:
    """Copy an existing preset into user's collection. Missing source -> not_found, nothing written."""
    try:
        source = await session.get(TestPreset, preset_id)
    except SQLAlchemyError:
        logger.exception("Failed to load preset %s for copy", preset_id)
        return TestPresetResponse(errors=[FieldError.store_failure()])
    if source is None:
        return _preset_not_found()
    row = TestPreset(
        user_id=user.id,
        type=source.type,
        language=source.language,
        words=source.words,
        time=source.time,
        punctuated=source.punctuated,
        content=source.content,
        creator_image=user.image,
    )
    return await _save_preset(
        session, row, user_id=user.id, action="copy", details={"source_preset_id": source.id}
    )
