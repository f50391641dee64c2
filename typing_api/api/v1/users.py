"""User endpoints: public profile and presets, stats, caret settings, test results."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.api.deps import get_current_user
from typing_api.config import settings
from typing_api.db.session import get_db
from typing_api.models.user import User
from typing_api.schemas.preset import TestPresetConnection, TestPresetCreate, TestPresetResponse
from typing_api.schemas.user import (
    TestResultCreate,
    TestResultResponse,
    UserResponse,
    UserSettingsOut,
    UserSettingsResponse,
    UserSettingsUpdate,
    UserStats,
)
from typing_api.services import presets as presets_service
from typing_api.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me/settings",
    response_model=UserSettingsOut,
    summary="Get caret settings",
    responses={401: {"description": "Not authenticated"}},
)
async def get_my_settings(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
) -> UserSettingsOut:
    return await users_service.get_user_settings(session, user)


@router.patch(
    "/me/settings",
    response_model=UserSettingsResponse,
    summary="Update caret settings",
    responses={401: {"description": "Not authenticated"}},
)
async def update_my_settings(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    body: UserSettingsUpdate,
) -> UserSettingsResponse:
    return await users_service.update_user_settings(session, user, body)


@router.post(
    "/me/test-presets",
    response_model=TestPresetResponse,
    summary="Create preset owned by current user",
    responses={401: {"description": "Not authenticated"}},
)
async def create_my_test_preset(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    body: TestPresetCreate,
) -> TestPresetResponse:
    return await presets_service.create_user_test_preset(session, body, user)


@router.post(
    "/me/results",
    response_model=TestResultResponse,
    summary="Record a finished typing test",
    responses={401: {"description": "Not authenticated"}},
)
async def record_my_result(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    body: TestResultCreate,
) -> TestResultResponse:
    return await users_service.record_test_result(session, user, body)


@router.get("/{username}", response_model=UserResponse, summary="Public profile")
async def get_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    username: str,
) -> UserResponse:
    return await users_service.user_profile(session, username)


@router.get(
    "/{username}/test-presets",
    response_model=TestPresetConnection,
    summary="List presets owned by a user",
)
async def list_user_test_presets(
    session: Annotated[AsyncSession, Depends(get_db)],
    username: str,
    take: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    skip: int = Query(default=0, ge=0),
    after: datetime | None = Query(default=None, description="Cursor: only presets created before it"),
) -> TestPresetConnection:
    return await presets_service.list_user_test_presets(session, username, take=take, skip=skip, after=after)


@router.get(
    "/{username}/stats",
    response_model=UserStats,
    summary="Average WPM and accuracy",
    responses={404: {"description": "User not found"}},
)
async def get_user_stats(
    session: Annotated[AsyncSession, Depends(get_db)],
    username: str,
) -> UserStats:
    stats = await users_service.user_stats(session, username)
    if stats is None:
        raise HTTPException(status_code=404, detail="User not found")
    return stats
