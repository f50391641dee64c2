"""Test presets API: public catalogue listing, lookup, creation and copying into a user's collection."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.api.deps import get_current_user
from typing_api.config import settings
from typing_api.db.session import get_db
from typing_api.models.user import User
from typing_api.schemas.enums import TestLanguage, TestType
from typing_api.schemas.preset import (
    TestPresetConnection,
    TestPresetCreate,
    TestPresetFilter,
    TestPresetOut,
    TestPresetResponse,
)
from typing_api.schemas.user import UserResponse
from typing_api.services import presets as presets_service

router = APIRouter(prefix="/test-presets", tags=["test-presets"])


@router.get(
    "",
    response_model=TestPresetConnection,
    summary="List public presets",
)
async def list_test_presets(
    session: Annotated[AsyncSession, Depends(get_db)],
    take: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    skip: int = Query(default=0, ge=0),
    after: datetime | None = Query(default=None, description="Cursor: only presets created before it"),
    id: int | None = None,
    content: str | None = None,
    language: TestLanguage | None = None,
    type: TestType | None = None,
    words: int | None = None,
    time: int | None = None,
    punctuated: bool | None = None,
) -> TestPresetConnection:
    """Ownerless presets matching the filters, newest first."""
    where = TestPresetFilter(
        id=id,
        content=content,
        language=language,
        type=type,
        words=words,
        time=time,
        punctuated=punctuated,
    )
    return await presets_service.list_test_presets(session, where, take=take, skip=skip, after=after)


@router.get("/all", response_model=list[TestPresetOut], summary="List every preset (unpaginated)")
async def list_all_test_presets(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> list[TestPresetOut]:
    return await presets_service.list_all_test_presets(session)


@router.get("/{preset_id}", response_model=TestPresetResponse, summary="Get preset")
async def get_test_preset(
    session: Annotated[AsyncSession, Depends(get_db)],
    preset_id: int,
) -> TestPresetResponse:
    return await presets_service.get_test_preset(session, preset_id)


@router.get("/{preset_id}/creator", response_model=UserResponse, summary="Get the user who owns a preset")
async def get_preset_creator(
    session: Annotated[AsyncSession, Depends(get_db)],
    preset_id: int,
) -> UserResponse:
    return await presets_service.preset_creator(session, preset_id)


@router.post(
    "",
    response_model=TestPresetResponse,
    summary="Create public preset",
    responses={401: {"description": "Not authenticated"}},
)
async def create_test_preset(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    body: TestPresetCreate,
) -> TestPresetResponse:
    """Create an ownerless preset in the public catalogue."""
    return await presets_service.create_test_preset(session, body)


@router.post(
    "/{preset_id}/copy",
    response_model=TestPresetResponse,
    summary="Copy preset to current user",
    responses={401: {"description": "Not authenticated"}},
)
async def copy_preset_to_user(
    session: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(get_current_user)],
    preset_id: int,
) -> TestPresetResponse:
    return await presets_service.copy_preset_to_user(session, preset_id, user)
