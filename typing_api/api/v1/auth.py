"""Auth: register, login, logout, me. The session token is set as an HTTP-only cookie."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.api.deps import get_current_user
from typing_api.config import settings
from typing_api.core.auth import create_session_token, hash_password, verify_password
from typing_api.db.session import get_db
from typing_api.models.user import User
from typing_api.schemas.auth import AuthResponse, LoginBody, RegisterBody
from typing_api.schemas.user import UserOut
from typing_api.services.enum_mapping import parse_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, user: User) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user.id, user.username),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )


@router.post(
    "/register",
    response_model=AuthResponse,
    summary="Register a new user",
    responses={400: {"description": "Username or email already registered"}},
)
async def register(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: RegisterBody,
    response: Response,
) -> AuthResponse:
    email = body.email.strip().lower()
    username = body.username.strip()
    r = await session.execute(select(User).where(or_(User.email == email, User.username == username)))
    if r.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Username or email already registered")
    try:
        user = User(username=username, email=email, password_hash=hash_password(body.password))
        session.add(user)
        await session.flush()
        await session.refresh(user)
    except IntegrityError as e:
        logger.warning("Register IntegrityError: %s", e)
        raise HTTPException(status_code=400, detail="Username or email already registered") from e
    logger.info("Registered user_id=%s", user.id)
    _set_session_cookie(response, user)
    return AuthResponse(user=parse_user(user))


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    responses={401: {"description": "Invalid email or password"}},
)
async def login(
    session: Annotated[AsyncSession, Depends(get_db)],
    body: LoginBody,
    response: Response,
) -> AuthResponse:
    email = body.email.strip().lower()
    r = await session.execute(select(User).where(User.email == email))
    user = r.scalar_one_or_none()
    if not user or not user.password_hash:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    _set_session_cookie(response, user)
    return AuthResponse(user=parse_user(user))


@router.post("/logout", summary="Clear the session cookie")
async def logout(response: Response) -> dict:
    response.delete_cookie(settings.session_cookie_name)
    return {"ok": True}


@router.get(
    "/me",
    response_model=UserOut,
    summary="Current user",
    responses={401: {"description": "Not authenticated"}},
)
async def me(user: Annotated[User, Depends(get_current_user)]) -> UserOut:
    return parse_user(user)
