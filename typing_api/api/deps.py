"""FastAPI dependencies: session cookie gate and current user from the session token."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from typing_api.config import settings
from typing_api.core.auth import decode_token
from typing_api.db.session import get_db
from typing_api.models.user import User
from typing_api.utils import has_session_cookie


async def require_session(request: Request) -> str:
    """Reject requests without a session cookie; return the raw token."""
    if not has_session_cookie(request.headers.get("cookie")):
        raise HTTPException(status_code=401, detail="Not authenticated")
    token = request.cookies.get(settings.session_cookie_name, "").strip()
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return token


async def get_current_user(
    token: Annotated[str, Depends(require_session)],
    session: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    try:
        payload = decode_token(token)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    user_id_str = payload.get("sub")
    if not user_id_str:
        raise HTTPException(status_code=401, detail="Invalid session")
    try:
        user_id = int(user_id_str)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid session")
    r = await session.execute(select(User).where(User.id == user_id))
    user = r.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user
