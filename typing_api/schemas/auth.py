"""Pydantic schemas for auth endpoints."""

from pydantic import BaseModel, Field

from typing_api.schemas.user import UserOut


class RegisterBody(BaseModel):
    username: str = Field(..., min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_\-]+$")
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)


class LoginBody(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    user: UserOut
