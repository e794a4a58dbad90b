from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    uuid: str = Field(..., min_length=1, description="플레이어 UUID")
    name: str = Field(..., min_length=1, description="플레이어 이름")


class Token(BaseModel):
    token: str


class AuthSession(BaseModel):
    """Decoded bearer token payload, rebuilt on every request."""

    uuid: str
    name: Optional[str] = None
    exp: Optional[int] = None
