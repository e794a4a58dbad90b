from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import jwt, JWTError
from pydantic import ValidationError

from currencyapi.config import Settings
from currencyapi.core.exceptions import AuthorizationError
from currencyapi.schemas.auth import AuthSession


def create_access_token(
    uuid: str,
    name: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET is not configured")

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
    to_encode = {"uuid": uuid, "name": name, "exp": expire}
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> AuthSession:
    """JWT 토큰의 서명과 만료를 검증하고 세션 정보를 반환합니다."""
    if not settings.JWT_SECRET:
        raise AuthorizationError("Invalid or expired token")

    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        return AuthSession.model_validate(payload)
    except (JWTError, ValidationError):
        raise AuthorizationError("Invalid or expired token")


def normalize_ip(raw_ip: Optional[str]) -> str:
    """'::ffff:' 접두사 제거, X-Forwarded-For 체인의 첫 항목만 사용"""
    return (raw_ip or "").replace("::ffff:", "").split(",")[0].strip()


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return normalize_ip(forwarded)
    return normalize_ip(request.client.host if request.client else None)


def is_ip_allowed(ip: str, settings: Settings) -> bool:
    return bool(ip) and ip in settings.allowed_ips
