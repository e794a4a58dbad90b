import logging
from typing import Optional

from dependency_injector.wiring import inject, Provide
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from currencyapi.config import Settings
from currencyapi.containers import Container
from currencyapi.core.exceptions import AuthenticationError, AuthorizationError
from currencyapi.core.security import decode_access_token, get_client_ip, is_ip_allowed
from currencyapi.schemas.auth import AuthSession

logger = logging.getLogger(__name__)

# JWT Bearer 토큰 스킴 - 헤더 누락/형식 오류는 직접 401로 처리
security = HTTPBearer(auto_error=False)


@inject
def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(Provide[Container.config.config]),
) -> AuthSession:
    """필수 사용자 인증 - 유효한 Bearer 토큰이 필요함"""
    if not credentials:
        if not request.headers.get("authorization"):
            raise AuthenticationError("Missing Authorization header")
        raise AuthenticationError("Invalid Authorization format")

    return decode_access_token(credentials.credentials, settings)


@inject
def get_authorized_session(
    request: Request,
    session: AuthSession = Depends(get_current_session),
    settings: Settings = Depends(Provide[Container.config.config]),
) -> AuthSession:
    """토큰 검증 후 호출자 IP가 허용 목록에 있는지 확인"""
    client_ip = get_client_ip(request)
    if not is_ip_allowed(client_ip, settings):
        logger.warning(f"Blocked request from IP: {client_ip}")
        raise AuthorizationError("Forbidden: Your IP is not allowed.")
    return session
