from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends

from currencyapi.containers import Container
from currencyapi.schemas.auth import LoginRequest, Token
from currencyapi.services.auth_service import AuthService

router = APIRouter(prefix="/currency", tags=["auth"])


@router.post("/login", response_model=Token)
@inject
def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(Provide[Container.services.auth_service]),
) -> Token:
    """
    플레이어 로그인 - 계정 upsert 후 10분짜리 토큰 발급

    인증 불필요 (IP 검사도 생략)

    HTTP Status:
        200: 토큰 발급
        400: uuid/name 누락
        500: 내부 서버 오류
    """
    return auth_service.login(request.uuid, request.name)
