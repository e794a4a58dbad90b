from typing import List

from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends

from currencyapi.containers import Container
from currencyapi.core.auth_middleware import get_authorized_session
from currencyapi.schemas.auth import AuthSession
from currencyapi.schemas.currency import (
    BalanceResponse,
    DepositRequest,
    DepositResponse,
    LeaderboardEntry,
    PayRequest,
    PayResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from currencyapi.services.currency_service import CurrencyService

router = APIRouter(prefix="/currency", tags=["currency"])


@router.get("/balance", response_model=BalanceResponse)
@inject
def get_balance(
    session: AuthSession = Depends(get_authorized_session),
    service: CurrencyService = Depends(Provide[Container.services.currency_service]),
) -> BalanceResponse:
    """
    현재 플레이어 잔액 조회

    HTTP Status:
        200: 조회 성공
        401: 토큰 없음 / 형식 오류
        403: 토큰 만료 또는 허용되지 않은 IP
        404: 계정 없음
    """
    return service.get_balance(session.uuid)


@router.post("/pay", response_model=PayResponse)
@inject
def pay(
    request: PayRequest,
    session: AuthSession = Depends(get_authorized_session),
    service: CurrencyService = Depends(Provide[Container.services.currency_service]),
) -> PayResponse:
    """
    다른 플레이어에게 송금

    HTTP Status:
        200: 송금 성공
        400: 잘못된 금액 또는 잔액 부족
        404: 송금자/수신자 계정 없음
    """
    return service.pay(session.uuid, request.to_uuid, request.amount)


@router.post("/deposit", response_model=DepositResponse)
@inject
def deposit(
    request: DepositRequest,
    session: AuthSession = Depends(get_authorized_session),
    service: CurrencyService = Depends(Provide[Container.services.currency_service]),
) -> DepositResponse:
    """게임 내 화폐 아이템을 잔액으로 입금"""
    return service.deposit(session.uuid, request.amount)


@router.post("/withdraw", response_model=WithdrawResponse)
@inject
def withdraw(
    request: WithdrawRequest,
    session: AuthSession = Depends(get_authorized_session),
    service: CurrencyService = Depends(Provide[Container.services.currency_service]),
) -> WithdrawResponse:
    """
    잔액을 화폐 아이템으로 출금 (count * denomination)

    denomination 생략 시 기본 액면가 사용
    """
    return service.withdraw(session.uuid, request.count, request.denomination)


@router.get("/top", response_model=List[LeaderboardEntry])
@inject
def get_top(
    service: CurrencyService = Depends(Provide[Container.services.currency_service]),
) -> List[LeaderboardEntry]:
    """잔액 상위 플레이어 목록 (인증 불필요)"""
    return service.get_top()
