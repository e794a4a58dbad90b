from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends

from currencyapi.containers import Container
from currencyapi.core.auth_middleware import get_authorized_session
from currencyapi.schemas.auth import AuthSession
from currencyapi.schemas.currency import (
    DailyRewardResponse,
    MobLimitMarkResponse,
    MobLimitStatusResponse,
)
from currencyapi.services.reward_service import RewardService

router = APIRouter(prefix="/currency", tags=["rewards"])


@router.post("/daily", response_model=DailyRewardResponse)
@inject
def claim_daily_reward(
    session: AuthSession = Depends(get_authorized_session),
    service: RewardService = Depends(Provide[Container.services.reward_service]),
) -> DailyRewardResponse:
    """
    일일 보상 수령

    리셋 시각(기본 06:30 Europe/Berlin) 기준 하루 한 번만 수령 가능

    HTTP Status:
        200: 지급 완료
        404: 계정 없음
        429: 이미 수령함 (다음 리셋까지 남은 시간 안내)
    """
    return service.claim_daily(session.uuid)


@router.post("/mob-limit", response_model=MobLimitMarkResponse)
@inject
def mark_mob_limit(
    session: AuthSession = Depends(get_authorized_session),
    service: RewardService = Depends(Provide[Container.services.reward_service]),
) -> MobLimitMarkResponse:
    """오늘 몹 드롭 한도 도달 표시"""
    return service.mark_mob_limit(session.uuid)


@router.get("/mob-limit", response_model=MobLimitStatusResponse)
@inject
def check_mob_limit(
    session: AuthSession = Depends(get_authorized_session),
    service: RewardService = Depends(Provide[Container.services.reward_service]),
) -> MobLimitStatusResponse:
    return service.check_mob_limit(session.uuid)
