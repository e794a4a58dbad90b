import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import sessionmaker

from currencyapi.config import Settings
from currencyapi.core.exceptions import NotFoundError, RateLimitError
from currencyapi.database.session import session_scope
from currencyapi.models.transactions import TransactionAction
from currencyapi.repositories.funds_repository import FundsRepository
from currencyapi.repositories.rewards_repository import (
    DailyRewardRepository,
    MobLimitRepository,
)
from currencyapi.schemas.currency import (
    DailyRewardResponse,
    MobLimitMarkResponse,
    MobLimitStatusResponse,
    TransactionRecordCreate,
)
from currencyapi.services.currency_service import require_within_limit
from currencyapi.services.transaction_logger import TransactionLogger
from currencyapi.utils.timezone_utils import (
    ensure_aware,
    format_remaining,
    get_last_reset,
    get_next_reset,
    get_utc_now,
    local_today,
    time_until,
)

logger = logging.getLogger(__name__)


class RewardService:
    """일일 보상 및 몹 드롭 한도 관리 서비스"""

    def __init__(
        self,
        session_factory: sessionmaker,
        settings: Settings,
        transaction_logger: TransactionLogger,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self.transaction_logger = transaction_logger

    def get_last_reset(self, now: datetime) -> datetime:
        return get_last_reset(
            now,
            self.settings.DAILY_RESET_TIMEZONE,
            self.settings.DAILY_RESET_HOUR,
            self.settings.DAILY_RESET_MINUTE,
        )

    def claim_daily(
        self, uuid: str, now: Optional[datetime] = None
    ) -> DailyRewardResponse:
        """
        일일 보상 수령

        Args:
            uuid: 플레이어 UUID
            now: 기준 시각 (기본값: 현재 UTC)

        Returns:
            DailyRewardResponse: 안내 메시지와 지급 후 잔액

        Raises:
            NotFoundError: 계정 없음
            RateLimitError: 현재 리셋 구간에 이미 수령함 (다음 리셋까지 남은 시간 포함)
        """
        now = ensure_aware(now).astimezone(timezone.utc) if now else get_utc_now()
        last_reset = self.get_last_reset(now)
        reward = self.settings.DAILY_REWARD_AMOUNT

        with session_scope(self.session_factory) as db:
            funds = FundsRepository(db)
            rewards = DailyRewardRepository(db)

            # 계정 행을 먼저 잠가 같은 플레이어의 동시 수령을 직렬화
            current_balance = funds.lock_balance(uuid)
            if current_balance is None:
                raise NotFoundError("User not found.")

            last_claim_at = rewards.lock_last_claim(uuid)
            if last_claim_at is not None and last_claim_at >= last_reset:
                remaining = format_remaining(
                    time_until(
                        get_next_reset(last_reset, self.settings.DAILY_RESET_TIMEZONE),
                        now,
                    )
                )
                raise RateLimitError(
                    f"You already claimed your daily reward. Next reset in {remaining}.",
                    details={"next_reset_in": remaining},
                )

            require_within_limit(current_balance, reward)
            new_balance = funds.credit(uuid, reward)
            rewards.upsert_claim(uuid, now)

        logger.info(f"Player {uuid} claimed daily reward of {reward}")
        self.transaction_logger.log(
            TransactionRecordCreate(
                uuid=uuid,
                action=TransactionAction.DAILY,
                amount=reward,
                balance_after=new_balance,
            )
        )
        return DailyRewardResponse(
            message=(
                f"You claimed your daily reward of ${reward}!\n"
                f"💰 New Balance: ${new_balance:,}"
            ),
            new_balance=new_balance,
        )

    def mark_mob_limit(
        self, uuid: str, now: Optional[datetime] = None
    ) -> MobLimitMarkResponse:
        """오늘 몹 드롭 한도 도달 표시 (멱등)"""
        today = local_today(self.settings.DAILY_RESET_TIMEZONE, now)
        with session_scope(self.session_factory) as db:
            MobLimitRepository(db).mark(uuid, today)

        logger.info(f"Mob limit marked for player {uuid} on {today}")
        return MobLimitMarkResponse(success=True, message="Mob limit marked for user")

    def check_mob_limit(
        self, uuid: str, now: Optional[datetime] = None
    ) -> MobLimitStatusResponse:
        today = local_today(self.settings.DAILY_RESET_TIMEZONE, now)
        with session_scope(self.session_factory) as db:
            reached = MobLimitRepository(db).is_reached(uuid, today)
        return MobLimitStatusResponse(limitReached=reached)
