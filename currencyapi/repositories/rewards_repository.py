from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from currencyapi.models.rewards import DailyReward, MobLimitReached
from currencyapi.repositories.base import BaseRepository
from currencyapi.schemas.rewards import DailyRewardClaim, MobLimitFlag
from currencyapi.utils.timezone_utils import ensure_aware


class DailyRewardRepository(BaseRepository[DailyReward, DailyRewardClaim]):
    """일일 보상 수령 기록 데이터 접근 계층"""

    def __init__(self, db: Session):
        super().__init__(DailyReward, DailyRewardClaim, db)

    def lock_last_claim(self, uuid: str) -> Optional[datetime]:
        """수령 기록 행을 잠그고 마지막 수령 시각 반환 (기록 없으면 None)"""
        last_claim_at = self.db.execute(
            select(self.model_class.last_claim_at)
            .where(self.model_class.uuid == uuid)
            .with_for_update()
        ).scalar_one_or_none()
        return ensure_aware(last_claim_at) if last_claim_at else None

    def upsert_claim(self, uuid: str, claimed_at: datetime) -> None:
        self._upsert(
            values={"uuid": uuid, "last_claim_at": claimed_at},
            index_elements=["uuid"],
            update_fields=["last_claim_at"],
        )


class MobLimitRepository(BaseRepository[MobLimitReached, MobLimitFlag]):
    """몹 드롭 일일 한도 데이터 접근 계층"""

    def __init__(self, db: Session):
        super().__init__(MobLimitReached, MobLimitFlag, db)

    def mark(self, uuid: str, today: date) -> None:
        """같은 날 여러 번 호출해도 결과 동일 (upsert)"""
        self._upsert(
            values={"uuid": uuid, "date_reached": today},
            index_elements=["uuid"],
            update_fields=["date_reached"],
        )

    def is_reached(self, uuid: str, today: date) -> bool:
        return (
            self.db.execute(
                select(self.model_class.uuid).where(
                    and_(
                        self.model_class.uuid == uuid,
                        self.model_class.date_reached == today,
                    )
                )
            ).first()
            is not None
        )
