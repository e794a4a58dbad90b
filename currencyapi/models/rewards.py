from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from currencyapi.models.base import Base


class DailyReward(Base):
    """일일 보상 마지막 수령 시각 (플레이어당 한 행, upsert)"""

    __tablename__ = "daily_rewards"

    uuid: Mapped[str] = mapped_column(
        String(64), ForeignKey("user_funds.uuid"), primary_key=True
    )
    last_claim_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


class MobLimitReached(Base):
    """몹 드롭 일일 한도 도달 표시 - date_reached가 오늘이면 한도 도달"""

    __tablename__ = "mob_limit_reached"

    uuid: Mapped[str] = mapped_column(
        String(64), ForeignKey("user_funds.uuid"), primary_key=True
    )
    date_reached: Mapped[date] = mapped_column(Date, nullable=False)
