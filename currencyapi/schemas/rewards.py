from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class DailyRewardClaim(BaseModel):
    """일일 보상 수령 기록"""

    uuid: str = Field(..., description="플레이어 UUID")
    last_claim_at: datetime = Field(..., description="마지막 수령 시각")

    model_config = ConfigDict(from_attributes=True)


class MobLimitFlag(BaseModel):
    """몹 드롭 한도 도달 기록"""

    uuid: str = Field(..., description="플레이어 UUID")
    date_reached: date = Field(..., description="한도 도달 날짜")

    model_config = ConfigDict(from_attributes=True)
