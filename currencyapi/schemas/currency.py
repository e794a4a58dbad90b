from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from currencyapi.models.funds import MAX_BALANCE
from currencyapi.models.transactions import TransactionAction


class Account(BaseModel):
    """플레이어 잔액 레코드"""

    uuid: str
    name: str
    balance: int

    model_config = ConfigDict(from_attributes=True)


class BalanceResponse(BaseModel):
    """잔액 조회 응답"""

    balance: int = Field(..., description="현재 잔액")


class PayRequest(BaseModel):
    """송금 요청"""

    to_uuid: str = Field(..., min_length=1, description="수신자 UUID")
    amount: int = Field(..., gt=0, le=MAX_BALANCE, strict=True, description="송금액")


class PayResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    new_sender_balance: int = Field(..., description="송금 후 송금자 잔액")


class DepositRequest(BaseModel):
    """입금 요청 - 인게임 실물 화폐를 디지털 잔액으로 전환"""

    amount: int = Field(..., gt=0, le=MAX_BALANCE, strict=True, description="입금액")


class DepositResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    new_balance: int = Field(..., description="입금 후 잔액")


class WithdrawRequest(BaseModel):
    """출금 요청 - 디지털 잔액을 지폐로 인출"""

    count: int = Field(..., gt=0, le=MAX_BALANCE, strict=True, description="지폐 장수")
    denomination: Optional[int] = Field(
        None, gt=0, le=MAX_BALANCE, strict=True, description="지폐 단위 (미지정 시 기본값)"
    )


class WithdrawResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    withdrawn: int = Field(..., description="출금액")
    new_balance: int = Field(..., description="출금 후 잔액")
    denomination: int = Field(..., description="지폐 단위")
    count: int = Field(..., description="지폐 장수")


class LeaderboardEntry(BaseModel):
    name: str = Field(..., description="플레이어 이름")
    balance: int = Field(..., description="잔액")

    model_config = ConfigDict(from_attributes=True)


class MobLimitMarkResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    message: str = Field(..., description="응답 메시지")


class MobLimitStatusResponse(BaseModel):
    limitReached: bool = Field(..., description="오늘 몹 드롭 한도 도달 여부")


class DailyRewardResponse(BaseModel):
    message: str = Field(..., description="응답 메시지")
    new_balance: int = Field(..., description="보상 지급 후 잔액")


class TransactionRecordCreate(BaseModel):
    """거래 로그 기록 요청 (커밋된 잔액 변경 1건당 1개)"""

    uuid: str
    action: TransactionAction
    amount: int
    from_uuid: Optional[str] = None
    to_uuid: Optional[str] = None
    denomination: Optional[int] = None
    count: Optional[int] = None
    balance_after: Optional[int] = None


class TransactionRecord(TransactionRecordCreate):
    """거래 로그 항목"""

    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
