"""
거래 로그 데이터 모델

잔액 변경이 커밋될 때마다 한 행씩 추가되는 감사 로그(Audit Trail) 테이블.
한번 기록된 행은 수정/삭제하지 않는다.
"""

import enum
from typing import Optional

from sqlalchemy import BigInteger, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from currencyapi.models.base import Base, BigIntegerPK, CreatedAtMixin


class TransactionAction(str, enum.Enum):
    PAY = "pay"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    DAILY = "daily"


class CurrencyTransaction(Base, CreatedAtMixin):
    __tablename__ = "currency_transactions"
    __table_args__ = (Index("idx_currency_transactions_uuid", "uuid"),)

    id: Mapped[int] = mapped_column(BigIntegerPK, primary_key=True, autoincrement=True)

    # 거래 주체 (pay의 경우 송금자)
    uuid: Mapped[str] = mapped_column(String(64), nullable=False)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    from_uuid: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    to_uuid: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    denomination: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # 거래 후 잔액 (pay는 송금자 기준)
    balance_after: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    def __repr__(self):
        return f"<CurrencyTransaction(id={self.id}, uuid={self.uuid}, action={self.action}, amount={self.amount})>"
