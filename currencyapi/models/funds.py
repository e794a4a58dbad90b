from sqlalchemy import BigInteger, CheckConstraint, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from currencyapi.models.base import BaseModel

# user_funds.balance (BIGINT) 상한
MAX_BALANCE = 2**63 - 1


class UserFunds(BaseModel):
    """
    플레이어 잔액 테이블 - 플레이어당 한 행

    - 로그인 시 생성(upsert), 삭제하지 않음
    - 잔액 변경은 행 단위 잠금(SELECT ... FOR UPDATE) 아래에서만 수행
    - balance >= 0 제약은 애플리케이션 검증의 최종 방어선
    """

    __tablename__ = "user_funds"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_user_funds_balance_non_negative"),
        Index("idx_user_funds_balance", "balance"),
    )

    uuid: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    def __repr__(self):
        return f"<UserFunds(uuid={self.uuid}, name={self.name}, balance={self.balance})>"
