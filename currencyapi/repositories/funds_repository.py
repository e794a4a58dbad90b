"""
잔액 리포지토리 - user_funds 테이블 접근

잔액 변경 메서드는 커밋하지 않는다. 호출자는 반드시 하나의 트랜잭션 안에서
lock_* 으로 행 잠금을 먼저 획득한 뒤 debit/credit 을 호출해야 한다.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.orm import Session

from currencyapi.models.funds import UserFunds
from currencyapi.repositories.base import BaseRepository
from currencyapi.schemas.currency import Account, LeaderboardEntry


class FundsRepository(BaseRepository[UserFunds, Account]):
    """플레이어 잔액 데이터 접근 계층"""

    def __init__(self, db: Session):
        super().__init__(UserFunds, Account, db)

    def upsert_account(self, uuid: str, name: str) -> None:
        """첫 로그인 시 잔액 0으로 생성, 이후 로그인은 이름만 갱신"""
        self._upsert(
            values={"uuid": uuid, "name": name, "balance": 0},
            index_elements=["uuid"],
            update_fields=["name"],
        )

    def get_balance(self, uuid: str) -> Optional[int]:
        """잠금 없는 단순 잔액 조회"""
        return self.db.execute(
            select(self.model_class.balance).where(self.model_class.uuid == uuid)
        ).scalar_one_or_none()

    def lock_balances(self, uuids: Iterable[str]) -> Dict[str, int]:
        """
        여러 계정 행을 배타적으로 잠그고 현재 잔액을 반환 (SELECT ... FOR UPDATE)

        uuid 정렬 순서로 잠가서 반대 방향 송금 간 교착 상태를 방지한다.
        존재하지 않는 계정은 결과에서 빠진다.
        """
        ordered = sorted(set(uuids))
        rows = self.db.execute(
            select(self.model_class.uuid, self.model_class.balance)
            .where(self.model_class.uuid.in_(ordered))
            .order_by(self.model_class.uuid)
            .with_for_update()
        ).all()
        return {row.uuid: row.balance for row in rows}

    def lock_balance(self, uuid: str) -> Optional[int]:
        """단일 계정 행 잠금 후 잔액 반환 (없으면 None)"""
        return self.lock_balances([uuid]).get(uuid)

    def debit(self, uuid: str, amount: int) -> Optional[int]:
        """잔액 차감 - 갱신된 행이 없으면 None"""
        return self._apply_delta(uuid, -amount)

    def credit(self, uuid: str, amount: int) -> Optional[int]:
        """잔액 증가 - 갱신된 행이 없으면 None"""
        return self._apply_delta(uuid, amount)

    def _apply_delta(self, uuid: str, delta: int) -> Optional[int]:
        result = self.db.execute(
            update(self.model_class)
            .where(self.model_class.uuid == uuid)
            .values(balance=self.model_class.balance + delta)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return self.get_balance(uuid)

    def get_top(self, limit: int = 10) -> List[LeaderboardEntry]:
        """잔액 상위 플레이어 조회 (내림차순)"""
        rows = self.db.execute(
            select(self.model_class.name, self.model_class.balance)
            .order_by(desc(self.model_class.balance))
            .limit(limit)
        ).all()
        return [LeaderboardEntry(name=row.name, balance=row.balance) for row in rows]
