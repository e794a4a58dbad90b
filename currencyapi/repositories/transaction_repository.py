from typing import List

from sqlalchemy import desc, select
from sqlalchemy.orm import Session

from currencyapi.models.transactions import CurrencyTransaction
from currencyapi.repositories.base import BaseRepository
from currencyapi.schemas.currency import TransactionRecord, TransactionRecordCreate


class TransactionRepository(BaseRepository[CurrencyTransaction, TransactionRecord]):
    """거래 로그 데이터 접근 계층 (추가 전용)"""

    def __init__(self, db: Session):
        super().__init__(CurrencyTransaction, TransactionRecord, db)

    def append(self, record: TransactionRecordCreate) -> TransactionRecord:
        data = record.model_dump()
        data["action"] = record.action.value
        return self.create(**data)

    def get_by_uuid(self, uuid: str, limit: int = 50) -> List[TransactionRecord]:
        """플레이어 거래 로그 조회 (최신순)"""
        rows = (
            self.db.execute(
                select(self.model_class)
                .where(self.model_class.uuid == uuid)
                .order_by(desc(self.model_class.id))
                .limit(limit)
            )
            .scalars()
            .all()
        )
        return self._to_schema_list(rows)
