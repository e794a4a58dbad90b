import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from currencyapi.config import Settings
from currencyapi.database.session import session_scope
from currencyapi.repositories.transaction_repository import TransactionRepository
from currencyapi.schemas.currency import TransactionRecord, TransactionRecordCreate

logger = logging.getLogger(__name__)


class TransactionLogger:
    """커밋된 잔액 변경을 거래 로그에 기록하는 서비스

    잔액 변경이 커밋된 뒤 별도의 작업 단위로 기록한다. 기록 실패는 error 로
    남기고 호출자에게 전파하지 않는다 (이미 커밋된 잔액이 기준).
    """

    def __init__(self, session_factory: sessionmaker, settings: Settings):
        self.session_factory = session_factory
        self.max_attempts = max(1, settings.TRANSACTION_LOG_MAX_ATTEMPTS)

    def log(self, record: TransactionRecordCreate) -> Optional[TransactionRecord]:
        for attempt in range(1, self.max_attempts + 1):
            try:
                with session_scope(self.session_factory) as db:
                    return TransactionRepository(db).append(record)
            except Exception as e:
                logger.error(
                    f"Failed to log transaction (attempt {attempt}/{self.max_attempts}): "
                    f"{record.model_dump(mode='json')} - {str(e)}",
                    exc_info=attempt == self.max_attempts,
                )
        return None
