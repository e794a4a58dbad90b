"""
잔액 변경 서비스

모든 변경 작업은 같은 순서를 따른다:
1. 입력 검증 (저장소 접근 전)
2. 하나의 트랜잭션 시작
3. 대상 계정 행 잠금 (SELECT ... FOR UPDATE)
4. 잠금 후 읽은 값으로 불변식 재검증 (잔액 부족 등)
5. 변경 적용 후 커밋
6. 커밋 후 거래 로그 1건 기록

2~5 중 어디서든 예외가 나면 session_scope가 전체 롤백한다.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from currencyapi.config import Settings
from currencyapi.core.exceptions import (
    InsufficientFundsError,
    InvalidInputError,
    NotFoundError,
)
from currencyapi.database.session import session_scope
from currencyapi.models.funds import MAX_BALANCE
from currencyapi.models.transactions import TransactionAction
from currencyapi.repositories.funds_repository import FundsRepository
from currencyapi.schemas.currency import (
    BalanceResponse,
    DepositResponse,
    LeaderboardEntry,
    PayResponse,
    TransactionRecordCreate,
    WithdrawResponse,
)
from currencyapi.services.transaction_logger import TransactionLogger

logger = logging.getLogger(__name__)


def _require_positive(value, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError(f"{field} must be a positive integer")
    if value > MAX_BALANCE:
        raise InvalidInputError(f"{field} is too large")


def require_within_limit(balance: int, amount: int) -> None:
    """입금 후 잔액이 저장 가능한 최대값을 넘으면 거부"""
    if balance + amount > MAX_BALANCE:
        raise InvalidInputError(
            "Balance limit exceeded",
            details={"balance": balance, "amount": amount, "limit": MAX_BALANCE},
        )


class CurrencyService:
    """잔액 조회/송금/입금/출금 비즈니스 로직"""

    def __init__(
        self,
        session_factory: sessionmaker,
        settings: Settings,
        transaction_logger: TransactionLogger,
    ):
        self.session_factory = session_factory
        self.settings = settings
        self.transaction_logger = transaction_logger

    def get_balance(self, uuid: str) -> BalanceResponse:
        with session_scope(self.session_factory) as db:
            balance = FundsRepository(db).get_balance(uuid)

        if balance is None:
            raise NotFoundError("Player not found")
        return BalanceResponse(balance=balance)

    def pay(self, from_uuid: str, to_uuid: str, amount: int) -> PayResponse:
        """플레이어 간 송금

        송금자/수신자 행을 uuid 정렬 순서로 함께 잠근 뒤 잔액을 재검증한다.
        """
        if not from_uuid or not to_uuid:
            raise InvalidInputError("Invalid input")
        _require_positive(amount, "amount")

        with session_scope(self.session_factory) as db:
            funds = FundsRepository(db)
            balances = funds.lock_balances([from_uuid, to_uuid])

            sender_balance = balances.get(from_uuid)
            if sender_balance is None:
                raise NotFoundError("Sender not found")
            if sender_balance < amount:
                raise InsufficientFundsError(
                    "Insufficient funds",
                    details={"balance": sender_balance, "required": amount},
                )
            if from_uuid != to_uuid and to_uuid in balances:
                require_within_limit(balances[to_uuid], amount)

            new_sender_balance = funds.debit(from_uuid, amount)
            if funds.credit(to_uuid, amount) is None:
                raise NotFoundError("Recipient not found")

            # 자기 자신에게 송금한 경우 차감/증가가 상쇄됨
            if from_uuid == to_uuid:
                new_sender_balance = sender_balance

        logger.info(f"Player {from_uuid} paid {amount} to {to_uuid}")
        self.transaction_logger.log(
            TransactionRecordCreate(
                uuid=from_uuid,
                action=TransactionAction.PAY,
                amount=amount,
                from_uuid=from_uuid,
                to_uuid=to_uuid,
                balance_after=new_sender_balance,
            )
        )
        return PayResponse(success=True, new_sender_balance=new_sender_balance)

    def deposit(self, uuid: str, amount: int) -> DepositResponse:
        """입금 - 행 잠금 후 잔액 상한 확인"""
        _require_positive(amount, "amount")

        with session_scope(self.session_factory) as db:
            funds = FundsRepository(db)
            current_balance = funds.lock_balance(uuid)
            if current_balance is None:
                raise NotFoundError("User not found")
            require_within_limit(current_balance, amount)
            new_balance = funds.credit(uuid, amount)

        logger.info(f"Player {uuid} deposited {amount}")
        self.transaction_logger.log(
            TransactionRecordCreate(
                uuid=uuid,
                action=TransactionAction.DEPOSIT,
                amount=amount,
                balance_after=new_balance,
            )
        )
        return DepositResponse(success=True, new_balance=new_balance)

    def withdraw(
        self, uuid: str, count: int, denomination: Optional[int] = None
    ) -> WithdrawResponse:
        """출금 - count * denomination 만큼 차감"""
        _require_positive(count, "count")
        if denomination is None:
            denomination = self.settings.DEFAULT_DENOMINATION
        _require_positive(denomination, "denomination")
        amount = count * denomination
        if amount > MAX_BALANCE:
            raise InvalidInputError("count * denomination is too large")

        with session_scope(self.session_factory) as db:
            funds = FundsRepository(db)
            current_balance = funds.lock_balance(uuid)
            if current_balance is None:
                raise NotFoundError("User not found")
            if current_balance < amount:
                raise InsufficientFundsError(
                    "Insufficient funds",
                    details={"balance": current_balance, "required": amount},
                )
            new_balance = funds.debit(uuid, amount)

        logger.info(f"Player {uuid} withdrew {count} x {denomination}")
        self.transaction_logger.log(
            TransactionRecordCreate(
                uuid=uuid,
                action=TransactionAction.WITHDRAW,
                amount=amount,
                denomination=denomination,
                count=count,
                balance_after=new_balance,
            )
        )
        return WithdrawResponse(
            success=True,
            withdrawn=amount,
            new_balance=new_balance,
            denomination=denomination,
            count=count,
        )

    def get_top(self) -> List[LeaderboardEntry]:
        """잔액 상위 플레이어 (읽기 전용, 잠금 없음)"""
        with session_scope(self.session_factory) as db:
            return FundsRepository(db).get_top(self.settings.LEADERBOARD_SIZE)
