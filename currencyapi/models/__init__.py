from .base import Base
from .funds import UserFunds
from .transactions import CurrencyTransaction, TransactionAction
from .rewards import DailyReward, MobLimitReached

__all__ = [
    "Base",
    "UserFunds",
    "CurrencyTransaction",
    "TransactionAction",
    "DailyReward",
    "MobLimitReached",
]
