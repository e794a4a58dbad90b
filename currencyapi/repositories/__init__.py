# Repository layer - Data access with Pydantic responses

from .base import BaseRepository
from .funds_repository import FundsRepository
from .transaction_repository import TransactionRepository
from .rewards_repository import DailyRewardRepository, MobLimitRepository

__all__ = [
    "BaseRepository",
    "FundsRepository",
    "TransactionRepository",
    "DailyRewardRepository",
    "MobLimitRepository",
]
