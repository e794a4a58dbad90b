from .auth import AuthSession, LoginRequest, Token
from .currency import (
    Account,
    BalanceResponse,
    DailyRewardResponse,
    DepositRequest,
    DepositResponse,
    LeaderboardEntry,
    MobLimitMarkResponse,
    MobLimitStatusResponse,
    PayRequest,
    PayResponse,
    TransactionRecord,
    TransactionRecordCreate,
    WithdrawRequest,
    WithdrawResponse,
)
from .health import HealthCheckResponse
from .rewards import DailyRewardClaim, MobLimitFlag
