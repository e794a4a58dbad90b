from datetime import datetime, timedelta, timezone

import pytest

from currencyapi.core.exceptions import InvalidInputError, NotFoundError, RateLimitError
from currencyapi.database.session import session_scope
from currencyapi.models.funds import MAX_BALANCE
from currencyapi.repositories.transaction_repository import TransactionRepository


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# 2024-01-15 06:30 Europe/Berlin (CET)
RESET = utc(2024, 1, 15, 5, 30)


class TestDailyReward:
    """일일 보상 테스트"""

    def test_first_claim_credits_reward(self, reward_service, make_player, balance_of):
        make_player("alice", 1000)

        result = reward_service.claim_daily("alice", now=RESET + timedelta(hours=2))

        assert result.new_balance == 1050
        assert result.message == (
            "You claimed your daily reward of $50!\n💰 New Balance: $1,050"
        )
        assert balance_of("alice") == 1050

    def test_second_claim_in_same_window_is_rate_limited(
        self, reward_service, make_player, balance_of
    ):
        make_player("alice")
        reward_service.claim_daily("alice", now=utc(2024, 1, 15, 6, 0))

        with pytest.raises(RateLimitError) as exc_info:
            reward_service.claim_daily("alice", now=utc(2024, 1, 15, 7, 0))

        # 다음 리셋: 2024-01-16 05:30 UTC
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == (
            "You already claimed your daily reward. Next reset in 22h 30m."
        )
        assert exc_info.value.details == {"next_reset_in": "22h 30m"}
        assert balance_of("alice") == 50

    def test_remaining_time_decreases(self, reward_service, make_player):
        make_player("alice")
        reward_service.claim_daily("alice", now=utc(2024, 1, 15, 6, 0))

        with pytest.raises(RateLimitError) as first:
            reward_service.claim_daily("alice", now=utc(2024, 1, 15, 7, 0))
        with pytest.raises(RateLimitError) as second:
            reward_service.claim_daily("alice", now=utc(2024, 1, 15, 8, 15))

        assert first.value.details["next_reset_in"] == "22h 30m"
        assert second.value.details["next_reset_in"] == "21h 15m"

    def test_claim_just_before_and_at_reset(
        self, reward_service, make_player, balance_of
    ):
        """리셋 1초 전 수령 후 리셋 시각 정각에 다시 수령 가능"""
        make_player("alice")

        reward_service.claim_daily("alice", now=RESET - timedelta(seconds=1))
        reward_service.claim_daily("alice", now=RESET)

        with pytest.raises(RateLimitError):
            reward_service.claim_daily("alice", now=RESET + timedelta(seconds=1))
        assert balance_of("alice") == 100

    def test_claim_either_side_of_reset(
        self, reward_service, make_player, balance_of
    ):
        make_player("alice")

        reward_service.claim_daily("alice", now=RESET - timedelta(seconds=1))
        reward_service.claim_daily("alice", now=RESET + timedelta(seconds=1))

        assert balance_of("alice") == 100

    def test_claim_allowed_next_day(self, reward_service, make_player, balance_of):
        make_player("alice")

        reward_service.claim_daily("alice", now=RESET + timedelta(hours=1))
        reward_service.claim_daily("alice", now=RESET + timedelta(days=1))

        assert balance_of("alice") == 100

    def test_unknown_player(self, reward_service):
        with pytest.raises(NotFoundError):
            reward_service.claim_daily("ghost", now=RESET)

    def test_claim_is_logged(self, reward_service, make_player, session_factory):
        make_player("alice")

        reward_service.claim_daily("alice", now=RESET)

        with session_scope(session_factory) as db:
            logged = TransactionRepository(db).get_by_uuid("alice")
        assert len(logged) == 1
        assert logged[0].action.value == "daily"
        assert logged[0].amount == 50
        assert logged[0].balance_after == 50

    def test_rate_limited_claim_is_not_logged(
        self, reward_service, make_player, session_factory
    ):
        make_player("alice")
        reward_service.claim_daily("alice", now=RESET)

        with pytest.raises(RateLimitError):
            reward_service.claim_daily("alice", now=RESET + timedelta(minutes=1))

        with session_scope(session_factory) as db:
            assert len(TransactionRepository(db).get_by_uuid("alice")) == 1


class TestMobLimit:
    """몹 드롭 한도 테스트"""

    def test_not_reached_by_default(self, reward_service, make_player):
        make_player("alice")

        assert reward_service.check_mob_limit("alice").limitReached is False

    def test_mark_is_idempotent(self, reward_service, make_player):
        make_player("alice")
        now = utc(2024, 1, 15, 12, 0)

        first = reward_service.mark_mob_limit("alice", now=now)
        second = reward_service.mark_mob_limit("alice", now=now)

        assert first.success is True
        assert first.message == "Mob limit marked for user"
        assert second == first
        assert reward_service.check_mob_limit("alice", now=now).limitReached is True

    def test_flag_expires_next_local_day(self, reward_service, make_player):
        make_player("alice")
        reward_service.mark_mob_limit("alice", now=utc(2024, 1, 15, 12, 0))

        # 2024-01-15 23:30 UTC 는 Berlin 기준 이미 1월 16일
        status = reward_service.check_mob_limit("alice", now=utc(2024, 1, 15, 23, 30))

        assert status.limitReached is False

    def test_flag_is_per_player(self, reward_service, make_player):
        make_player("alice")
        make_player("bob")
        now = utc(2024, 1, 15, 12, 0)

        reward_service.mark_mob_limit("alice", now=now)

        assert reward_service.check_mob_limit("bob", now=now).limitReached is False


def test_claim_at_balance_limit_is_rejected(reward_service, make_player, balance_of):
    make_player("alice", MAX_BALANCE)

    with pytest.raises(InvalidInputError):
        reward_service.claim_daily("alice", now=RESET)

    assert balance_of("alice") == MAX_BALANCE
    # 거부된 수령은 기록되지 않으므로 같은 구간에 다시 시도해도 429가 아님
    with pytest.raises(InvalidInputError):
        reward_service.claim_daily("alice", now=RESET + timedelta(minutes=1))
