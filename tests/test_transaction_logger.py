from unittest.mock import Mock, patch

from currencyapi.models.transactions import CurrencyTransaction, TransactionAction
from currencyapi.schemas.currency import TransactionRecord, TransactionRecordCreate
from currencyapi.services.transaction_logger import TransactionLogger


def make_record():
    return TransactionRecordCreate(
        uuid="alice", action=TransactionAction.DEPOSIT, amount=5, balance_after=5
    )


class TestTransactionLogger:
    def test_appends_record(self, transaction_logger):
        saved = transaction_logger.log(make_record())

        assert saved is not None
        assert saved.id is not None
        assert saved.action == TransactionAction.DEPOSIT
        assert saved.created_at is not None

    def test_retries_once_then_succeeds(self, session_factory, settings):
        logger = TransactionLogger(session_factory, settings)
        saved = Mock()

        with patch(
            "currencyapi.services.transaction_logger.TransactionRepository"
        ) as mock_repo_class:
            mock_repo_class.return_value.append.side_effect = [
                RuntimeError("timeout"),
                saved,
            ]
            result = logger.log(make_record())

        assert result is saved
        assert mock_repo_class.return_value.append.call_count == 2

    def test_gives_up_and_logs_error(self, session_factory, settings, caplog):
        logger = TransactionLogger(session_factory, settings)

        with patch(
            "currencyapi.services.transaction_logger.TransactionRepository"
        ) as mock_repo_class:
            mock_repo_class.return_value.append.side_effect = RuntimeError("down")
            result = logger.log(make_record())

        assert result is None
        assert "Failed to log transaction" in caplog.text
        assert "alice" in caplog.text


def test_log_table_is_append_only():
    """거래 로그 테이블에는 수정 시각 컬럼이 없음"""
    columns = CurrencyTransaction.__table__.columns

    assert "created_at" in columns
    assert "updated_at" not in columns


def test_record_reads_from_orm_row(transaction_logger):
    saved = transaction_logger.log(make_record())

    assert TransactionRecord.model_config["from_attributes"] is True
    assert isinstance(saved, TransactionRecord)
    assert saved.balance_after == 5
