import sys
from pathlib import Path

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# Ensure project root is on path for `currencyapi` imports
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from currencyapi.config import Settings
from currencyapi.containers import Container
from currencyapi.database.connection import create_session_factory
from currencyapi.database.session import session_scope
from currencyapi.main import create_app
from currencyapi.models import Base
from currencyapi.repositories.funds_repository import FundsRepository
from currencyapi.services.currency_service import CurrencyService
from currencyapi.services.reward_service import RewardService
from currencyapi.services.transaction_logger import TransactionLogger

ALLOWED_IP = "203.0.113.7"
ALLOWED_IP_LOCAL = "127.0.0.1"


@pytest.fixture
def settings():
    """테스트용 설정 (.env 무시)"""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        JWT_SECRET="test-secret",
        ALLOWED_IP_ADDRESS=ALLOWED_IP,
        ALLOWED_IP_ADDRESS_LOCAL=ALLOWED_IP_LOCAL,
        PORT=8000,
    )


@pytest.fixture
def engine():
    """인메모리 SQLite 엔진 (모든 세션이 같은 커넥션 공유)"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def make_player(session_factory):
    """잔액을 가진 플레이어 생성"""

    def _make(uuid: str, balance: int = 0, name: str = None) -> None:
        with session_scope(session_factory) as db:
            repo = FundsRepository(db)
            repo.upsert_account(uuid, name or uuid)
            if balance:
                repo.credit(uuid, balance)

    return _make


@pytest.fixture
def balance_of(session_factory):
    def _balance(uuid: str):
        with session_scope(session_factory) as db:
            return FundsRepository(db).get_balance(uuid)

    return _balance


@pytest.fixture
def transaction_logger(session_factory, settings):
    return TransactionLogger(session_factory, settings)


@pytest.fixture
def currency_service(session_factory, settings, transaction_logger):
    return CurrencyService(session_factory, settings, transaction_logger)


@pytest.fixture
def reward_service(session_factory, settings, transaction_logger):
    return RewardService(session_factory, settings, transaction_logger)


@pytest.fixture
def container(settings, session_factory):
    container = Container()
    container.config.config.override(providers.Object(settings))
    container.repositories.session_factory.override(providers.Object(session_factory))
    yield container
    container.config.config.reset_override()
    container.repositories.session_factory.reset_override()


@pytest.fixture
def client(container):
    """테스트 클라이언트 픽스처 (lifespan 미실행)"""
    app = create_app(container)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def login(client):
    """로그인 후 인증 헤더 반환 (허용된 IP로 요청)"""

    def _login(uuid: str, name: str = None, ip: str = ALLOWED_IP) -> dict:
        res = client.post(
            "/api/currency/login",
            json={"uuid": uuid, "name": name or uuid},
            headers={"X-Forwarded-For": ip},
        )
        assert res.status_code == 200
        return {
            "Authorization": f"Bearer {res.json()['token']}",
            "X-Forwarded-For": ip,
        }

    return _login
