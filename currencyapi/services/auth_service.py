import logging

from sqlalchemy.orm import sessionmaker

from currencyapi.config import Settings
from currencyapi.core.security import create_access_token
from currencyapi.database.session import session_scope
from currencyapi.repositories.funds_repository import FundsRepository
from currencyapi.schemas.auth import Token

logger = logging.getLogger(__name__)


class AuthService:
    """로그인 처리 - 계정 생성(upsert) 및 단기 토큰 발급"""

    def __init__(self, session_factory: sessionmaker, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings

    def login(self, uuid: str, name: str) -> Token:
        with session_scope(self.session_factory) as db:
            FundsRepository(db).upsert_account(uuid, name)

        token = create_access_token(uuid=uuid, name=name, settings=self.settings)
        logger.info(f"Issued access token for player {uuid} ({name})")
        return Token(token=token)
