from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from currencyapi.config import Settings


def create_db_engine(settings: Settings) -> Engine:
    """설정으로부터 커넥션 풀을 가진 엔진 생성 (프로세스당 한 번)"""
    url = settings.database_url
    if url.startswith("sqlite"):
        return create_engine(
            url, connect_args={"check_same_thread": False}, echo=settings.DEBUG
        )

    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True,  # 연결 유효성 검사
        pool_recycle=3600,  # 1시간마다 연결 재생성
        echo=settings.DEBUG,  # 디버그 모드에서 SQL 로깅
        connect_args={
            "connect_timeout": settings.DB_POOL_TIMEOUT,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        },
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    # 커밋 후에도 로드된 값 유지
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
