from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import text
from sqlalchemy.orm import Session, sessionmaker


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    """하나의 작업 단위(트랜잭션) 세션 관리

    성공 시 커밋, 예외 발생 시 전체 롤백 후 재발생, 항상 커넥션 반환.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def ping(session_factory: sessionmaker) -> bool:
    """DB 연결 확인 (SELECT 1)"""
    with session_scope(session_factory) as db:
        db.execute(text("SELECT 1"))
    return True
