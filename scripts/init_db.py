import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

from currencyapi.config import Settings
from currencyapi.database.connection import create_db_engine
from currencyapi.models import Base


def init_db():
    """데이터베이스 초기화 (테이블 생성)"""
    settings = Settings()
    engine = create_db_engine(settings)
    try:
        Base.metadata.create_all(bind=engine)
        print(
            "Database initialized successfully: "
            + ", ".join(sorted(Base.metadata.tables))
        )
    except Exception as e:
        print(f"Database initialization failed: {str(e)}")
        raise
    finally:
        engine.dispose()


if __name__ == "__main__":
    load_dotenv()
    init_db()
