from typing import List, Optional
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",
    )
    # Application
    APP_NAME: str = "Currency Ledger API"
    API_PREFIX: str = "/api"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: Optional[int] = None

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None
    LOG_RETENTION_DAYS: int = 7

    # Database
    POSTGRES_HOST: str = ""
    POSTGRES_PORT: Optional[int] = None
    POSTGRES_USERNAME: str = ""
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DATABASE: str = ""

    # 설정되어 있으면 POSTGRES_* 대신 사용 (테스트/로컬용)
    DATABASE_URL: Optional[str] = None
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 10
    DB_STATEMENT_TIMEOUT_MS: int = 30000

    @property
    def database_url(self) -> str:
        """Construct database URL from individual components"""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # URL encode the password to handle special characters
        encoded_password = quote_plus(self.POSTGRES_PASSWORD)
        return f"postgresql+psycopg2://{self.POSTGRES_USERNAME}:{encoded_password}@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DATABASE}"

    # Security
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 10

    # IP allow-list
    ALLOWED_IP_ADDRESS: str = ""
    ALLOWED_IP_ADDRESS_LOCAL: str = ""

    @property
    def allowed_ips(self) -> List[str]:
        return [ip for ip in (self.ALLOWED_IP_ADDRESS, self.ALLOWED_IP_ADDRESS_LOCAL) if ip]

    # Business Rules
    DAILY_REWARD_AMOUNT: int = 50  # 일일 보상 금액
    DAILY_RESET_TIMEZONE: str = "Europe/Berlin"
    DAILY_RESET_HOUR: int = 6
    DAILY_RESET_MINUTE: int = 30
    DEFAULT_DENOMINATION: int = 1000  # 출금 시 기본 지폐 단위
    LEADERBOARD_SIZE: int = 10
    TRANSACTION_LOG_MAX_ATTEMPTS: int = 2  # 거래 로그 기록 재시도 포함 최대 횟수

    def missing_required(self) -> List[str]:
        """필수 설정 중 비어있는 항목 이름 목록"""
        names = REQUIRED_SETTINGS
        if self.DATABASE_URL:
            names = [n for n in names if not n.startswith("POSTGRES_")]
        return [n for n in names if getattr(self, n) in (None, "")]


REQUIRED_SETTINGS = [
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_USERNAME",
    "POSTGRES_PASSWORD",
    "POSTGRES_DATABASE",
    "JWT_SECRET",
    "ALLOWED_IP_ADDRESS",
    "ALLOWED_IP_ADDRESS_LOCAL",
    "PORT",
]
