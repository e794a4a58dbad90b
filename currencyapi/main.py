import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from mangum import Mangum
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.cors import CORSMiddleware

from currencyapi.config import Settings
from currencyapi.containers import Container
from currencyapi.core.exception_handlers import (
    handle_base_api_exception,
    handle_http_exception,
    handle_unexpected_error,
    handle_validation_error,
)
from currencyapi.core.exceptions import BaseAPIException
from currencyapi.core.logging_middleware import LoggingMiddleware
from currencyapi.database.session import ping
from currencyapi.logging_config import setup_logging
from currencyapi.routers import (
    auth_router,
    currency_router,
    health_router,
    reward_router,
)

load_dotenv()

logger = logging.getLogger("currencyapi")


def validate_startup(settings: Settings, session_factory: sessionmaker) -> None:
    """필수 설정과 DB 연결 확인 - 실패 시 프로세스 종료 (exit code 1)"""
    missing = settings.missing_required()
    if missing:
        for name in missing:
            logger.error(f"Missing required environment variable: {name}")
        raise SystemExit(1)

    try:
        ping(session_factory)
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        raise SystemExit(1)

    logger.info("Database connection established")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.container  # type: ignore[attr-defined]
    validate_startup(
        container.config.config(), container.repositories.session_factory()
    )
    yield
    container.repositories.engine().dispose()


def create_app(container: Optional[Container] = None) -> FastAPI:
    container = container or Container()
    settings: Settings = container.config.config()

    setup_logging(
        log_level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        retention_days=settings.LOG_RETENTION_DAYS,
    )

    app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(BaseAPIException, handle_base_api_exception)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router.router)
    app.include_router(auth_router.router, prefix=settings.API_PREFIX)
    app.include_router(currency_router.router, prefix=settings.API_PREFIX)
    app.include_router(reward_router.router, prefix=settings.API_PREFIX)

    return app


app = create_app()

handler = Mangum(app)


def run(application: Optional[FastAPI] = None) -> None:
    """HOST:PORT 에서 uvicorn 서버 실행"""
    application = application or app
    settings: Settings = application.container.config.config()  # type: ignore[attr-defined]
    if settings.PORT is None:
        logger.error("Missing required environment variable: PORT")
        raise SystemExit(1)
    uvicorn.run(application, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
