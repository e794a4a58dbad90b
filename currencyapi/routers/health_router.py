import logging

from dependency_injector.wiring import inject, Provide
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from currencyapi.containers import Container
from currencyapi.core.exceptions import InternalServerError
from currencyapi.database.session import ping
from currencyapi.schemas.health import HealthCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
@inject
def health_check(
    session_factory: sessionmaker = Depends(
        Provide[Container.repositories.session_factory]
    ),
) -> HealthCheckResponse:
    """Health check endpoint (DB 연결 확인 포함)."""
    try:
        ping(session_factory)
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        raise InternalServerError("Database unavailable")

    return HealthCheckResponse()
