import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from .security import get_client_ip

logger = logging.getLogger("currencyapi")


class LoggingMiddleware(BaseHTTPMiddleware):
    """요청/응답 로깅 (메서드, 경로, 호출자 IP, 상태 코드, 소요 시간)"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        line = f"{request.method} {request.url.path} from {get_client_ip(request)}"

        logger.info(f"[Request] {line}")
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(f"[Unhandled Error] {line}")
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        logger.log(
            level,
            f"[Response] {line} -> {response.status_code} in {elapsed_ms:.1f}ms",
        )
        return response
