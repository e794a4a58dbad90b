import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import BaseAPIException, InternalServerError
from .security import get_client_ip

logger = logging.getLogger("currencyapi")


def error_body(
    code: str, message: str, details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details or {}},
    }


def _describe(request: Request) -> str:
    return f"{request.method} {request.url.path} from {get_client_ip(request)}"


async def handle_base_api_exception(request: Request, exc: BaseAPIException):
    msg = f"[{type(exc).__name__}] {_describe(request)} -> {exc.status_code}: {exc.message}"
    if exc.status_code >= 500:
        logger.error(msg)
    else:
        logger.warning(msg)
    return JSONResponse(status_code=exc.status_code, content=exc.detail)


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    """프레임워크가 던진 HTTPException (404 라우트 없음, 405 등)"""
    msg = f"[HTTPException] {_describe(request)} -> {exc.status_code}: {exc.detail}"
    if exc.status_code >= 500:
        tb_str = "".join(traceback.format_tb(exc.__traceback__))
        logger.error(f"{msg}\n\nStack Trace:\n{tb_str}")
    else:
        logger.warning(msg)

    if isinstance(exc.detail, dict) and "error" in exc.detail:
        content = exc.detail
    else:
        content = error_body("HTTP_ERROR", str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=content)


async def handle_validation_error(request: Request, exc: RequestValidationError):
    """요청 본문 형식 오류는 400 INVALID_INPUT 으로 응답"""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning(f"[ValidationError] {_describe(request)} -> 400: {errors}")
    return JSONResponse(
        status_code=400,
        content=error_body("INVALID_INPUT", "Invalid input", {"errors": errors}),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    # 내부 정보는 로그에만 남기고 응답은 일반 메시지
    tb_str = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    logger.error(
        f"[Unhandled Error] {_describe(request)}\n"
        f"{type(exc).__name__}: {exc}\n\n"
        f"{tb_str}"
    )
    internal = InternalServerError()
    return JSONResponse(status_code=internal.status_code, content=internal.detail)
