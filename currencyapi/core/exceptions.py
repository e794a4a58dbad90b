from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BaseAPIException(HTTPException):
    """API 오류 베이스

    하위 클래스는 status_code / error_code / default_message 만 지정한다.
    응답 본문: {"success": false, "error": {"code", "message", "details"}}
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_001"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(
            status_code=type(self).status_code,
            detail={
                "success": False,
                "error": {
                    "code": self.error_code,
                    "message": self.message,
                    "details": self.details,
                },
            },
        )

    def __str__(self) -> str:
        return self.message


class InvalidInputError(BaseAPIException):
    """누락되었거나 0 이하/정수가 아닌 요청 값"""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INVALID_INPUT"
    default_message = "Invalid input"


class AuthenticationError(BaseAPIException):
    """Authorization 헤더 없음 또는 형식 오류"""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTH_001"
    default_message = "Authentication required"


class AuthorizationError(BaseAPIException):
    """토큰 서명/만료 오류, 허용되지 않은 IP"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "AUTH_002"
    default_message = "Access forbidden"


class NotFoundError(BaseAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND_001"
    default_message = "Resource not found"


class InsufficientFundsError(BaseAPIException):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BALANCE_001"
    default_message = "Insufficient funds"


class RateLimitError(BaseAPIException):
    """일일 보상 중복 수령"""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error_code = "RATE_LIMIT_001"
    default_message = "Rate limit exceeded"


class InternalServerError(BaseAPIException):
    pass
