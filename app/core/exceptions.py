from enum import Enum
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_ID = "INVALID_ID"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    VERSION_CONFLICT = "VERSION_CONFLICT"
    PDF_RENDER_ERROR = "PDF_RENDER_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: Any = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(CustomException):
    def __init__(self, message: str = "Invalid data", detail: Any = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message=message,
            detail=detail,
        )


class InvalidIdError(CustomException):
    def __init__(self, detail: Any = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_ID,
            message="Invalid resume ID",
            detail=detail,
        )


class UnauthorizedError(CustomException):
    def __init__(self, detail: Any = None):
        super().__init__(
            status_code=401,
            error_code=ErrorCode.UNAUTHORIZED,
            message="Unauthorized access",
            detail=detail,
        )


class NotFoundError(CustomException):
    def __init__(self, message: str = "Resume not found", detail: Any = None):
        super().__init__(
            status_code=404,
            error_code=ErrorCode.NOT_FOUND,
            message=message,
            detail=detail,
        )


class VersionConflictError(CustomException):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            status_code=409,
            error_code=ErrorCode.VERSION_CONFLICT,
            message="Resume was modified by another session",
            detail={"expectedVersion": expected, "currentVersion": actual},
        )
        self.expected = expected
        self.actual = actual


class PdfRenderError(CustomException):
    def __init__(self, detail: Any = None):
        super().__init__(
            status_code=500,
            error_code=ErrorCode.PDF_RENDER_ERROR,
            message="Failed to generate PDF",
            detail=detail,
        )


def error_body(message: str, details: Any = None) -> dict:
    """에러 응답 본문 생성"""
    content: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        content["details"] = details
    return content


def format_validation_errors(errors: list[dict]) -> list[dict]:
    """pydantic 에러 목록을 필드 단위 에러로 변환

    loc의 "body" 접두어는 제거하고 점(.)으로 연결한 경로를 field로 사용
    """
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        formatted.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return formatted


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        details = exc.detail
        if exc.status_code >= 500 and settings.is_production:
            details = None

        if exc.status_code >= 500:
            logger.error("요청 처리 실패", error_code=str(exc.error_code), detail=str(exc.detail))

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        details = format_validation_errors(exc.errors())
        logger.info("입력값 검증 실패", path=request.url.path, errors=len(details))
        return JSONResponse(status_code=400, content=error_body("Invalid data", details))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.error("데이터베이스 오류", path=request.url.path, error=type(exc).__name__)
        details = None if settings.is_production else str(exc)
        return JSONResponse(status_code=500, content=error_body("Internal server error", details))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("처리되지 않은 예외", path=request.url.path, error=type(exc).__name__)
        return JSONResponse(status_code=500, content=error_body("Internal server error"))
