"""
요청 로깅 미들웨어

요청마다 request_id를 바인딩하고, 끝나면 라우트 템플릿 기준으로 한 줄 로그를 남긴다.
X-Request-ID는 클라이언트 값이 형식에 맞을 때만 이어받는다.
"""

import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.context import bind_request, clear_context
from app.core.logging import get_logger

logger = get_logger(__name__)

UNLOGGED_PATHS = frozenset({"/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico"})
REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def accepted_request_id(value: str | None) -> str | None:
    if value and REQUEST_ID_PATTERN.fullmatch(value):
        return value
    return None


def route_template(request: Request) -> str:
    """매칭된 라우트 경로 (/api/resumes/{resume_id}), 없으면 실제 경로"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else "unknown"


def _level_for(status_code: int) -> str:
    if status_code >= 500:
        return "error"
    if status_code >= 400:
        return "warning"
    return "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS" or request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        request_id = bind_request(accepted_request_id(request.headers.get(REQUEST_ID_HEADER)))
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "요청 처리 중 예외",
                method=request.method,
                route=route_template(request),
                error=type(e).__name__,
                duration_ms=_elapsed_ms(started),
            )
            raise
        else:
            duration_ms = _elapsed_ms(started)
            principal = getattr(request.state, "principal", None)
            getattr(logger, _level_for(response.status_code))(
                "요청 완료",
                method=request.method,
                route=route_template(request),
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
                user_id=principal.id if principal else None,
                client_ip=client_ip(request),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"
            return response
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
