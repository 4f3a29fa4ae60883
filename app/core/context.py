"""
요청 컨텍스트

request_id, user_id를 structlog contextvars에 바인딩한다.
바인딩된 값은 merge_contextvars 프로세서를 통해 모든 로그에 포함된다.
"""

import uuid

from structlog.contextvars import bind_contextvars, clear_contextvars

REQUEST_ID_LENGTH = 8


def new_request_id() -> str:
    return uuid.uuid4().hex[:REQUEST_ID_LENGTH]


def bind_request(request_id: str | None = None) -> str:
    """새 요청 시작: 이전 값을 비우고 request_id 바인딩 (없으면 생성)"""
    request_id = request_id or new_request_id()
    clear_contextvars()
    bind_contextvars(request_id=request_id)
    return request_id


def bind_user(user_id: str) -> None:
    bind_contextvars(user_id=user_id)


def clear_context() -> None:
    clear_contextvars()
