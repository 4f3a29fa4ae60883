"""
structlog 기반 로깅 설정

- 개발 환경: 컬러 콘솔 출력 / 프로덕션: JSON 한 줄
- request_id, user_id는 contextvars에서 병합
- 프로덕션에서는 이력서 개인정보와 인증 값을 가린다
"""

import logging
import re
import sys
from typing import Any

import structlog

from app.core.config import settings

MASK = "***"

# 문자열 값 안의 민감 정보
SENSITIVE_PATTERNS = [
    (re.compile(r"(Bearer\s+)[^\s]+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), MASK),
    (re.compile(r"((?:token|secret|password)=)[^&\s]+", re.IGNORECASE), rf"\1{MASK}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/\s]+:)[^@\s]+(@)"), rf"\1{MASK}\2"),
    (re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*(@[A-Za-z0-9.-]+\.[A-Za-z]{2,})"), rf"\1{MASK}\2"),
]

# 값 전체를 가리는 키 (인증 값, 연락처, 이력서 본문)
REDACTED_KEYS = frozenset(
    {
        "authorization",
        "password",
        "jwt_secret",
        "token",
        "phone",
        "email",
        "data",
        "resume_data",
        "personal_info",
        "personalInfo",
    }
)

NOISY_LOGGERS = (
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "reportlab",
    "multipart",
    "anyio",
)


def mask_text(value: str) -> str:
    for pattern, replacement in SENSITIVE_PATTERNS:
        value = pattern.sub(replacement, value)
    return value


def _redact(key: str, value: Any) -> Any:
    if key in REDACTED_KEYS:
        return MASK
    if isinstance(value, str):
        return mask_text(value)
    if isinstance(value, dict):
        return {k: _redact(str(k), v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_redact(key, item) for item in value]
    return value


def redact_processor(logger: logging.Logger, method_name: str, event_dict: dict) -> dict:
    """프로덕션 로그의 민감 정보 마스킹 (event 메시지 제외)"""
    if not settings.is_production:
        return event_dict

    return {
        key: value if key == "event" else _redact(key, value)
        for key, value in event_dict.items()
    }


def setup_logging(level: str | None = None) -> None:
    """structlog 설정 초기화"""
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    shared_processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        redact_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # uvicorn 로그도 루트 핸들러(structlog 포맷)로 전달
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).handlers.clear()
        logging.getLogger(logger_name).propagate = True

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
