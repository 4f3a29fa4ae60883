"""resume-builder 실행 진입점"""

import sys

import uvicorn

from app.core.config import settings
from app.core.logging import get_logger, setup_logging


def run() -> None:
    """필수 설정 확인 후 uvicorn 실행, DATABASE_URL이 없으면 종료 코드 1"""
    setup_logging()
    logger = get_logger(__name__)

    missing = settings.validate_for_startup()
    if missing:
        logger.error("필수 설정 누락, 서버를 시작하지 않음", missing=missing)
        sys.exit(1)

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
