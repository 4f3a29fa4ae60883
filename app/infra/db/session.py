from collections.abc import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.logging import get_logger
from app.infra.db.models import Base

logger = get_logger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """DATABASE_URL 기반 엔진 (최초 호출 시 생성)

    Raises:
        RuntimeError: DATABASE_URL 미설정
    """
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL이 설정되지 않았습니다")

        connect_args = {}
        if settings.database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        _engine = create_engine(
            settings.database_url,
            echo=settings.db_echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)
    return _session_factory


def get_session() -> Iterator[Session]:
    """요청 단위 세션 (FastAPI 의존성)"""
    with get_session_factory()() as session:
        yield session


def init_db(engine: Engine | None = None) -> None:
    """테이블 생성 (마이그레이션 없음)"""
    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info("데이터베이스 초기화 완료", dialect=engine.dialect.name)


def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
