"""이력서 저장소

모든 조회/변경은 (resume_id, user_id) 쌍으로 소유자 범위가 제한된다.
DB 오류는 그대로 전파되어 HTTP 계층에서 500으로 변환된다.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import VersionConflictError
from app.core.logging import get_logger
from app.domain.resume.constants import DEFAULT_TEMPLATE_ID
from app.infra.db.models import ResumeRecord, utcnow

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("title", "data", "template_id", "is_public")


class ResumeRepository:
    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        user_id: str,
        title: str,
        data: dict,
        template_id: str = DEFAULT_TEMPLATE_ID,
        is_public: bool = False,
    ) -> ResumeRecord:
        record = ResumeRecord(
            user_id=user_id,
            title=title,
            data=data,
            template_id=template_id,
            is_public=is_public,
        )
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info("이력서 저장", resume_id=record.id)
        return record

    def get(self, resume_id: int, user_id: str) -> ResumeRecord | None:
        stmt = select(ResumeRecord).where(
            ResumeRecord.id == resume_id,
            ResumeRecord.user_id == user_id,
        )
        return self.session.scalars(stmt).first()

    def update(
        self,
        resume_id: int,
        user_id: str,
        changes: dict[str, Any],
        expected_version: int | None = None,
    ) -> ResumeRecord | None:
        """전달된 필드만 병합, version 증가

        Raises:
            VersionConflictError: expected_version이 저장된 version과 다른 경우
        """
        record = self.get(resume_id, user_id)
        if record is None:
            return None

        if expected_version is not None and expected_version != record.version:
            raise VersionConflictError(expected_version, record.version)

        for field in UPDATABLE_FIELDS:
            if field in changes:
                setattr(record, field, changes[field])
        record.updated_at = utcnow()

        try:
            self.session.commit()
        except StaleDataError:
            # 읽은 뒤 다른 세션이 먼저 커밋한 경우
            self.session.rollback()
            current = self.get(resume_id, user_id)
            raise VersionConflictError(
                expected_version if expected_version is not None else record.version,
                current.version if current else record.version,
            ) from None

        self.session.refresh(record)
        return record

    def delete(self, resume_id: int, user_id: str) -> bool:
        record = self.get(resume_id, user_id)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def list_for_user(self, user_id: str) -> list[ResumeRecord]:
        stmt = (
            select(ResumeRecord)
            .where(ResumeRecord.user_id == user_id)
            .order_by(ResumeRecord.updated_at.desc(), ResumeRecord.id.desc())
        )
        return list(self.session.scalars(stmt))
