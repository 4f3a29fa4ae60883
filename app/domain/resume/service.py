from collections import Counter

from app.core.exceptions import NotFoundError
from app.core.logging import get_logger
from app.domain.resume.completion import completion_percentage
from app.domain.resume.constants import COPY_TITLE_SUFFIX, DEFAULT_TEMPLATE_ID
from app.domain.resume.schemas import ResumeData
from app.infra.db.models import ResumeRecord
from app.infra.db.repository import ResumeRepository

logger = get_logger(__name__)


def record_document(record: ResumeRecord) -> ResumeData:
    """저장된 data 컬럼을 정규 ResumeData로 해석 (느슨한 검증)"""
    return ResumeData.model_validate(record.data or {})


class ResumeService:
    """소유자 범위 이력서 CRUD

    모든 메서드는 user_id로 범위가 제한되며, 없는 이력서와
    다른 사용자의 이력서는 구분하지 않고 NotFoundError로 처리한다.
    """

    def __init__(self, repository: ResumeRepository):
        self.repository = repository

    def create(
        self,
        user_id: str,
        title: str,
        data: ResumeData,
        template_id: str = DEFAULT_TEMPLATE_ID,
        is_public: bool = False,
    ) -> ResumeRecord:
        return self.repository.create(
            user_id=user_id,
            title=title,
            data=data.to_json_dict(),
            template_id=template_id,
            is_public=is_public,
        )

    def get(self, resume_id: int, user_id: str) -> ResumeRecord:
        record = self.repository.get(resume_id, user_id)
        if record is None:
            raise NotFoundError()
        return record

    def update(
        self,
        resume_id: int,
        user_id: str,
        changes: dict,
        expected_version: int | None = None,
    ) -> ResumeRecord:
        if isinstance(changes.get("data"), ResumeData):
            changes = {**changes, "data": changes["data"].to_json_dict()}

        record = self.repository.update(resume_id, user_id, changes, expected_version)
        if record is None:
            raise NotFoundError()
        logger.info("이력서 수정", resume_id=resume_id, version=record.version)
        return record

    def delete(self, resume_id: int, user_id: str) -> None:
        if not self.repository.delete(resume_id, user_id):
            raise NotFoundError()
        logger.info("이력서 삭제", resume_id=resume_id)

    def list(self, user_id: str) -> list[ResumeRecord]:
        return self.repository.list_for_user(user_id)

    def duplicate(self, resume_id: int, user_id: str) -> ResumeRecord:
        """제목 뒤에 (Copy)를 붙인 사본 생성, 항상 비공개

        읽기 후 생성이며 원자적이지 않다.
        """
        original = self.get(resume_id, user_id)
        copy = self.repository.create(
            user_id=user_id,
            title=f"{original.title}{COPY_TITLE_SUFFIX}",
            data=dict(original.data or {}),
            template_id=original.template_id or DEFAULT_TEMPLATE_ID,
            is_public=False,
        )
        logger.info("이력서 복제", source_id=resume_id, resume_id=copy.id)
        return copy

    def stats(self, user_id: str) -> dict:
        """저장된 이력서 기준 사용자 통계"""
        records = self.list(user_id)
        rates = [completion_percentage(record_document(record)) for record in records]
        completed = sum(1 for rate in rates if rate == 100)

        templates = Counter(record.template_id for record in records)
        popular = templates.most_common(1)[0][0] if templates else DEFAULT_TEMPLATE_ID
        last_activity = max((record.updated_at for record in records), default=None)

        return {
            "totalResumes": len(records),
            "completedResumes": completed,
            "draftResumes": len(records) - completed,
            "popularTemplate": popular,
            "averageCompletionRate": round(sum(rates) / len(rates)) if rates else 0,
            "lastActivity": last_activity.isoformat() if last_activity else None,
        }
