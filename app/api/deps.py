import re

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidIdError, NotFoundError
from app.domain.resume.service import ResumeService
from app.infra.db.repository import ResumeRepository
from app.infra.db.session import get_session

RESUME_ID_PATTERN = re.compile(r"^-?\d+$")

# resumes.id 는 32비트 정수 컬럼
RESUME_ID_MIN = -(2**31)
RESUME_ID_MAX = 2**31 - 1


def get_resume_service(session: Session = Depends(get_session)) -> ResumeService:
    return ResumeService(ResumeRepository(session))


def parse_resume_id(resume_id: str) -> int:
    """경로의 이력서 id를 정수로 변환

    Raises:
        InvalidIdError: 정수가 아닌 경우 (400)
        NotFoundError: 컬럼 범위를 벗어나 존재할 수 없는 id (404)
    """
    if not RESUME_ID_PATTERN.match(resume_id):
        raise InvalidIdError()

    value = int(resume_id)
    if not RESUME_ID_MIN <= value <= RESUME_ID_MAX:
        raise NotFoundError()
    return value
