"""테스트 공통 fixture"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-resume-builder-0123456789")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.auth import create_access_token  # noqa: E402
from app.domain.resume.schemas import ResumeData  # noqa: E402
from app.infra.db.models import Base  # noqa: E402
from app.infra.db.repository import ResumeRepository  # noqa: E402
from app.infra.db.session import get_session  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture
def engine():
    """테스트마다 새 인메모리 SQLite"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def repository(db_session) -> ResumeRepository:
    return ResumeRepository(db_session)


@pytest.fixture
def override_db(session_factory):
    """API 요청이 테스트 DB를 쓰도록 의존성 교체"""

    def _get_session():
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield
    app.dependency_overrides.pop(get_session, None)


@pytest_asyncio.fixture
async def async_client(override_db):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers() -> dict[str, str]:
    token = create_access_token("user-1", email="jane@example.com", name="Jane Doe")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers() -> dict[str, str]:
    token = create_access_token("user-2", email="john@example.com", name="John Roe")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_resume_data() -> dict:
    """엄격 검증을 통과하는 이력서 데이터 (camelCase)"""
    return {
        "personalInfo": {
            "firstName": "Jane",
            "lastName": "Doe",
            "title": "Backend Engineer",
            "email": "jane@example.com",
            "phone": "+1 555 0100",
            "location": "Seoul",
            "website": "https://jane.dev",
        },
        "summary": "Backend engineer with eight years of experience building APIs.",
        "experience": [
            {
                "id": "exp-1",
                "title": "Senior Engineer",
                "company": "Acme",
                "location": "Remote",
                "startDate": "2021-03",
                "endDate": "",
                "current": True,
                "bullets": ["Led the billing platform rewrite", "Cut p99 latency by 40%"],
            }
        ],
        "education": [
            {
                "id": "edu-1",
                "institution": "State University",
                "degree": "BSc",
                "field": "Computer Science",
                "startDate": "2012-09",
                "endDate": "2016-06",
                "gpa": "3.8",
            }
        ],
        "skills": {"technical": ["Python", "PostgreSQL", "FastAPI"], "soft": ["Mentoring"]},
        "projects": [
            {
                "id": "proj-1",
                "name": "resume-kit",
                "description": "PDF rendering toolkit",
                "technologies": ["Python", "reportlab"],
                "url": "https://github.com/jane/resume-kit",
            }
        ],
        "certifications": [
            {
                "id": "cert-1",
                "name": "AWS Solutions Architect",
                "issuer": "Amazon",
                "date": "2022-05",
            }
        ],
    }


@pytest.fixture
def sample_document(sample_resume_data) -> ResumeData:
    return ResumeData.model_validate(sample_resume_data)


@pytest.fixture
def sample_save_payload(sample_resume_data) -> dict:
    return {"title": "Backend Resume", "data": sample_resume_data, "templateId": "classic"}
