"""이력서 문서 스키마

저장, 초안, 렌더링에 공통으로 쓰는 관대한(lenient) 형태.
모든 필드에 빈 기본값이 있고, 스킬 표현은 여기서 한 번만 정규화한다.
"""

import uuid
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.core.logging import get_logger
from app.domain.resume.constants import DEFAULT_TEMPLATE_ID, SectionKey

logger = get_logger(__name__)


def new_item_id() -> str:
    """반복 섹션 항목 id (UUID4)"""
    return uuid.uuid4().hex


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


Text = Annotated[str, BeforeValidator(_none_to_empty)]


class CamelModel(BaseModel):
    """camelCase JSON <-> snake_case 속성"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PersonalInfo(CamelModel):
    """인적 사항"""

    first_name: Text = ""
    last_name: Text = ""
    title: Text = ""
    email: Text = ""
    phone: Text = ""
    location: Text = ""
    website: Text = ""
    linkedin: Text = ""
    github: Text = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)


class Experience(CamelModel):
    """경력 항목"""

    id: str = Field(default_factory=new_item_id)
    title: Text = ""
    company: Text = ""
    location: Text = ""
    start_date: Text = ""
    end_date: Text = ""
    current: bool = False
    bullets: list[str] = Field(default_factory=list)


class Education(CamelModel):
    """학력 항목"""

    id: str = Field(default_factory=new_item_id)
    institution: Text = ""
    degree: Text = ""
    field: Text = ""
    start_date: Text = ""
    end_date: Text = ""
    gpa: Text = ""


class Project(CamelModel):
    """프로젝트 항목"""

    id: str = Field(default_factory=new_item_id)
    name: Text = ""
    description: Text = ""
    technologies: list[str] = Field(default_factory=list)
    url: Text = ""
    start_date: Text = ""
    end_date: Text = ""


class Certification(CamelModel):
    """자격증 항목"""

    id: str = Field(default_factory=new_item_id)
    name: Text = ""
    issuer: Text = ""
    date: Text = ""
    url: Text = ""
    expiry_date: Text = ""


class Skills(CamelModel):
    """스킬 (정규화된 단일 형태)"""

    technical: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.technical) + len(self.soft)


def _dedupe(names: list[Any]) -> list[Any]:
    """공백 제거, 빈 값 제외, 순서 유지 중복 제거"""
    seen = set()
    result = []
    for name in names:
        if isinstance(name, str):
            name = name.strip()
            if not name:
                continue
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
        result.append(name)
    return result


def normalize_skills(value: Any) -> Any:
    """여러 스킬 표현을 {technical, soft} 하나로 정규화

    허용 형태:
        - {"technical": [...], "soft": [...]}
        - ["Python", "SQL"]  -> technical
        - [{"name": "Teamwork", "category": "soft"}, ...]
        - {"technical": [...], "soft": [...], "skills": [{...}, ...]}

    그 밖의 형태는 그대로 돌려보내 pydantic 검증에서 실패하게 둔다.
    """
    if value is None:
        return {"technical": [], "soft": []}
    if isinstance(value, Skills):
        return value

    technical: list[Any] = []
    soft: list[Any] = []

    if isinstance(value, list):
        entries = value
    elif isinstance(value, dict):
        technical.extend(value.get("technical") or [])
        soft.extend(value.get("soft") or [])
        entries = value.get("skills") or []
    else:
        return value

    for entry in entries:
        if isinstance(entry, str):
            technical.append(entry)
        elif isinstance(entry, dict):
            name = entry.get("name")
            if not isinstance(name, str):
                continue
            if str(entry.get("category") or "").strip().lower() == "soft":
                soft.append(name)
            else:
                technical.append(name)

    return {"technical": _dedupe(technical), "soft": _dedupe(soft)}


class ResumeData(CamelModel):
    """이력서 문서"""

    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    summary: Text = ""
    experience: list[Experience] = Field(
        default_factory=list,
        validation_alias=AliasChoices("experience", "experiences"),
    )
    education: list[Education] = Field(default_factory=list)
    skills: Skills = Field(default_factory=Skills)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    section_order: list[SectionKey] | None = None

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills_shape(cls, v: Any) -> Any:
        return normalize_skills(v)

    @field_validator("section_order", mode="before")
    @classmethod
    def drop_malformed_section_order(cls, v: Any) -> Any:
        """알 수 없는 섹션 키가 섞인 순서는 버리고 기본 순서를 쓰게 둔다"""
        if v is None:
            return None
        valid = {key.value for key in SectionKey}
        if not isinstance(v, list) or any(
            (item.value if isinstance(item, SectionKey) else item) not in valid for item in v
        ):
            logger.warning("잘못된 섹션 순서 무시", section_order=str(v))
            return None
        return v

    def to_json_dict(self) -> dict:
        """저장/전송용 camelCase JSON 딕셔너리"""
        return self.model_dump(by_alias=True, mode="json")


class ResumeDraft(ResumeData):
    """로컬 초안 (문서 + 선택한 템플릿)"""

    selected_template: str = DEFAULT_TEMPLATE_ID

    def to_document(self) -> ResumeData:
        return ResumeData.model_validate(self.model_dump(exclude={"selected_template"}))
