"""이력서 입력 검증 스키마

생성/수정/PDF 생성 전에 적용하는 엄격한(strict) 검증.
필수값, 이메일 형식, URL 형식을 확인한다.
"""

from typing import Any

from pydantic import AliasChoices, Field, ValidationInfo, field_validator

from app.domain.resume.constants import EMAIL_PATTERN, URL_PATTERN
from app.domain.resume.schemas.base import (
    Certification,
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeData,
)

REQUIRED_MESSAGES = {
    "first_name": "First name is required",
    "last_name": "Last name is required",
    "title": "Job title is required",
    "company": "Company name is required",
    "start_date": "Start date is required",
    "institution": "Institution is required",
    "degree": "Degree is required",
    "name": "Name is required",
    "description": "Description is required",
    "issuer": "Issuer is required",
    "date": "Date is required",
}


def _require(value: str, info: ValidationInfo) -> str:
    if not value.strip():
        raise ValueError(REQUIRED_MESSAGES.get(info.field_name, "Field is required"))
    return value


def _optional_url(value: str, message: str) -> str:
    if value and not URL_PATTERN.match(value):
        raise ValueError(message)
    return value


class PersonalInfoInput(PersonalInfo):
    @field_validator("first_name", "last_name")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return _require(v, info)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str) -> str:
        return _optional_url(v, "Invalid website URL")


class ExperienceInput(Experience):
    @field_validator("title", "company", "start_date")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return _require(v, info)


class EducationInput(Education):
    @field_validator("institution", "degree", "start_date")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return _require(v, info)


class ProjectInput(Project):
    @field_validator("name", "description")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return _require(v, info)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _optional_url(v, "Invalid project URL")


class CertificationInput(Certification):
    @field_validator("name", "issuer", "date")
    @classmethod
    def validate_required(cls, v: str, info: ValidationInfo) -> str:
        return _require(v, info)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return _optional_url(v, "Invalid certification URL")


class ResumeDataInput(ResumeData):
    """API로 들어오는 이력서 문서"""

    personal_info: PersonalInfoInput
    experience: list[ExperienceInput] = Field(
        default_factory=list,
        validation_alias=AliasChoices("experience", "experiences"),
    )
    education: list[EducationInput] = Field(default_factory=list)
    projects: list[ProjectInput] = Field(default_factory=list)
    certifications: list[CertificationInput] = Field(default_factory=list)

    @field_validator("section_order", mode="before")
    @classmethod
    def drop_malformed_section_order(cls, v: Any) -> Any:
        # 입력 단계에서는 잘못된 키를 버리지 않고 SectionKey 검증 에러로 돌려준다
        return v

    def to_document(self) -> ResumeData:
        """검증을 통과한 입력을 정규 문서 형태로 변환"""
        return ResumeData.model_validate(self.to_json_dict())


def validate_resume_data(payload: Any) -> ResumeData:
    """엄격 검증 후 정규 문서 반환

    Raises:
        pydantic.ValidationError: 검증 실패 시
    """
    return ResumeDataInput.model_validate(payload).to_document()
