"""이력서 API 스키마"""

from datetime import datetime
from typing import Any

from pydantic import ConfigDict, Field, field_validator

from app.domain.resume.constants import DEFAULT_TEMPLATE_ID
from app.domain.resume.schemas import ResumeDataInput
from app.domain.resume.schemas.base import CamelModel


def _require_title(v: str) -> str:
    if not v.strip():
        raise ValueError("Resume title is required")
    return v


class ResumeCreate(CamelModel):
    """이력서 저장 요청"""

    title: str = Field(max_length=255)
    data: ResumeDataInput
    template_id: str = DEFAULT_TEMPLATE_ID
    is_public: bool = False

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_title(v)


class ResumeUpdate(CamelModel):
    """이력서 수정 요청

    전달된 필드만 반영. version을 주면 저장된 version과 같을 때만 수정된다.
    """

    title: str | None = Field(default=None, max_length=255)
    data: ResumeDataInput | None = None
    template_id: str | None = None
    is_public: bool | None = None
    version: int | None = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str | None) -> str | None:
        return None if v is None else _require_title(v)

    def changes(self) -> dict[str, Any]:
        """repository에 넘길 변경 필드 (snake_case, version 제외)"""
        changes = self.model_dump(exclude_unset=True, exclude={"version", "data"})
        if "data" in self.model_fields_set and self.data is not None:
            changes["data"] = self.data.to_document()
        return {key: value for key, value in changes.items() if value is not None}


class RenderRequest(CamelModel):
    """PDF 생성 / 미리보기 요청 본문 ({data, templateId})"""

    data: dict[str, Any]
    template_id: str | None = None


class ResumeOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    title: str
    data: dict[str, Any]
    template_id: str
    is_public: bool
    version: int
    created_at: datetime
    updated_at: datetime


def serialize_resume(record: Any) -> dict:
    return ResumeOut.model_validate(record).model_dump(by_alias=True, mode="json")


def success_body(data: Any = None, message: str | None = None) -> dict:
    """성공 응답 본문 {success, data?, message?}"""
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body
