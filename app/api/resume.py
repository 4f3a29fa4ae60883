from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import HTMLResponse, Response
from pydantic import ValidationError as PydanticValidationError

from app.api.deps import get_resume_service, parse_resume_id
from app.api.schemas import (
    RenderRequest,
    ResumeCreate,
    ResumeUpdate,
    serialize_resume,
    success_body,
)
from app.core.auth import Principal, get_principal
from app.core.exceptions import ValidationError, format_validation_errors
from app.core.logging import get_logger
from app.domain.resume.formatting import pdf_filename
from app.domain.resume.schemas import ResumeData, validate_resume_data
from app.domain.resume.service import ResumeService, record_document
from app.domain.resume.templates import list_templates, render_html, resolve_template_id
from app.infra.pdf.renderer import render_pdf

router = APIRouter(prefix="/resumes", tags=["resumes"], dependencies=[Depends(get_principal)])
logger = get_logger(__name__)


def _split_render_body(payload: dict[str, Any]) -> tuple[dict[str, Any], str | None]:
    """{data, templateId} 형태와 ResumeData 단독 형태를 모두 허용"""
    if isinstance(payload.get("data"), dict):
        request = RenderRequest.model_validate(payload)
        return request.data, request.template_id
    return payload, payload.get("templateId")


def _parse_render_body(payload: dict[str, Any], strict: bool) -> tuple[ResumeData, str]:
    try:
        data, template_id = _split_render_body(payload)
        document = validate_resume_data(data) if strict else ResumeData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Invalid resume data", format_validation_errors(e.errors())) from e
    return document, resolve_template_id(template_id)


def _pdf_response(document: ResumeData, template_id: str) -> Response:
    filename = pdf_filename(document.personal_info, template_id)
    return Response(
        content=render_pdf(document, template_id),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# 고정 경로 (/{resume_id} 보다 먼저 등록)


@router.get("/templates")
async def get_templates():
    templates = [info.model_dump(by_alias=True) for info in list_templates()]
    return success_body({"templates": templates})


@router.get("/stats")
def get_stats(
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    return success_body({"stats": service.stats(principal.id)})


@router.post("/generate-pdf")
def generate_pdf(payload: dict[str, Any] = Body(...)):
    """이력서 데이터로 PDF 생성 (엄격 검증)"""
    document, template_id = _parse_render_body(payload, strict=True)
    logger.info("PDF 생성 요청", template_id=template_id)
    return _pdf_response(document, template_id)


@router.post("/preview", response_class=HTMLResponse)
def preview(payload: dict[str, Any] = Body(...)):
    """작성 중인 초안 미리보기 (느슨한 검증)"""
    document, template_id = _parse_render_body(payload, strict=False)
    return HTMLResponse(render_html(document, template_id))


@router.get("/user/all")
def list_resumes(
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    resumes = [serialize_resume(record) for record in service.list(principal.id)]
    return success_body({"resumes": resumes})


@router.post("", status_code=201)
def create_resume(
    request: ResumeCreate,
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.create(
        user_id=principal.id,
        title=request.title,
        data=request.data.to_document(),
        template_id=request.template_id,
        is_public=request.is_public,
    )
    logger.info("이력서 생성", resume_id=record.id, template_id=record.template_id)
    return success_body({"resume": serialize_resume(record)}, "Resume created successfully")


# 경로 파라미터 라우트


@router.get("/{resume_id}")
def get_resume(
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.get(resume_id, principal.id)
    return success_body({"resume": serialize_resume(record)})


@router.get("/{resume_id}/preview", response_class=HTMLResponse)
def preview_resume(
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.get(resume_id, principal.id)
    return HTMLResponse(render_html(record_document(record), record.template_id))


@router.get("/{resume_id}/pdf")
def download_resume_pdf(
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.get(resume_id, principal.id)
    return _pdf_response(record_document(record), resolve_template_id(record.template_id))


@router.put("/{resume_id}")
def update_resume(
    request: ResumeUpdate,
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.update(resume_id, principal.id, request.changes(), request.version)
    return success_body({"resume": serialize_resume(record)}, "Resume updated successfully")


@router.delete("/{resume_id}")
def delete_resume(
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    service.delete(resume_id, principal.id)
    return success_body(message="Resume deleted successfully")


@router.post("/{resume_id}/duplicate", status_code=201)
def duplicate_resume(
    resume_id: int = Depends(parse_resume_id),
    principal: Principal = Depends(get_principal),
    service: ResumeService = Depends(get_resume_service),
):
    record = service.duplicate(resume_id, principal.id)
    return success_body({"resume": serialize_resume(record)}, "Resume duplicated successfully")
