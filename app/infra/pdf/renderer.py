"""이력서 PDF 렌더링 (reportlab)

템플릿 id별 스타일 세트 4종, 알 수 없는 id는 modern 스타일.
섹션 순서와 빈 섹션 생략 규칙은 HTML 미리보기와 같다.
"""

import io
from dataclasses import dataclass
from html import escape
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.core.config import settings
from app.core.exceptions import PdfRenderError
from app.core.logging import get_logger
from app.domain.resume.constants import DEFAULT_TEMPLATE_ID, SECTION_TITLES, SectionKey
from app.domain.resume.formatting import contact_line, format_date, format_period
from app.domain.resume.schemas import ResumeData
from app.domain.resume.sections import resolve_section_order

logger = get_logger(__name__)


@dataclass(frozen=True)
class PdfStyleSet:
    accent: str
    name_color: str
    name_size: float
    contact_color: str
    section_color: str
    section_size: float = 13
    header_background: str | None = None
    section_background: str | None = None
    uppercase_sections: bool = False
    font: str = "Helvetica"
    bold_font: str = "Helvetica-Bold"


STYLE_SETS: dict[str, PdfStyleSet] = {
    "modern": PdfStyleSet(
        accent="#2563EB",
        name_color="#FFFFFF",
        name_size=24,
        contact_color="#FFFFFF",
        section_color="#2563EB",
        header_background="#2563EB",
    ),
    "classic": PdfStyleSet(
        accent="#1F2937",
        name_color="#000000",
        name_size=24,
        contact_color="#666666",
        section_color="#000000",
        uppercase_sections=True,
        font="Times-Roman",
        bold_font="Times-Bold",
    ),
    "creative": PdfStyleSet(
        accent="#7C3AED",
        name_color="#FFFFFF",
        name_size=26,
        contact_color="#FFFFFF",
        section_color="#7C3AED",
        header_background="#7C3AED",
        section_background="#F3E8FF",
    ),
    "minimal": PdfStyleSet(
        accent="#374151",
        name_color="#374151",
        name_size=20,
        contact_color="#6B7280",
        section_color="#374151",
        section_size=11,
    ),
}


def get_style_set(template_id: str | None) -> tuple[str, PdfStyleSet]:
    key = template_id if template_id in STYLE_SETS else DEFAULT_TEMPLATE_ID
    return key, STYLE_SETS[key]


def build_pdf_styles(style_set: PdfStyleSet) -> dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    text = colors.HexColor("#333333")

    return {
        "name": ParagraphStyle(
            "name",
            parent=sample["Title"],
            fontName=style_set.bold_font,
            fontSize=style_set.name_size,
            leading=style_set.name_size + 4,
            textColor=colors.HexColor(style_set.name_color),
            alignment=0,
            spaceAfter=2,
        ),
        "headline": ParagraphStyle(
            "headline",
            parent=sample["Normal"],
            fontName=style_set.font,
            fontSize=12,
            leading=15,
            textColor=colors.HexColor(style_set.contact_color),
        ),
        "contact": ParagraphStyle(
            "contact",
            parent=sample["Normal"],
            fontName=style_set.font,
            fontSize=9.5,
            leading=12,
            textColor=colors.HexColor(style_set.contact_color),
        ),
        "section": ParagraphStyle(
            "section",
            parent=sample["Heading3"],
            fontName=style_set.bold_font,
            fontSize=style_set.section_size,
            leading=style_set.section_size + 3,
            textColor=colors.HexColor(style_set.section_color),
            spaceBefore=8,
            spaceAfter=4,
        ),
        "item_title": ParagraphStyle(
            "item_title",
            parent=sample["Normal"],
            fontName=style_set.bold_font,
            fontSize=11,
            leading=14,
            textColor=text,
        ),
        "meta": ParagraphStyle(
            "meta",
            parent=sample["Normal"],
            fontName=style_set.font,
            fontSize=9.5,
            leading=12,
            textColor=colors.HexColor("#666666"),
            spaceAfter=2,
        ),
        "body": ParagraphStyle(
            "body",
            parent=sample["Normal"],
            fontName=style_set.font,
            fontSize=10,
            leading=14,
            textColor=text,
            spaceAfter=3,
        ),
        "bullet": ParagraphStyle(
            "bullet",
            parent=sample["Normal"],
            fontName=style_set.font,
            fontSize=10,
            leading=14,
            textColor=text,
            leftIndent=14,
            bulletIndent=2,
            spaceAfter=2,
        ),
    }


def _p(value: str, style: ParagraphStyle, **kwargs) -> Paragraph:
    return Paragraph(escape(value), style, **kwargs)


def _header(data: ResumeData, style_set: PdfStyleSet, styles: dict, width: float) -> list[Any]:
    info = data.personal_info
    rows = [_p(info.full_name, styles["name"])]
    if info.title.strip():
        rows.append(_p(info.title, styles["headline"]))
    contact = contact_line(info)
    if contact:
        rows.append(_p(contact, styles["contact"]))

    if style_set.header_background is None:
        return [*rows, HRFlowable(width="100%", color=colors.HexColor(style_set.accent), thickness=1, spaceBefore=4, spaceAfter=6)]

    table = Table([[row] for row in rows], colWidths=[width])
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor(style_set.header_background)),
                ("LEFTPADDING", (0, 0), (-1, -1), 14),
                ("RIGHTPADDING", (0, 0), (-1, -1), 14),
                ("TOPPADDING", (0, 0), (-1, 0), 12),
                ("BOTTOMPADDING", (0, -1), (-1, -1), 12),
            ]
        )
    )
    return [table, Spacer(1, 8)]


def _section_title(title: str, style_set: PdfStyleSet, styles: dict, width: float) -> list[Any]:
    text = title.upper() if style_set.uppercase_sections else title
    heading = _p(text, styles["section"])

    if style_set.section_background:
        table = Table([[heading]], colWidths=[width])
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor(style_set.section_background)),
                    ("LEFTPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        return [table, Spacer(1, 4)]

    flowables: list[Any] = [heading]
    if style_set.uppercase_sections:
        flowables.append(HRFlowable(width="100%", color=colors.HexColor(style_set.accent), thickness=0.6, spaceAfter=4))
    return flowables


def _entry(title: str, meta: str, styles: dict) -> list[Any]:
    flowables: list[Any] = []
    if title:
        flowables.append(_p(title, styles["item_title"]))
    if meta:
        flowables.append(_p(meta, styles["meta"]))
    return flowables


def _join(*parts: str, separator: str = " | ") -> str:
    return separator.join(part for part in parts if part and part.strip())


def _section_body(key: SectionKey, data: ResumeData, styles: dict) -> list[Any]:
    """섹션 본문, 비어 있으면 빈 리스트"""
    story: list[Any] = []

    if key == SectionKey.SUMMARY:
        if data.summary.strip():
            story.append(_p(data.summary, styles["body"]))

    elif key == SectionKey.EXPERIENCE:
        for exp in data.experience:
            period = format_period(exp.start_date, exp.end_date, exp.current)
            story += _entry(_join(exp.title, exp.company, separator=" - "), _join(exp.location, period), styles)
            for bullet in exp.bullets:
                if bullet.strip():
                    story.append(_p(bullet, styles["bullet"], bulletText="•"))
            story.append(Spacer(1, 4))

    elif key == SectionKey.EDUCATION:
        for edu in data.education:
            degree = _join(edu.degree, edu.field, separator=" in ")
            gpa = f"GPA: {edu.gpa}" if edu.gpa.strip() else ""
            story += _entry(_join(degree, edu.institution, separator=" - "), _join(format_period(edu.start_date, edu.end_date), gpa), styles)
            story.append(Spacer(1, 4))

    elif key == SectionKey.SKILLS:
        if data.skills.technical:
            story.append(Paragraph(f"<b>Technical:</b> {escape(', '.join(data.skills.technical))}", styles["body"]))
        if data.skills.soft:
            story.append(Paragraph(f"<b>Soft:</b> {escape(', '.join(data.skills.soft))}", styles["body"]))

    elif key == SectionKey.PROJECTS:
        for project in data.projects:
            story += _entry(project.name, _join(", ".join(project.technologies), project.url), styles)
            if project.description.strip():
                story.append(_p(project.description, styles["body"]))
            story.append(Spacer(1, 4))

    elif key == SectionKey.CERTIFICATIONS:
        for cert in data.certifications:
            expiry = f"Expires {format_date(cert.expiry_date)}" if cert.expiry_date.strip() else ""
            story += _entry(cert.name, _join(cert.issuer, format_date(cert.date), expiry), styles)

    return story


def build_story(data: ResumeData, template_id: str | None, width: float) -> list[Any]:
    _, style_set = get_style_set(template_id)
    styles = build_pdf_styles(style_set)

    # 인적 사항은 순서와 관계없이 항상 머리글
    story = _header(data, style_set, styles, width)
    for key in resolve_section_order(data.section_order):
        if key == SectionKey.PERSONAL:
            continue
        body = _section_body(key, data, styles)
        if not body:
            continue
        story += _section_title(SECTION_TITLES[key], style_set, styles, width)
        story += body
    return story


def render_pdf(data: ResumeData, template_id: str | None = None) -> bytes:
    """이력서를 A4 PDF 바이트로 렌더링

    Raises:
        PdfRenderError: reportlab 렌더링 실패
    """
    template_key, _ = get_style_set(template_id)
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=40,
        rightMargin=40,
        topMargin=36,
        bottomMargin=36,
        title=f"{data.personal_info.full_name or 'Resume'} Resume",
        author=settings.pdf_author,
    )

    try:
        doc.build(build_story(data, template_key, doc.width))
    except Exception as e:
        logger.error("PDF 렌더링 실패", template_id=template_key, error=str(e))
        raise PdfRenderError(detail=str(e)) from e

    pdf_bytes = output.getvalue()
    logger.info("PDF 생성 완료", template_id=template_key, size=len(pdf_bytes))
    return pdf_bytes
