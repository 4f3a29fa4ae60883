"""템플릿 레지스트리 및 HTML 렌더링

모든 템플릿은 같은 정규 ResumeData를 받는다. 알 수 없는 템플릿 id는 기본 템플릿으로 처리.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from app.core.logging import get_logger
from app.domain.resume.constants import DEFAULT_TEMPLATE_ID, SECTION_TITLES, URL_PATTERN
from app.domain.resume.formatting import contact_line, format_date, format_period
from app.domain.resume.schemas import ResumeData
from app.domain.resume.schemas.base import CamelModel
from app.domain.resume.sections import resolve_section_order

logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"


class TemplateInfo(CamelModel):
    """템플릿 메타데이터"""

    id: str
    name: str
    description: str
    category: str
    accent_color: str
    preview: str
    features: list[str] = []


TEMPLATE_REGISTRY: dict[str, TemplateInfo] = {
    info.id: info
    for info in [
        TemplateInfo(
            id="modern",
            name="Modern",
            description="Clean and contemporary design",
            category="professional",
            accent_color="#2563EB",
            preview="/templates/modern-preview.png",
            features=["Clean Layout", "Modern Typography", "Skill Highlights", "ATS Friendly"],
        ),
        TemplateInfo(
            id="classic",
            name="Classic",
            description="Traditional and timeless layout",
            category="traditional",
            accent_color="#1F2937",
            preview="/templates/classic-preview.png",
            features=["Professional Layout", "Traditional Format", "Easy to Read"],
        ),
        TemplateInfo(
            id="creative",
            name="Creative",
            description="Bold and artistic design",
            category="creative",
            accent_color="#7C3AED",
            preview="/templates/creative-preview.png",
            features=["Visual Appeal", "Color Accents", "Portfolio Focus"],
        ),
        TemplateInfo(
            id="minimal",
            name="Minimal",
            description="Simple and elegant",
            category="minimal",
            accent_color="#374151",
            preview="/templates/minimal-preview.png",
            features=["Minimal Design", "Content Focus", "Space Efficient"],
        ),
    ]
}


def list_templates() -> list[TemplateInfo]:
    return list(TEMPLATE_REGISTRY.values())


def is_registered_template(template_id: str | None) -> bool:
    return template_id in TEMPLATE_REGISTRY


def resolve_template_id(template_id: str | None) -> str:
    """등록된 id면 그대로, 아니면 기본 템플릿 id"""
    if template_id and template_id in TEMPLATE_REGISTRY:
        return template_id
    if template_id:
        logger.info("알 수 없는 템플릿, 기본값 사용", template_id=template_id)
    return DEFAULT_TEMPLATE_ID


def get_template(template_id: str | None) -> TemplateInfo:
    return TEMPLATE_REGISTRY[resolve_template_id(template_id)]


def is_safe_url(value: str | None) -> bool:
    """http(s) 링크만 href로 출력 (javascript: 등 차단)"""
    return bool(value) and bool(URL_PATTERN.match(value.strip()))


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["date"] = format_date
    env.globals["period"] = format_period
    env.tests["safe_url"] = is_safe_url
    return env


def _load(template_id: str) -> Template:
    return _environment().get_template(f"{template_id}.html.j2")


def render_html(data: ResumeData, template_id: str | None = None, accent_color: str | None = None) -> str:
    """이력서를 지정한 템플릿의 HTML로 렌더링"""
    info = get_template(template_id)
    sections = resolve_section_order(data.section_order)

    return _load(info.id).render(
        resume=data,
        info=data.personal_info,
        template=info,
        accent=accent_color or info.accent_color,
        sections=[key.value for key in sections],
        titles={key.value: title for key, title in SECTION_TITLES.items()},
        contact=contact_line(data.personal_info),
    )
