"""이력서 도메인 상수

섹션 키, 기본 섹션 순서, 편집 단계, 완성도 판단 기준 등
"""

import re
from enum import Enum


class SectionKey(str, Enum):
    """이력서 섹션 키"""

    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    SKILLS = "skills"
    EDUCATION = "education"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"


DEFAULT_SECTION_ORDER: tuple[SectionKey, ...] = (
    SectionKey.PERSONAL,
    SectionKey.SUMMARY,
    SectionKey.EXPERIENCE,
    SectionKey.SKILLS,
    SectionKey.EDUCATION,
    SectionKey.PROJECTS,
    SectionKey.CERTIFICATIONS,
)

SECTION_TITLES = {
    SectionKey.PERSONAL: "Personal Information",
    SectionKey.SUMMARY: "Professional Summary",
    SectionKey.EXPERIENCE: "Work Experience",
    SectionKey.SKILLS: "Skills",
    SectionKey.EDUCATION: "Education",
    SectionKey.PROJECTS: "Projects",
    SectionKey.CERTIFICATIONS: "Certifications",
}


class WizardStep(str, Enum):
    """편집기 단계"""

    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    CERTIFICATIONS = "certifications"
    PROJECTS = "projects"
    PREVIEW = "preview"


WIZARD_STEPS: tuple[WizardStep, ...] = tuple(WizardStep)

DEFAULT_TEMPLATE_ID = "modern"

# 완성도 휴리스틱
SUMMARY_MIN_WORDS = 20
SKILLS_MIN_COUNT = 3
COMPLETION_PERSONAL_FIELDS = ("first_name", "last_name", "email", "phone", "title")
STEP_PERSONAL_REQUIRED_FIELDS = ("first_name", "last_name", "email", "phone")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)

COPY_TITLE_SUFFIX = " (Copy)"

# 로컬 초안 저장 키
DRAFT_STORAGE_KEY = "resumeData"
