"""완성도 휴리스틱

진행 상황 표시용 판단 함수 모음. 저장이나 단계 이동을 막는 데 쓰지 않는다.
"""

from app.domain.resume.constants import (
    COMPLETION_PERSONAL_FIELDS,
    EMAIL_PATTERN,
    SKILLS_MIN_COUNT,
    STEP_PERSONAL_REQUIRED_FIELDS,
    SUMMARY_MIN_WORDS,
    WIZARD_STEPS,
    WizardStep,
)
from app.domain.resume.schemas import ResumeData, ResumeDraft
from app.domain.resume.templates import is_registered_template

COMPLETE = "complete"
INCOMPLETE = "incomplete"


def word_count(text: str | None) -> int:
    """공백 기준 단어 수"""
    if not text:
        return 0
    return len(text.split())


def _filled(value: str) -> bool:
    return bool(value and value.strip())


def is_step_complete(step: WizardStep, draft: ResumeData) -> bool:
    """단계별 완료 여부"""
    if step is WizardStep.PERSONAL:
        info = draft.personal_info
        return all(_filled(getattr(info, name)) for name in STEP_PERSONAL_REQUIRED_FIELDS)
    if step is WizardStep.SUMMARY:
        return word_count(draft.summary) >= SUMMARY_MIN_WORDS
    if step is WizardStep.EXPERIENCE:
        return len(draft.experience) >= 1
    if step is WizardStep.EDUCATION:
        return len(draft.education) >= 1
    if step is WizardStep.SKILLS:
        return draft.skills.count >= SKILLS_MIN_COUNT
    if step is WizardStep.CERTIFICATIONS:
        return len(draft.certifications) >= 1
    if step is WizardStep.PROJECTS:
        return len(draft.projects) >= 1
    if step is WizardStep.PREVIEW:
        template_id = draft.selected_template if isinstance(draft, ResumeDraft) else None
        return bool(template_id) and is_registered_template(template_id)
    return False


def step_statuses(draft: ResumeData) -> dict[WizardStep, str]:
    """모든 단계의 complete/incomplete 상태"""
    return {
        step: COMPLETE if is_step_complete(step, draft) else INCOMPLETE for step in WIZARD_STEPS
    }


def completion_percentage(data: ResumeData) -> int:
    """가중치 없는 존재 여부 체크 기반 완성도 (0-100)

    인적 사항 5개 + 요약 + 경력 + 학력 + 스킬 = 9개 항목.
    빈 항목을 채우는 것은 값을 줄이지 않는다.
    """
    info = data.personal_info
    checks = [_filled(getattr(info, name)) for name in COMPLETION_PERSONAL_FIELDS]
    checks.append(_filled(data.summary))
    checks.append(len(data.experience) > 0)
    checks.append(len(data.education) > 0)
    checks.append(data.skills.count > 0)

    return round(sum(checks) / len(checks) * 100)


def resume_stats(data: ResumeData) -> dict:
    """섹션별 개수와 단어 수 통계"""
    summary_words = word_count(data.summary)
    experience_words = sum(
        word_count(bullet) for exp in data.experience for bullet in exp.bullets
    )

    return {
        "totalExperiences": len(data.experience),
        "totalEducation": len(data.education),
        "totalSkills": data.skills.count,
        "totalProjects": len(data.projects),
        "totalCertifications": len(data.certifications),
        "summaryWordCount": summary_words,
        "experienceWordCount": experience_words,
        "totalWordCount": summary_words + experience_words,
        "completionPercentage": completion_percentage(data),
    }


def validate_draft(data: ResumeData) -> list[str]:
    """초안 점검 메시지 목록 (빈 목록이면 문제 없음)"""
    errors = []
    info = data.personal_info

    if not _filled(info.first_name):
        errors.append("First name is required.")
    if not _filled(info.last_name):
        errors.append("Last name is required.")
    if not _filled(info.email):
        errors.append("Email is required.")
    elif not EMAIL_PATTERN.match(info.email):
        errors.append("Please enter a valid email address.")
    if not _filled(info.phone):
        errors.append("Phone number is required.")

    for index, exp in enumerate(data.experience, start=1):
        if not _filled(exp.title):
            errors.append(f"Experience {index}: Job title is required.")
        if not _filled(exp.company):
            errors.append(f"Experience {index}: Company name is required.")
        if not _filled(exp.start_date):
            errors.append(f"Experience {index}: Start date is required.")

    for index, edu in enumerate(data.education, start=1):
        if not _filled(edu.institution):
            errors.append(f"Education {index}: Institution name is required.")
        if not _filled(edu.degree):
            errors.append(f"Education {index}: Degree is required.")

    return errors
