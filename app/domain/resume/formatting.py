"""렌더링 공용 포맷 함수 (HTML 미리보기, PDF 공용)"""

import re
from datetime import datetime

from app.domain.resume.schemas import PersonalInfo

DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y/%m", "%m/%Y")
FILENAME_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def format_date(value: str | None) -> str:
    """'2021-03' -> 'Mar 2021', 해석할 수 없는 값은 그대로"""
    if not value:
        return ""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).strftime("%b %Y")
        except ValueError:
            continue
    return value


def format_period(start: str | None, end: str | None, current: bool = False) -> str:
    start_text = format_date(start)
    end_text = "Present" if current or not end else format_date(end)
    if not start_text:
        return "" if end_text == "Present" else end_text
    return f"{start_text} - {end_text}"


def contact_line(info: PersonalInfo, separator: str = " | ") -> str:
    parts = [info.email, info.phone, info.location, info.website, info.linkedin, info.github]
    return separator.join(part.strip() for part in parts if part and part.strip())


def pdf_filename(info: PersonalInfo, template_id: str) -> str:
    """First_Last_Resume_<template>.pdf"""
    stem = "_".join(
        part for part in (info.first_name.strip(), info.last_name.strip(), "Resume", template_id) if part
    )
    return f"{FILENAME_UNSAFE.sub('_', stem)}.pdf"
