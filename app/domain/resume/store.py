"""이력서 초안 스토어

편집 중인 문서의 단일 원천. 모든 변경은
"새 문서 계산 -> 저장소에 동기 저장 -> 메모리 상태 교체" 순서로 처리한다.
실행 취소, 탭 간 병합은 없다 (마지막 저장이 이김).
"""

import json
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel

from app.core.logging import get_logger
from app.domain.resume import completion
from app.domain.resume.constants import SectionKey, WizardStep
from app.domain.resume.schemas import (
    Certification,
    Education,
    Experience,
    Project,
    ResumeData,
    ResumeDraft,
    Skills,
    new_item_id,
    normalize_skills,
)
from app.domain.resume.sections import move_section
from app.domain.resume.templates import resolve_template_id
from app.infra.api.client import ResumeApiClient
from app.infra.storage.draft_storage import DraftStorage

logger = get_logger(__name__)

SECTION_MODELS: dict[str, type[BaseModel]] = {
    "experience": Experience,
    "education": Education,
    "projects": Project,
    "certifications": Certification,
}

SKILL_KINDS = ("technical", "soft")


class ResumeStore:
    def __init__(self, storage: DraftStorage):
        self._storage = storage
        self._draft = self._load()
        self.last_saved: datetime | None = None

    def _load(self) -> ResumeDraft:
        try:
            saved = self._storage.load()
        except ValueError as e:
            logger.warning("초안 불러오기 실패, 빈 초안으로 시작", error=str(e))
            return ResumeDraft()

        if saved is None:
            return ResumeDraft()

        try:
            return ResumeDraft.model_validate(saved)
        except ValueError as e:
            logger.warning("초안 형식 오류, 빈 초안으로 시작", error=str(e))
            return ResumeDraft()

    @property
    def draft(self) -> ResumeDraft:
        return self._draft

    @property
    def document(self) -> ResumeData:
        return self._draft.to_document()

    def _commit(self, draft: ResumeDraft) -> ResumeDraft:
        self._storage.save(draft.model_dump(by_alias=True, mode="json"))
        self._draft = draft
        self.last_saved = datetime.now(timezone.utc)
        return draft

    def _replace(self, **changes: Any) -> ResumeDraft:
        return self._commit(self._draft.model_copy(update=changes))

    # 인적 사항 / 요약

    def update_personal_info(self, **fields: Any) -> None:
        merged = {**self._draft.personal_info.model_dump(), **fields}
        info = type(self._draft.personal_info).model_validate(merged)
        self._replace(personal_info=info)

    def update_summary(self, summary: str) -> None:
        self._replace(summary=summary)

    # 반복 섹션 공통

    def _items(self, section: str) -> list:
        return list(getattr(self._draft, section))

    def _index(self, items: list, item_id: str, section: str) -> int:
        for index, item in enumerate(items):
            if item.id == item_id:
                return index
        raise KeyError(f"{section} 항목 없음: {item_id}")

    def _add_item(self, section: str, fields: dict) -> str:
        item = SECTION_MODELS[section].model_validate({**fields, "id": new_item_id()})
        self._replace(**{section: [*self._items(section), item]})
        return item.id

    def _update_item(self, section: str, item_id: str, updates: dict) -> None:
        items = self._items(section)
        index = self._index(items, item_id, section)
        merged = {**items[index].model_dump(), **updates, "id": item_id}
        items[index] = SECTION_MODELS[section].model_validate(merged)
        self._replace(**{section: items})

    def _delete_item(self, section: str, item_id: str) -> None:
        items = self._items(section)
        del items[self._index(items, item_id, section)]
        self._replace(**{section: items})

    def _reorder_items(self, section: str, item_ids: Sequence[str]) -> None:
        items = self._items(section)
        by_id = {item.id: item for item in items}
        for item_id in item_ids:
            if item_id not in by_id:
                raise KeyError(f"{section} 항목 없음: {item_id}")
        if len(item_ids) != len(items) or len(set(item_ids)) != len(items):
            raise ValueError(f"{section} 재정렬 목록이 기존 항목과 일치하지 않습니다")
        self._replace(**{section: [by_id[item_id] for item_id in item_ids]})

    # 경력

    def add_experience(self, **fields: Any) -> str:
        return self._add_item("experience", fields)

    def update_experience(self, item_id: str, **updates: Any) -> None:
        self._update_item("experience", item_id, updates)

    def delete_experience(self, item_id: str) -> None:
        self._delete_item("experience", item_id)

    def reorder_experience(self, item_ids: Sequence[str]) -> None:
        self._reorder_items("experience", item_ids)

    # 학력

    def add_education(self, **fields: Any) -> str:
        return self._add_item("education", fields)

    def update_education(self, item_id: str, **updates: Any) -> None:
        self._update_item("education", item_id, updates)

    def delete_education(self, item_id: str) -> None:
        self._delete_item("education", item_id)

    def reorder_education(self, item_ids: Sequence[str]) -> None:
        self._reorder_items("education", item_ids)

    # 프로젝트

    def add_project(self, **fields: Any) -> str:
        return self._add_item("projects", fields)

    def update_project(self, item_id: str, **updates: Any) -> None:
        self._update_item("projects", item_id, updates)

    def delete_project(self, item_id: str) -> None:
        self._delete_item("projects", item_id)

    def reorder_projects(self, item_ids: Sequence[str]) -> None:
        self._reorder_items("projects", item_ids)

    # 자격증

    def add_certification(self, **fields: Any) -> str:
        return self._add_item("certifications", fields)

    def update_certification(self, item_id: str, **updates: Any) -> None:
        self._update_item("certifications", item_id, updates)

    def delete_certification(self, item_id: str) -> None:
        self._delete_item("certifications", item_id)

    def reorder_certifications(self, item_ids: Sequence[str]) -> None:
        self._reorder_items("certifications", item_ids)

    # 스킬 (이름으로 식별)

    def _set_skills(self, technical: list[str], soft: list[str]) -> None:
        skills = Skills.model_validate(normalize_skills({"technical": technical, "soft": soft}))
        self._replace(skills=skills)

    def _skill_lists(self, kind: str) -> tuple[list[str], list[str]]:
        if kind not in SKILL_KINDS:
            raise ValueError(f"알 수 없는 스킬 종류: {kind}")
        return list(self._draft.skills.technical), list(self._draft.skills.soft)

    def add_skill(self, name: str, kind: str = "technical") -> bool:
        """스킬 추가, 이미 있으면 False"""
        technical, soft = self._skill_lists(kind)
        name = name.strip()
        if not name:
            raise ValueError("스킬 이름이 비어 있습니다")

        target = technical if kind == "technical" else soft
        if name.lower() in {s.lower() for s in target}:
            return False
        target.append(name)
        self._set_skills(technical, soft)
        return True

    def update_skill(self, old_name: str, new_name: str, kind: str = "technical") -> None:
        technical, soft = self._skill_lists(kind)
        target = technical if kind == "technical" else soft
        if old_name not in target:
            raise KeyError(f"스킬 없음: {old_name}")
        target[target.index(old_name)] = new_name
        self._set_skills(technical, soft)

    def delete_skill(self, name: str, kind: str = "technical") -> None:
        technical, soft = self._skill_lists(kind)
        target = technical if kind == "technical" else soft
        if name not in target:
            raise KeyError(f"스킬 없음: {name}")
        target.remove(name)
        self._set_skills(technical, soft)

    def bulk_add_skills(self, names: Iterable[str], kind: str = "technical") -> None:
        technical, soft = self._skill_lists(kind)
        target = technical if kind == "technical" else soft
        target.extend(names)
        self._set_skills(technical, soft)

    def bulk_delete_skills(self, names: Iterable[str]) -> None:
        removed = set(names)
        self._set_skills(
            [s for s in self._draft.skills.technical if s not in removed],
            [s for s in self._draft.skills.soft if s not in removed],
        )

    # 섹션 순서 / 템플릿

    def set_section_order(self, order: Sequence[SectionKey | str]) -> None:
        """섹션 순서를 그대로 저장 (길이 검사는 렌더링 시점에 처리)"""
        self._replace(section_order=[SectionKey(key) for key in order])

    def move_section(self, source_index: int, destination_index: int) -> list[SectionKey]:
        new_order = move_section(self._draft.section_order, source_index, destination_index)
        self._replace(section_order=new_order)
        return new_order

    def select_template(self, template_id: str) -> str:
        resolved = resolve_template_id(template_id)
        self._replace(selected_template=resolved)
        return resolved

    # 데이터 관리

    def clear(self) -> None:
        self._storage.clear()
        self._draft = ResumeDraft()
        self.last_saved = None

    def export_json(self) -> str:
        return json.dumps(self._draft.model_dump(by_alias=True, mode="json"), indent=2, ensure_ascii=False)

    def import_json(self, text: str) -> bool:
        """JSON 초안 가져오기, 형식 오류면 False (현재 상태 유지)"""
        try:
            parsed = json.loads(text)
            if not isinstance(parsed, dict):
                raise ValueError("초안은 JSON 객체여야 합니다")
            draft = ResumeDraft.model_validate(parsed)
        except ValueError as e:
            logger.warning("초안 가져오기 실패", error=str(e))
            return False

        self._commit(draft)
        return True

    # 파생 값

    def completion_percentage(self) -> int:
        return completion.completion_percentage(self._draft)

    def stats(self) -> dict:
        return completion.resume_stats(self._draft)

    def validate(self) -> list[str]:
        return completion.validate_draft(self._draft)

    def step_status(self) -> dict[WizardStep, str]:
        return completion.step_statuses(self._draft)

    # 서버 동기화

    async def sync(
        self,
        client: ResumeApiClient,
        resume_id: int | None = None,
        title: str = "My Resume",
        version: int | None = None,
    ) -> dict:
        """초안을 서버에 저장 (resume_id 없으면 생성, 있으면 수정)"""
        data = self.document.to_json_dict()
        if resume_id is None:
            return await client.create_resume(
                title=title, data=data, template_id=self._draft.selected_template
            )
        return await client.update_resume(
            resume_id,
            data=data,
            template_id=self._draft.selected_template,
            version=version,
        )
