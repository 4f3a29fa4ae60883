"""섹션 순서 테스트"""

import pytest

from app.domain.resume.constants import DEFAULT_SECTION_ORDER, SectionKey
from app.domain.resume.sections import move_section, resolve_section_order


class TestResolveSectionOrder:
    def test_none_uses_default(self):
        assert resolve_section_order(None) == list(DEFAULT_SECTION_ORDER)

    def test_full_length_order_used_verbatim(self):
        """길이가 맞으면 중복이 있어도 그대로 사용"""
        order = ["summary"] * len(DEFAULT_SECTION_ORDER)
        assert resolve_section_order(order) == [SectionKey.SUMMARY] * len(DEFAULT_SECTION_ORDER)

    def test_wrong_length_uses_default(self):
        assert resolve_section_order(["summary", "skills"]) == list(DEFAULT_SECTION_ORDER)

    def test_default_order(self):
        assert [key.value for key in DEFAULT_SECTION_ORDER] == [
            "personal",
            "summary",
            "experience",
            "skills",
            "education",
            "projects",
            "certifications",
        ]


class TestMoveSection:
    """드래그 앤 드롭 재정렬 테스트"""

    def test_move_down(self):
        order = move_section(None, 1, 3)

        assert order[:4] == [
            SectionKey.PERSONAL,
            SectionKey.EXPERIENCE,
            SectionKey.SKILLS,
            SectionKey.SUMMARY,
        ]

    def test_move_to_front(self):
        order = move_section(DEFAULT_SECTION_ORDER, 6, 0)
        assert order[0] == SectionKey.CERTIFICATIONS
        assert order[-1] == SectionKey.PROJECTS

    def test_result_is_permutation(self):
        order = move_section(None, 2, 5)
        assert sorted(order) == sorted(DEFAULT_SECTION_ORDER)

    def test_same_index_is_noop(self):
        assert move_section(None, 3, 3) == list(DEFAULT_SECTION_ORDER)

    def test_does_not_mutate_input(self):
        original = list(DEFAULT_SECTION_ORDER)
        move_section(original, 0, 6)
        assert original == list(DEFAULT_SECTION_ORDER)

    @pytest.mark.parametrize("source, destination", [(-1, 0), (0, 7), (7, 0)])
    def test_out_of_range(self, source, destination):
        with pytest.raises(IndexError):
            move_section(None, source, destination)
