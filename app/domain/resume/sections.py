"""섹션 순서 처리"""

from collections.abc import Sequence

from app.domain.resume.constants import DEFAULT_SECTION_ORDER, SectionKey


def resolve_section_order(order: Sequence[SectionKey | str] | None) -> list[SectionKey]:
    """렌더링에 사용할 섹션 순서 결정

    길이가 섹션 키 개수와 같으면 그대로 사용하고, 없거나 길이가 다르면 기본 순서.
    키 중복이나 누락은 검사하지 않는다.
    """
    if not order or len(order) != len(DEFAULT_SECTION_ORDER):
        return list(DEFAULT_SECTION_ORDER)
    return [SectionKey(key) for key in order]


def move_section(
    order: Sequence[SectionKey | str] | None, source_index: int, destination_index: int
) -> list[SectionKey]:
    """드래그 앤 드롭 재정렬: source 위치의 섹션을 꺼내 destination 위치에 삽입

    Raises:
        IndexError: 인덱스가 범위를 벗어난 경우
    """
    new_order = resolve_section_order(order)
    size = len(new_order)
    if not (0 <= source_index < size) or not (0 <= destination_index < size):
        raise IndexError(f"섹션 인덱스 범위 초과: {source_index} -> {destination_index}")

    moved = new_order.pop(source_index)
    new_order.insert(destination_index, moved)
    return new_order
