"""
Field Resolver: 점(.) 경로로 소스 레코드에서 값 조회.

규칙:
- "dealValue.amount" → ("dealValue", "amount") 세그먼트로 분해
- 중간 값이 None/비객체면 즉시 None (예외 없음)
- 리스트는 숫자 세그먼트로 인덱싱 가능 ("teamMembers.0")
- 최종 값이 리스트면 ", "로 join (표시용 규칙, 모든 출력 포맷 공통)
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

LIST_SEPARATOR = ", "


@dataclass(frozen=True)
class PathExpression:
    """파싱된 경로 (순서 있는 세그먼트 목록)."""
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, path: str) -> "PathExpression":
        return _parse_cached(path)

    def __str__(self) -> str:
        return ".".join(self.segments)

    def evaluate(self, record: Any) -> Any:
        """
        레코드에 경로 적용.

        Args:
            record: 중첩 dict/list 트리

        Returns:
            조회된 값, 리스트면 join된 문자열, 없으면 None
        """
        current = record
        for segment in self.segments:
            current = _step(current, segment)
            if current is None:
                return None

        if _is_list(current):
            return join_display(current)
        return current


@lru_cache(maxsize=512)
def _parse_cached(path: str) -> PathExpression:
    return PathExpression(tuple(path.split(".")))


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _step(current: Any, segment: str) -> Any:
    """세그먼트 하나만큼 내려가기. 인덱싱 불가하면 None."""
    if isinstance(current, Mapping):
        return current.get(segment)
    if _is_list(current) and segment.isascii() and segment.isdigit():
        index = int(segment)
        return current[index] if index < len(current) else None
    return None


def display_scalar(value: Any) -> str:
    """
    스칼라 값 표시 문자열.

    - None → ""
    - bool → "true"/"false"
    - 정수값 float → 소수점 제거 (1500000.0 → "1500000")
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def join_display(items: Sequence[Any]) -> str:
    """리스트 → ", " join 문자열."""
    return LIST_SEPARATOR.join(display_scalar(item) for item in items)


def resolve(record: Any, path: str | PathExpression) -> Any:
    """
    경로로 값 조회 (간편 함수).

    Args:
        record: 소스 도메인 레코드
        path: "a.b.c" 문자열 또는 PathExpression

    Returns:
        값 또는 None (절대 예외를 던지지 않음)
    """
    expression = path if isinstance(path, PathExpression) else PathExpression.parse(path)
    return expression.evaluate(record)
