"""
Field Mapper: 템플릿 필드 → 값 맵 (렌더링 입력).

우선순위:
1. fieldOverrides에 name 키가 있으면 그 값 그대로 (부분 병합 없음).
   값이 None(JSON null)이면 레코드 값 대신 빈 필드
2. mapped_from 경로 조회
3. 둘 다 없으면 맵에서 제외 (렌더링 시 생략)
"""

from collections.abc import Mapping
from typing import Any

from src.core.paths import resolve
from src.domain.schemas import TemplateDefinition


def map_fields(
    template: TemplateDefinition,
    record: Any,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    템플릿 필드별 값 맵 생성.

    Args:
        template: 템플릿 정의
        record: 소스 도메인 레코드
        overrides: 사용자 입력 값 (필드 name → 값)

    Returns:
        {필드 name: 값}. 값이 없는 필드는 키 자체가 없음.
    """
    overrides = overrides or {}
    values: dict[str, Any] = {}

    for field in template.fields:
        if field.name in overrides:
            if overrides[field.name] is not None:
                values[field.name] = overrides[field.name]
        elif field.mapped_from:
            value = resolve(record, field.mapped_from)
            if value is not None:
                values[field.name] = value

    return values

