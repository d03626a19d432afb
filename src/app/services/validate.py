"""
Validation Service: 템플릿 스키마 기반 레코드 검증.

규칙:
- 필수 필드: None/"" → missing_fields
- 문자열 + max_length 초과 → invalid_fields
- 누락된 필수 필드는 길이 검사 생략
- 첫 위반에서 멈추지 않음 (전체 보고)
- 순수 함수: 부수효과/예외 없음 (템플릿 없음은 sentinel 결과)
"""

from typing import Any

from src.core.paths import resolve
from src.domain.schemas import TemplateDefinition, ValidationIssue, ValidationResult
from src.templates.registry import TemplateRegistry


def is_blank(value: Any) -> bool:
    """필수 필드 누락 판정 (0, False는 값으로 취급)."""
    return value is None or value == ""


def validate_template(template: TemplateDefinition, record: Any) -> ValidationResult:
    """
    이미 조회된 템플릿으로 레코드 검증.

    Args:
        template: 템플릿 정의
        record: 소스 도메인 레코드

    Returns:
        ValidationResult (선언 순서대로 위반 수집)
    """
    missing_fields: list[str] = []
    invalid_fields: list[ValidationIssue] = []

    for field in template.fields:
        value = resolve(record, field.mapped_from or field.name)

        if field.required and is_blank(value):
            missing_fields.append(field.name)
            continue

        if (
            isinstance(value, str)
            and field.max_length is not None
            and len(value) > field.max_length
        ):
            invalid_fields.append(
                ValidationIssue(
                    field=field.name,
                    reason=f"Exceeds maximum length of {field.max_length}",
                )
            )

    return ValidationResult(
        valid=not missing_fields and not invalid_fields,
        missing_fields=missing_fields,
        invalid_fields=invalid_fields,
    )


def validate_record(
    registry: TemplateRegistry,
    template_id: str,
    record: Any,
) -> ValidationResult:
    """
    템플릿 id로 레코드 검증.

    Returns:
        템플릿이 없으면 valid=False + {field: "template", reason: "Template not found"}
    """
    template = registry.get_template(template_id)
    if template is None:
        return ValidationResult(
            valid=False,
            missing_fields=[],
            invalid_fields=[ValidationIssue(field="template", reason="Template not found")],
        )
    return validate_template(template, record)
