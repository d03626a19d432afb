"""
템플릿 레지스트리: 메모리 내 템플릿 카탈로그.

규칙:
- register_template: id 기준 insert/overwrite (덮어써도 등록 순서 유지)
- 등록 시 스키마 자기모순 검증 (fail-fast)
- freeze() 이후 등록 시도 → REGISTRY_FROZEN
- 전역 상태 없음: 엔진에 생성자로 주입, 테스트는 케이스별 레지스트리 생성
"""

import logging
from collections.abc import Iterable, Iterator

from src.domain.errors import ErrorCodes, PolicyRejectError
from src.domain.schemas import STRING_FIELD_TYPES, FieldType, TemplateDefinition

logger = logging.getLogger(__name__)


# =============================================================================
# Schema Validation
# =============================================================================

def validate_definition(definition: TemplateDefinition) -> None:
    """
    템플릿 정의 자기모순 검증.

    규칙:
    - id, 필드 name은 비어 있으면 안 됨
    - 필드 name은 템플릿 내에서 유일
    - select 타입은 options 필수
    - max_length는 text/textarea에만, 1 이상

    Raises:
        PolicyRejectError: INVALID_TEMPLATE_SCHEMA
    """
    if not definition.id:
        raise PolicyRejectError(
            ErrorCodes.INVALID_TEMPLATE_SCHEMA,
            error="template id cannot be empty",
            name=definition.name,
        )

    seen: set[str] = set()
    for field in definition.fields:
        if not field.name:
            raise PolicyRejectError(
                ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                template_id=definition.id,
                error="field name cannot be empty",
                label=field.label,
            )

        if field.name in seen:
            raise PolicyRejectError(
                ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                template_id=definition.id,
                field=field.name,
                error="duplicate field name",
            )
        seen.add(field.name)

        if field.type == FieldType.SELECT and not field.options:
            raise PolicyRejectError(
                ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                template_id=definition.id,
                field=field.name,
                error="select field requires options",
            )

        if field.max_length is not None:
            if field.type not in STRING_FIELD_TYPES:
                raise PolicyRejectError(
                    ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                    template_id=definition.id,
                    field=field.name,
                    error=f"max_length is not applicable to '{field.type.value}' fields",
                )
            if field.max_length < 1:
                raise PolicyRejectError(
                    ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                    template_id=definition.id,
                    field=field.name,
                    error="max_length must be positive",
                    max_length=field.max_length,
                )


# =============================================================================
# Registry
# =============================================================================

class TemplateRegistry:
    """
    템플릿 카탈로그.

    Usage:
        registry = TemplateRegistry([ChambersTemplate, RefereeTemplate])
        registry.freeze()
        registry.get_template("chambers-2024")
    """

    def __init__(self, templates: Iterable[TemplateDefinition] = ()):
        self._templates: dict[str, TemplateDefinition] = {}
        self._frozen = False
        for definition in templates:
            self.register_template(definition)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "TemplateRegistry":
        """이후 등록 금지. 체이닝용으로 self 반환."""
        self._frozen = True
        return self

    def register_template(self, definition: TemplateDefinition) -> None:
        """
        템플릿 등록 (같은 id면 덮어쓰기).

        Raises:
            PolicyRejectError: REGISTRY_FROZEN, INVALID_TEMPLATE_SCHEMA
        """
        if self._frozen:
            raise PolicyRejectError(
                ErrorCodes.REGISTRY_FROZEN,
                template_id=definition.id,
            )

        validate_definition(definition)

        if definition.id in self._templates:
            logger.info("Overwriting template '%s'", definition.id)
        self._templates[definition.id] = definition

    def get_template(self, template_id: str) -> TemplateDefinition | None:
        """id로 조회. 없으면 None."""
        return self._templates.get(template_id)

    def list_templates(self) -> list[TemplateDefinition]:
        """등록 순서대로 전체 목록."""
        return list(self._templates.values())

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[TemplateDefinition]:
        return iter(self.list_templates())
