"""
Renderer 추상 인터페이스.

- DocumentRenderer: 모든 렌더러 공통 (output_format, mime_type)
- FieldRenderer: 스키마 기반 렌더러 (template + 값 맵 → bytes)

고정 레이아웃 질문지(QuestionnaireRenderer)는 FieldRenderer가 아니라
DocumentRenderer를 직접 상속 → 고정 행 수 가정이 스키마 렌더러로 새지 않음.

렌더러는 메모리 버퍼만 만든다 (디스크/네트워크 I/O 없음).
예외는 감싸지 않고 그대로 던짐 → 오케스트레이터가 메시지를 그대로 에러로 기록.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from src.domain.constants import get_mime_type
from src.domain.schemas import OutputFormat, TemplateDefinition


class DocumentRenderer(ABC):
    """문서 렌더러 공통 베이스."""

    output_format: ClassVar[OutputFormat]

    @property
    def mime_type(self) -> str:
        return get_mime_type(f".{self.output_format.value}")


class FieldRenderer(DocumentRenderer):
    """템플릿 필드 목록 기반 렌더러."""

    @abstractmethod
    def render(self, template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
        """
        템플릿 + 값 맵 → 문서 바이트.

        Args:
            template: 템플릿 정의 (필드 순서/라벨)
            values: map_fields 결과

        Returns:
            OOXML 패키지 바이트
        """
        ...
