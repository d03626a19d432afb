"""
Word (DOCX) 렌더러: docxtpl 기반, 스키마 필드 목록 문서.

출력 구조:
- 제목: template.name
- 필드마다 "{label}: {value}" 문단 (값 없는 필드는 문단 자체를 생략)

기본 템플릿은 파일 대신 python-docx로 메모리에서 한 번 생성 후 재사용.
"""

from collections.abc import Mapping
from functools import lru_cache
from io import BytesIO
from typing import Any

from docx import Document
from docxtpl import DocxTemplate

from src.domain.schemas import OutputFormat, TemplateDefinition
from src.render.base import FieldRenderer
from src.render.formatting import format_field_value, is_renderable


@lru_cache(maxsize=1)
def base_template_bytes() -> bytes:
    """
    필드 목록용 DOCX 기본 템플릿.

    placeholder: {{ title }}, {%p for line in lines %} ... {%p endfor %}
    """
    doc = Document()
    doc.add_heading("{{ title }}", level=0)
    doc.add_paragraph("{%p for line in lines %}")
    doc.add_paragraph("{{ line.label }}: {{ line.value }}")
    doc.add_paragraph("{%p endfor %}")

    buffer = BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class DocxFieldRenderer(FieldRenderer):
    """
    Word 문서 렌더러 (스키마 기반).

    Usage:
        renderer = DocxFieldRenderer()
        data = renderer.render(template, values)
    """

    output_format = OutputFormat.DOCX

    def __init__(self, template_bytes: bytes | None = None):
        """
        Args:
            template_bytes: 대체 DOCX 템플릿 (같은 placeholder 사용). None이면 기본 템플릿.
        """
        self._template_bytes = template_bytes

    def render(self, template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
        doc = DocxTemplate(BytesIO(self._template_bytes or base_template_bytes()))
        doc.render(self._build_context(template, values), autoescape=True)

        buffer = BytesIO()
        doc.save(buffer)
        return buffer.getvalue()

    def _build_context(
        self,
        template: TemplateDefinition,
        values: Mapping[str, Any],
    ) -> dict[str, Any]:
        """렌더링 컨텍스트 구성 (선언 순서 유지)."""
        lines = [
            {"label": field.label, "value": format_field_value(values[field.name])}
            for field in template.fields
            if is_renderable(values.get(field.name))
        ]
        return {
            "title": template.name,
            "lines": lines,
        }


def render_docx(template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
    """Word 문서 생성 (간편 함수)."""
    return DocxFieldRenderer().render(template, values)
