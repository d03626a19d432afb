"""
Export Orchestrator: 템플릿 id + 매터 데이터 → GenerationResult.

generate 흐름 (fail-fast):
1. 템플릿 조회 (없으면 "Template not found")
2. 검증 (실패 시 렌더러 호출 없이 전체 에러 목록 반환)
3. 필드 매핑 (override 우선)
4. 파일명: {title}_{type}_{epoch_millis}.{format}
5. output_format별 렌더러 선택 (없으면 "Unsupported format: {format}")
6. 성공 → buffer + file_name + mime_type
7. 렌더러 예외 → 메시지 그대로 단일 에러 (호출자에게 예외 전파 없음)
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from src.app.services.mapping import map_fields
from src.app.services.validate import validate_record
from src.core.config import EngineConfig
from src.core.ids import default_clock, generate_export_filename
from src.core.paths import resolve
from src.domain.constants import QUESTIONNAIRE_FALLBACK_TITLE
from src.domain.schemas import (
    DirectoryType,
    GenerationResult,
    OutputFormat,
    QuestionnaireData,
    TemplateDefinition,
    ValidationResult,
)
from src.render.base import FieldRenderer
from src.render.excel import ExcelFieldRenderer
from src.render.questionnaire import QuestionnaireRenderer
from src.render.word import DocxFieldRenderer
from src.templates.catalog import build_default_registry
from src.templates.registry import TemplateRegistry

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Generation failed"


def _error_message(e: Exception) -> str:
    return str(e) or GENERIC_FAILURE


class TemplateEngine:
    """
    문서 생성 엔진.

    레지스트리/렌더러/시계는 생성자 주입 → 테스트마다 격리된 엔진 구성 가능.

    Usage:
        engine = TemplateEngine(build_default_registry())
        result = engine.generate("chambers-2024", matter_data, {"clientName": "Acme"})
        if result.success:
            Path(result.file_name).write_bytes(result.buffer)
    """

    def __init__(
        self,
        registry: TemplateRegistry,
        renderers: Mapping[OutputFormat, FieldRenderer] | None = None,
        config: EngineConfig | None = None,
        clock: Callable[[], int] | None = None,
        questionnaire_renderer: QuestionnaireRenderer | None = None,
    ):
        """
        Args:
            registry: 템플릿 레지스트리 (보통 freeze된 상태)
            renderers: 포맷별 렌더러 (None이면 docx/xlsx 기본 렌더러)
            config: 엔진 설정 (fallback 제목, 렌더러 스타일)
            clock: epoch millis 공급자 (None이면 프로세스 단조 시계)
            questionnaire_renderer: 질문지 렌더러 (None이면 config 스타일로 생성)
        """
        self.registry = registry
        self.config = config or EngineConfig()
        self.clock = clock or default_clock

        if renderers is None:
            renderers = {
                OutputFormat.DOCX: DocxFieldRenderer(),
                OutputFormat.XLSX: ExcelFieldRenderer(self.config.xlsx),
            }
        self.renderers = dict(renderers)
        self.questionnaire_renderer = questionnaire_renderer or QuestionnaireRenderer(
            self.config.questionnaire
        )

    # =========================================================================
    # Registry
    # =========================================================================

    def register_template(self, definition: TemplateDefinition) -> None:
        self.registry.register_template(definition)

    def get_template(self, template_id: str) -> TemplateDefinition | None:
        return self.registry.get_template(template_id)

    def list_templates(self) -> list[TemplateDefinition]:
        return self.registry.list_templates()

    # =========================================================================
    # Validation / Mapping
    # =========================================================================

    def validate(self, template_id: str, record: Any) -> ValidationResult:
        return validate_record(self.registry, template_id, record)

    def map_fields(
        self,
        template: TemplateDefinition,
        record: Any,
        overrides: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        return map_fields(template, record, overrides)

    # =========================================================================
    # Generation
    # =========================================================================

    def generate(
        self,
        template_id: str,
        matter_data: Any,
        field_overrides: Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """
        스키마 기반 문서 생성.

        Args:
            template_id: 템플릿 id
            matter_data: 소스 매터 레코드 (중첩 dict)
            field_overrides: 사용자 입력 값 (필드 name → 값)

        Returns:
            GenerationResult (예외를 던지지 않음)
        """
        template = self.registry.get_template(template_id)
        if template is None:
            logger.warning(f"Template not found: {template_id}")
            return GenerationResult.failure("Template not found")

        validation = self.validate(template_id, matter_data)
        if not validation.valid:
            errors = validation.error_messages()
            logger.warning(f"Validation failed for {template_id}: {errors}")
            return GenerationResult.failure(*errors)

        values = self.map_fields(template, matter_data, field_overrides)

        file_name = generate_export_filename(
            resolve(matter_data, "title"),
            template.type.value,
            template.output_format.value,
            clock=self.clock,
            fallback=self.config.fallback_title,
        )

        renderer = self.renderers.get(template.output_format)
        if renderer is None:
            logger.warning(f"Unsupported format for {template_id}: {template.output_format.value}")
            return GenerationResult.failure(f"Unsupported format: {template.output_format.value}")

        try:
            buffer = renderer.render(template, values)
        except Exception as e:
            logger.exception(f"Rendering failed for {template_id}")
            return GenerationResult.failure(_error_message(e))

        logger.info(f"Generated {file_name} ({len(buffer)} bytes)")
        return GenerationResult.ok(buffer, file_name, renderer.mime_type)

    def generate_questionnaire(
        self,
        data: QuestionnaireData,
        logo: bytes | None = None,
    ) -> GenerationResult:
        """
        Dun's 100 제출 질문지 생성.

        파일명 제목은 사무소 영문명 (없으면 "submission").
        """
        file_name = generate_export_filename(
            data.firm.name_english,
            DirectoryType.DUNS_100.value,
            self.questionnaire_renderer.output_format.value,
            clock=self.clock,
            fallback=QUESTIONNAIRE_FALLBACK_TITLE,
        )

        try:
            buffer = self.questionnaire_renderer.render(data, logo)
        except Exception as e:
            logger.exception("Questionnaire rendering failed")
            return GenerationResult.failure(_error_message(e))

        logger.info(f"Generated {file_name} ({len(buffer)} bytes)")
        return GenerationResult.ok(buffer, file_name, self.questionnaire_renderer.mime_type)


def build_default_engine(config: EngineConfig | None = None) -> TemplateEngine:
    """설정 기반 기본 엔진: 카탈로그 로드 → freeze → 기본 렌더러."""
    config = config or EngineConfig()
    registry = build_default_registry(config.catalog_path)
    return TemplateEngine(registry, config=config)
