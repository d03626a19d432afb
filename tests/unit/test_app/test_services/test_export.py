"""
test_export.py - Export Orchestrator (TemplateEngine) 테스트

DoD:
- 템플릿 없음 → ["Template not found"]
- 검증 실패 → 렌더러 호출 없이 전체 에러 목록 (fail-fast)
- 파일명: {title}_{type}_{millis}.{format}
- pdf 등 렌더러 없는 포맷 → "Unsupported format: pdf"
- 렌더러 예외 → 메시지 그대로 단일 에러, 예외 전파 없음
- 질문지 생성도 같은 결과 계약
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

import pytest

from src.app.services.export import TemplateEngine, build_default_engine
from src.core.config import EngineConfig
from src.domain.errors import ErrorCodes, PolicyRejectError
from src.domain.schemas import OutputFormat, QuestionnaireData, TemplateDefinition
from src.render.base import FieldRenderer
from src.templates.registry import TemplateRegistry
from src.testing.extract import extract_docx, extract_xlsx

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class RecordingRenderer(FieldRenderer):
    """호출 기록용 렌더러."""

    output_format = OutputFormat.DOCX

    def __init__(self):
        self.calls: list[tuple[TemplateDefinition, dict[str, Any]]] = []

    def render(self, template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
        self.calls.append((template, dict(values)))
        return b"rendered"


class ExplodingRenderer(FieldRenderer):
    """항상 예외를 던지는 렌더러."""

    output_format = OutputFormat.DOCX

    def __init__(self, message: str = "template package is corrupt"):
        self.message = message

    def render(self, template: TemplateDefinition, values: Mapping[str, Any]) -> bytes:
        raise RuntimeError(self.message)


@pytest.fixture
def isolated_engine(chambers_like_template, fixed_clock) -> TemplateEngine:
    """chambers_like_template 하나만 등록된 엔진."""
    return TemplateEngine(TemplateRegistry([chambers_like_template]), clock=fixed_clock)


# =============================================================================
# generate: 예시 시나리오
# =============================================================================


class TestGenerateScenarios:
    """generate 예시 시나리오 테스트."""

    def test_chambers_success(self, engine, sample_matter):
        """필수 필드 모두 있음 → success + 파일명 패턴."""
        result = engine.generate("chambers-2024", sample_matter)

        assert result.success is True
        assert result.errors == []
        assert result.mime_type == DOCX_MIME
        assert result.buffer
        assert re.match(r"^[A-Za-z0-9]{1,50}_chambers_\d+\.docx$", result.file_name)

    def test_missing_client_name(self, engine, sample_matter):
        del sample_matter["clientName"]

        result = engine.generate("chambers-2024", sample_matter)

        assert result.success is False
        assert result.errors == ["Missing required field: clientName"]
        assert result.buffer is None

    def test_description_too_long(self, engine, sample_matter):
        sample_matter["synthesizedData"]["description"] = "x" * 2001

        result = engine.generate("chambers-2024", sample_matter)

        assert result.errors == ["description: Exceeds maximum length of 2000"]
        validation = engine.validate("chambers-2024", sample_matter)
        assert [i.to_dict() for i in validation.invalid_fields] == [
            {"field": "description", "reason": "Exceeds maximum length of 2000"}
        ]

    def test_override_wins(self, engine, sample_matter):
        sample_matter["clientName"] = "Beta"
        template = engine.get_template("chambers-2024")

        values = engine.map_fields(template, sample_matter, {"clientName": "Acme"})
        result = engine.generate("chambers-2024", sample_matter, {"clientName": "Acme"})

        assert values["clientName"] == "Acme"
        paragraphs = extract_docx(result.buffer).paragraphs
        assert "Client: Acme" in paragraphs
        assert "Client: Beta" not in paragraphs

    def test_pdf_unsupported(self, fixed_clock, chambers_like_template):
        pdf_template = TemplateDefinition(
            id="pdf-template",
            name="PDF",
            type=chambers_like_template.type,
            output_format=OutputFormat.PDF,
            fields=chambers_like_template.fields,
        )
        engine = TemplateEngine(TemplateRegistry([pdf_template]), clock=fixed_clock)

        result = engine.generate("pdf-template", {"title": "T", "clientName": "C"})

        assert result.success is False
        assert result.errors == ["Unsupported format: pdf"]

    def test_null_deal_value_omitted(self, engine, sample_matter):
        """dealValue null → Matter Value 문단 없음 ("0"/"null" 아님)."""
        sample_matter["dealValue"] = None

        result = engine.generate("chambers-2024", sample_matter)

        assert result.success is True
        paragraphs = extract_docx(result.buffer).paragraphs
        assert not any(p.startswith("Matter Value") for p in paragraphs)
        assert not any(p.startswith("Currency") for p in paragraphs)


# =============================================================================
# generate: 오케스트레이션 규칙
# =============================================================================


class TestGenerateRules:
    """fail-fast, 파일명, 렌더러 선택, 예외 처리 테스트."""

    def test_template_not_found(self, engine):
        result = engine.generate("nope", {"title": "T"})

        assert result.success is False
        assert result.errors == ["Template not found"]

    def test_fail_fast_never_renders(self, chambers_like_template, fixed_clock):
        renderer = RecordingRenderer()
        engine = TemplateEngine(
            TemplateRegistry([chambers_like_template]),
            renderers={OutputFormat.DOCX: renderer},
            clock=fixed_clock,
        )

        result = engine.generate(chambers_like_template.id, {"title": "T"})

        assert result.success is False
        assert result.buffer is None
        assert renderer.calls == []

    def test_renderer_receives_mapped_values(self, chambers_like_template, fixed_clock, sample_matter):
        renderer = RecordingRenderer()
        engine = TemplateEngine(
            TemplateRegistry([chambers_like_template]),
            renderers={OutputFormat.DOCX: renderer},
            clock=fixed_clock,
        )

        result = engine.generate(chambers_like_template.id, sample_matter, {"jurisdictions": "IL"})

        assert result.success is True
        assert result.buffer == b"rendered"
        template, values = renderer.calls[0]
        assert template is chambers_like_template
        assert values["jurisdictions"] == "IL"
        assert values["clientName"] == "Acme Corp"

    def test_filename_from_clock(self, isolated_engine, sample_matter):
        result = isolated_engine.generate("test-chambers", sample_matter)

        assert result.file_name == "AcmeAcquisitionofBetaLtd_chambers_1700000000000.docx"

    def test_filename_fallback_title(self, isolated_engine):
        """제목이 정리 후 비면 "matter"."""
        result = isolated_engine.generate("test-chambers", {"title": "עסקה", "clientName": "C"})

        assert result.file_name.startswith("matter_chambers_")

    def test_filename_fallback_from_config(self, chambers_like_template, fixed_clock):
        engine = TemplateEngine(
            TemplateRegistry([chambers_like_template]),
            config=EngineConfig(fallback_title="export"),
            clock=fixed_clock,
        )

        result = engine.generate(chambers_like_template.id, {"title": "!!!", "clientName": "C"})

        assert result.file_name.startswith("export_chambers_")

    def test_same_millisecond_filenames_unique(self, engine, sample_matter):
        """기본 단조 시계: 같은 제목 연속 생성도 파일명 충돌 없음."""
        engine = TemplateEngine(engine.registry)

        names = {engine.generate("chambers-2024", sample_matter).file_name for _ in range(3)}

        assert len(names) == 3

    def test_renderer_exception_captured(self, chambers_like_template, fixed_clock, sample_matter):
        engine = TemplateEngine(
            TemplateRegistry([chambers_like_template]),
            renderers={OutputFormat.DOCX: ExplodingRenderer()},
            clock=fixed_clock,
        )

        result = engine.generate(chambers_like_template.id, sample_matter)

        assert result.success is False
        assert result.errors == ["template package is corrupt"]
        assert result.buffer is None

    def test_renderer_exception_without_message(
        self, chambers_like_template, fixed_clock, sample_matter
    ):
        engine = TemplateEngine(
            TemplateRegistry([chambers_like_template]),
            renderers={OutputFormat.DOCX: ExplodingRenderer("")},
            clock=fixed_clock,
        )

        result = engine.generate(chambers_like_template.id, sample_matter)

        assert result.errors == ["Generation failed"]

    def test_xlsx_template(self, engine, sample_referee):
        result = engine.generate("referees-2024", sample_referee)

        assert result.success is True
        assert result.mime_type == XLSX_MIME
        assert re.match(r"^GeneralCounsel_custom_\d+\.xlsx$", result.file_name)
        rows = extract_xlsx(result.buffer).rows
        assert rows[0] == ["Field", "Value"]
        assert ["First Name", "Ruth"] in rows

    def test_xlsx_control_characters(self, engine, sample_referee):
        """Word에서 붙여넣은 세로 탭 → XLSX도 DOCX처럼 성공."""
        sample_referee["mattersDiscuss"] = "line1\x0bline2"

        result = engine.generate("referees-2024", sample_referee)

        assert result.success is True
        assert ["Matters They Can Discuss", "line1line2"] in extract_xlsx(result.buffer).rows

    def test_deterministic_content(self, engine, sample_matter):
        """같은 입력 → 같은 필드 내용 (파일명 millis 제외)."""
        first = engine.generate("chambers-2024", sample_matter)
        second = engine.generate("chambers-2024", sample_matter)

        assert first.file_name != second.file_name
        assert extract_docx(first.buffer).paragraphs == extract_docx(second.buffer).paragraphs

    def test_logging(self, engine, sample_matter, caplog):
        with caplog.at_level(logging.INFO, logger="src.app.services.export"):
            engine.generate("nope", sample_matter)
            engine.generate("chambers-2024", sample_matter)

        levels = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.WARNING, "Template not found: nope") in levels
        assert any(lvl == logging.INFO and "Generated" in msg for lvl, msg in levels)


# =============================================================================
# Registry 위임 테스트
# =============================================================================


class TestRegistryDelegation:
    """register/get/list 위임 테스트."""

    def test_register_on_open_registry(self, chambers_like_template, fixed_clock):
        engine = TemplateEngine(TemplateRegistry(), clock=fixed_clock)

        engine.register_template(chambers_like_template)

        assert engine.get_template("test-chambers") is chambers_like_template
        assert engine.list_templates() == [chambers_like_template]

    def test_register_on_frozen_registry(self, engine, chambers_like_template):
        with pytest.raises(PolicyRejectError) as exc_info:
            engine.register_template(chambers_like_template)

        assert exc_info.value.code == ErrorCodes.REGISTRY_FROZEN

    def test_build_default_engine(self):
        engine = build_default_engine()

        assert [t.id for t in engine.list_templates()][:3] == [
            "duns100-2024",
            "chambers-2024",
            "legal500-2024",
        ]
        assert set(engine.renderers) == {OutputFormat.DOCX, OutputFormat.XLSX}


# =============================================================================
# generate_questionnaire 테스트
# =============================================================================


class TestGenerateQuestionnaire:
    """질문지 생성 테스트."""

    def test_success(self, engine, questionnaire_payload):
        result = engine.generate_questionnaire(QuestionnaireData.from_dict(questionnaire_payload))

        assert result.success is True
        assert result.mime_type == DOCX_MIME
        assert result.file_name == "LeviCo_duns_100_1700000000000.docx"

    def test_fallback_title(self, engine):
        result = engine.generate_questionnaire(QuestionnaireData())

        assert result.success is True
        assert result.file_name.startswith("submission_duns_100_")

    def test_render_failure_captured(self, engine):
        """잘못된 로고 바이트 → 실패 결과 (예외 전파 없음)."""
        result = engine.generate_questionnaire(QuestionnaireData(), logo=b"not an image")

        assert result.success is False
        assert len(result.errors) == 1
        assert result.buffer is None
