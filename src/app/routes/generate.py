"""
Generate Routes: 문서 생성 요청.

- POST /api/generate/questionnaire  → Dun's 100 질문지 DOCX
- POST /api/generate/{template_id}  → 스키마 기반 DOCX/XLSX

응답:
- 성공: 파일 바이트 + Content-Disposition: attachment
- 실패: {"errors": [...]} (템플릿 없음 404, 그 외 422)
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from src.app.routes.templates import get_engine
from src.domain.schemas import GenerationResult, QuestionnaireData

logger = logging.getLogger(__name__)

api_router = APIRouter()


class GenerateRequest(BaseModel):
    """스키마 기반 생성 요청 본문."""

    matter_data: dict[str, Any] = Field(default_factory=dict, alias="matterData")
    field_overrides: dict[str, Any] | None = Field(default=None, alias="fieldOverrides")


def to_response(result: GenerationResult, status_code: int = 422) -> Response:
    """GenerationResult → HTTP 응답."""
    if not result.success:
        return JSONResponse(status_code=status_code, content={"errors": result.errors})
    return Response(
        content=result.buffer,
        media_type=result.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{result.file_name}"'},
    )


# =============================================================================
# API Routes
# =============================================================================

# /{template_id} 보다 먼저 등록해야 함
@api_router.post("/questionnaire")
async def generate_questionnaire(
    request: Request,
    payload: dict[str, Any] = Body(default_factory=dict),
) -> Response:
    """질문지 생성 (본문 = 질문지 레코드, camelCase). 형식 오류 → 422."""
    try:
        data = QuestionnaireData.from_dict(payload)
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Invalid questionnaire payload: {e}")
        return JSONResponse(
            status_code=422,
            content={"errors": [f"Invalid questionnaire payload: {e}"]},
        )
    return to_response(get_engine(request).generate_questionnaire(data))


@api_router.post("/{template_id}")
async def generate_document(
    request: Request,
    template_id: str,
    payload: GenerateRequest,
) -> Response:
    """
    템플릿 기반 문서 생성.

    Args:
        template_id: 템플릿 id
        payload: {matterData, fieldOverrides?}
    """
    engine = get_engine(request)
    result = engine.generate(template_id, payload.matter_data, payload.field_overrides)

    status_code = 404 if engine.get_template(template_id) is None else 422
    return to_response(result, status_code)
