"""
Templates Routes: 템플릿 카탈로그 조회 / 레코드 사전 검증.

- GET  /api/templates
- GET  /api/templates/{template_id}
- POST /api/templates/{template_id}/validate
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from src.app.services.export import TemplateEngine
from src.domain.errors import ErrorCodes, PolicyRejectError

api_router = APIRouter()


def get_engine(request: Request) -> TemplateEngine:
    engine: TemplateEngine = request.app.state.engine
    return engine


# =============================================================================
# API Routes
# =============================================================================

@api_router.get("")
async def list_templates(request: Request) -> list[dict[str, Any]]:
    """등록된 템플릿 전체 (등록 순서)."""
    return [t.to_dict() for t in get_engine(request).list_templates()]


@api_router.get("/{template_id}")
async def get_template(request: Request, template_id: str) -> dict[str, Any]:
    """템플릿 상세 조회."""
    template = get_engine(request).get_template(template_id)
    if template is None:
        e = PolicyRejectError(ErrorCodes.TEMPLATE_NOT_FOUND, template_id=template_id)
        raise HTTPException(status_code=404, detail=e.to_dict())
    return template.to_dict()


@api_router.post("/{template_id}/validate")
async def validate_record(
    request: Request,
    template_id: str,
    record: dict[str, Any] = Body(default_factory=dict),
) -> dict[str, Any]:
    """
    생성 전 검증만 수행 (렌더링 없음).

    템플릿이 없어도 200 + valid=false (field="template").
    """
    return get_engine(request).validate(template_id, record).to_dict()
