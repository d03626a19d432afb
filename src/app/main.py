"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uvicorn src.app.main:app --reload
- 프로덕션: uvicorn src.app.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI

from src.app.routes import generate, templates
from src.app.services.export import TemplateEngine, build_default_engine
from src.core.config import load_config
from src.core.logging import setup_logging

# =============================================================================
# App Factory
# =============================================================================


def create_app(
    config_path: Path | None = None,
    engine: TemplateEngine | None = None,
) -> FastAPI:
    """
    앱 생성.

    Args:
        config_path: 설정 파일 경로 (None이면 루트 default.yaml)
        engine: 미리 구성한 엔진 (테스트용, None이면 설정 기반 기본 엔진)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        시작 시: 설정 로드, 로깅 설정, 엔진(레지스트리 freeze 포함) 구성
        """
        config = load_config(config_path)
        setup_logging(config.log_level)

        app.state.config = config
        app.state.engine = engine or build_default_engine(config)

        yield

    app = FastAPI(
        title="Legal Directory Export Engine",
        description="매터 데이터 → 법률 디렉토리 제출 문서 (DOCX/XLSX) 생성",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(templates.api_router, prefix="/api/templates", tags=["Templates API"])
    app.include_router(generate.api_router, prefix="/api/generate", tags=["Generate API"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "message": "Legal Directory Export Engine",
            "endpoints": {
                "templates": "/api/templates",
                "generate": "/api/generate/{template_id}",
                "questionnaire": "/api/generate/questionnaire",
            },
        }

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
