"""
E2E 테스트용 FastAPI TestClient 설정.

- 앱은 케이스마다 새로 생성 (lifespan에서 설정/로깅/엔진 구성)
- 엔진은 결정론적 시계를 쓰는 기본 카탈로그 엔진 주입
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from src.app.main import create_app
from src.app.services.export import TemplateEngine


@pytest.fixture
def client(engine: TemplateEngine) -> Generator[TestClient, None, None]:
    """FastAPI TestClient (lifespan 포함)."""
    with TestClient(create_app(engine=engine)) as client:
        yield client
