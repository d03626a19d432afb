"""
FastAPI Routes.

API 라우트 (REST): 템플릿 조회/검증, 문서 생성
"""

from . import generate, templates

__all__ = ["generate", "templates"]
