"""
Application Services.

역할:
- validate: 템플릿 스키마 기준 레코드 검증 (필수/길이)
- mapping: 템플릿 필드 → 값 맵 (override 우선)
- export: 검증 → 매핑 → 렌더링 오케스트레이션
"""

from .export import TemplateEngine, build_default_engine
from .mapping import map_fields
from .validate import validate_record, validate_template

__all__ = [
    "TemplateEngine",
    "build_default_engine",
    "map_fields",
    "validate_record",
    "validate_template",
]
