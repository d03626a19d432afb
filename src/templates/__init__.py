"""
Templates layer: 템플릿 정의 관리 모듈.

역할:
- 레지스트리 (registry.py): 등록 시 스키마 검증, freeze 후 불변
- 기본 카탈로그 (catalog.py + catalog.yaml)
"""

from .catalog import build_default_registry, load_catalog, parse_catalog
from .registry import TemplateRegistry, validate_definition

__all__ = [
    "TemplateRegistry",
    "validate_definition",
    "build_default_registry",
    "load_catalog",
    "parse_catalog",
]
