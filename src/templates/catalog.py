"""
기본 템플릿 카탈로그 로더 (catalog.yaml).

catalog.yaml 구조:
    templates:
      - id: chambers-2024
        name: ...
        type: chambers
        output_format: docx
        fields:
          - {name: title, label: Matter Title, type: text, required: true, mapped_from: title}
"""

from pathlib import Path
from typing import Any

import yaml

from src.domain.errors import ErrorCodes, PolicyRejectError
from src.domain.schemas import TemplateDefinition
from src.templates.registry import TemplateRegistry

DEFAULT_CATALOG_PATH = Path(__file__).parent / "catalog.yaml"


def parse_catalog(data: dict[str, Any], source: str = "<memory>") -> list[TemplateDefinition]:
    """
    catalog dict → TemplateDefinition 목록 (파일 순서 유지).

    Raises:
        PolicyRejectError: INVALID_TEMPLATE_SCHEMA
    """
    definitions = []
    for index, entry in enumerate(data.get("templates") or []):
        try:
            definitions.append(TemplateDefinition.from_dict(entry))
        except (KeyError, ValueError, TypeError) as e:
            raise PolicyRejectError(
                ErrorCodes.INVALID_TEMPLATE_SCHEMA,
                source=source,
                index=index,
                template_id=entry.get("id") if isinstance(entry, dict) else None,
                error=str(e),
            ) from e
    return definitions


def load_catalog(catalog_path: Path | None = None) -> list[TemplateDefinition]:
    """
    catalog.yaml 로드.

    Args:
        catalog_path: 카탈로그 경로 (None이면 패키지 기본 catalog.yaml)

    Returns:
        TemplateDefinition 목록
    """
    path = catalog_path or DEFAULT_CATALOG_PATH
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = yaml.safe_load(f) or {}
    return parse_catalog(data, source=str(path))


def build_default_registry(catalog_path: Path | None = None) -> TemplateRegistry:
    """카탈로그를 로드해 freeze된 레지스트리 생성."""
    return TemplateRegistry(load_catalog(catalog_path)).freeze()
