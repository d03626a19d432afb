"""
엔진 설정: default.yaml 로드.

- 파일 없으면 기본값 (렌더러 기본 스타일 포함)
- 잘못된 값 → PolicyRejectError(CONFIG_INVALID)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.domain.errors import ErrorCodes, PolicyRejectError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"


@dataclass
class XlsxStyle:
    """필드 표 XLSX 스타일."""
    sheet_title: str = "Submission"
    creator: str = "Lera AI"
    header_fill: str = "4472C4"
    header_font_color: str = "FFFFFF"
    min_column_width: int = 10
    max_column_width: int = 50


@dataclass
class QuestionnaireStyle:
    """RTL 질문지 DOCX 스타일."""
    font: str = "David"
    font_size_pt: float = 11
    header_fill: str = "1F4E79"  # blue
    header_font_color: str = "FFFFFF"
    label_fill: str = "BF9000"  # gold
    logo_path: Path | None = None
    logo_width_mm: int = 40


@dataclass
class EngineConfig:
    """엔진 전체 설정."""
    log_level: str = "INFO"
    fallback_title: str = "matter"
    catalog_path: Path | None = None
    xlsx: XlsxStyle = field(default_factory=XlsxStyle)
    questionnaire: QuestionnaireStyle = field(default_factory=QuestionnaireStyle)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "EngineConfig":
        """
        default.yaml 내용 → EngineConfig.

        Args:
            data: yaml.safe_load 결과
            base_dir: 상대 경로(catalog_path, logo_path) 기준 디렉터리
        """
        base_dir = base_dir or Path.cwd()
        logging_cfg = data.get("logging") or {}
        export_cfg = data.get("export") or {}
        xlsx_cfg = data.get("xlsx") or {}
        q_cfg = dict(data.get("questionnaire") or {})

        try:
            xlsx = XlsxStyle(**xlsx_cfg)
            logo_path = q_cfg.pop("logo_path", None)
            questionnaire = QuestionnaireStyle(
                **q_cfg,
                logo_path=_resolve_path(logo_path, base_dir),
            )
        except TypeError as e:
            raise PolicyRejectError(ErrorCodes.CONFIG_INVALID, error=str(e)) from e

        if xlsx.min_column_width > xlsx.max_column_width:
            raise PolicyRejectError(
                ErrorCodes.CONFIG_INVALID,
                error="xlsx.min_column_width exceeds xlsx.max_column_width",
                min_column_width=xlsx.min_column_width,
                max_column_width=xlsx.max_column_width,
            )

        return cls(
            log_level=str(logging_cfg.get("level", "INFO")).upper(),
            fallback_title=export_cfg.get("fallback_title", "matter"),
            catalog_path=_resolve_path(data.get("catalog_path"), base_dir),
            xlsx=xlsx,
            questionnaire=questionnaire,
        )


def _resolve_path(value: str | None, base_dir: Path) -> Path | None:
    if not value:
        return None
    path = Path(value)
    return path if path.is_absolute() else base_dir / path


def load_config(config_path: Path | None = None) -> EngineConfig:
    """
    설정 파일 로드.

    Args:
        config_path: 설정 파일 경로 (None이면 프로젝트 루트의 default.yaml)

    Returns:
        EngineConfig (파일 없으면 기본값)

    Raises:
        PolicyRejectError: CONFIG_INVALID
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return EngineConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise PolicyRejectError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            error=str(e),
        ) from e

    if not isinstance(data, dict):
        raise PolicyRejectError(
            ErrorCodes.CONFIG_INVALID,
            path=str(config_path),
            error="top-level mapping expected",
        )

    return EngineConfig.from_dict(data, base_dir=config_path.parent)
