"""
Core layer: 엔진 공통 기반 모듈.

역할:
- 경로 표현식 (paths.py)
- 출력 파일명 / 단조 시계 (ids.py)
- 설정 로드 (config.py), 로깅 설정 (logging.py)
"""

from .config import EngineConfig, QuestionnaireStyle, XlsxStyle, load_config
from .ids import MonotonicMillisClock, generate_export_filename, sanitize_title
from .logging import setup_logging
from .paths import PathExpression, resolve

__all__ = [
    # paths
    "PathExpression",
    "resolve",
    # ids
    "MonotonicMillisClock",
    "generate_export_filename",
    "sanitize_title",
    # config
    "EngineConfig",
    "XlsxStyle",
    "QuestionnaireStyle",
    "load_config",
    # logging
    "setup_logging",
]
