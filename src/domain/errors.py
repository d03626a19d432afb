"""
Error definitions for the export engine.

규칙:
- 조용한 실패 금지 → 설정/스키마 결함은 PolicyRejectError로 명시적 실패
- 런타임 실패(템플릿 없음, 검증 실패, 미지원 포맷, 렌더 실패)는
  예외 대신 GenerationResult(success=False)로 변환 (오케스트레이터 경계)
"""

from typing import Any


class PolicyRejectError(Exception):
    """
    엔진 정책 위반 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - 템플릿 스키마 자기모순 (select인데 options 없음 등)
    - freeze된 레지스트리에 등록 시도
    - 설정 파일 파싱 실패

    Usage:
        raise PolicyRejectError("INVALID_TEMPLATE_SCHEMA", template_id="x", field="y")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Registry / Schema ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    INVALID_TEMPLATE_SCHEMA = "INVALID_TEMPLATE_SCHEMA"
    REGISTRY_FROZEN = "REGISTRY_FROZEN"

    # === Config ===
    CONFIG_INVALID = "CONFIG_INVALID"
