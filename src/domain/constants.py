"""
Domain Constants: 엔진 전역 상수.

파일명 정책, MIME 타입, 고정 행 수 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Export Filenames (출력 파일명 정책)
# =============================================================================
# {title}_{directory}_{epoch_millis}.{ext}
# - title: [A-Za-z0-9] 이외 문자 제거, 최대 50자
# - title 없음/전부 제거됨 → "matter"

FILENAME_TITLE_MAX_LENGTH = 50
FILENAME_FALLBACK_TITLE = "matter"
QUESTIONNAIRE_FALLBACK_TITLE = "submission"

# =============================================================================
# Fixed Cardinality (질문지 고정 행 수)
# =============================================================================
# 데이터 개수와 무관하게 항상 전체 길이로 렌더링 (부족분은 빈 셀)

QUESTIONNAIRE_LAWYER_ROWS = 10
QUESTIONNAIRE_MATTER_BLOCKS = 10
QUESTIONNAIRE_REFEREE_ROWS = 10

# =============================================================================
# MIME Types
# =============================================================================

MIME_TYPES = {
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pdf": "application/pdf",
}


def get_mime_type(filename: str) -> str:
    """
    파일명(또는 ".docx" 같은 확장자)에서 MIME 타입 추출.

    Args:
        filename: 파일명 (확장자 포함)

    Returns:
        MIME 타입 문자열 (알 수 없으면 octet-stream)
    """
    import os

    ext = os.path.splitext(filename)[1].lower() or filename.lower()
    if not ext.startswith("."):
        ext = f".{ext}"
    return MIME_TYPES.get(ext, "application/octet-stream")
