"""
Export 파일명 생성.

포맷: {title}_{directory}_{epoch_millis}.{ext}
- title: [A-Za-z0-9]만 남기고 최대 50자, 비면 fallback
- epoch_millis: 프로세스 내 단조 증가 (같은 ms 동시 호출 충돌 방지)

주의: 프로세스 간 고유성은 보장하지 않음 → 저장소 키로 파일명만 쓰지 말 것.
"""

import re
import threading
import time
from collections.abc import Callable

from src.domain.constants import FILENAME_FALLBACK_TITLE, FILENAME_TITLE_MAX_LENGTH

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9]")


class MonotonicMillisClock:
    """
    epoch milliseconds, 프로세스 내에서 strictly increasing.

    같은 ms에 두 번 호출되면 두 번째는 +1ms.
    """

    def __init__(self, time_source: Callable[[], float] = time.time):
        self._time_source = time_source
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        now = int(self._time_source() * 1000)
        with self._lock:
            if now <= self._last:
                now = self._last + 1
            self._last = now
            return now


default_clock = MonotonicMillisClock()


def sanitize_title(title: object, fallback: str = FILENAME_FALLBACK_TITLE) -> str:
    """
    파일명에 사용할 수 있도록 제목 정리.

    - ASCII 알파벳/숫자 이외 모두 제거 (공백, 한글, 기호 포함)
    - 최대 50자
    - 결과가 비면 fallback
    """
    sanitized = _UNSAFE_CHARS.sub("", str(title) if title else "")[:FILENAME_TITLE_MAX_LENGTH]
    return sanitized or fallback


def generate_export_filename(
    title: object,
    directory: str,
    extension: str,
    clock: Callable[[], int] = default_clock,
    fallback: str = FILENAME_FALLBACK_TITLE,
) -> str:
    """
    Export 파일명 생성.

    Args:
        title: 매터 제목 (없으면 fallback)
        directory: 템플릿 타입 (chambers, legal_500, ...)
        extension: 출력 포맷 (docx, xlsx)
        clock: epoch millis 공급자
        fallback: 제목이 비었을 때 사용할 이름

    Returns:
        예: "AcmeAcquisition_chambers_1718000000000.docx"
    """
    safe_title = sanitize_title(title, fallback=fallback)
    return f"{safe_title}_{directory}_{clock()}.{extension}"
