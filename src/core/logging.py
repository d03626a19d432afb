"""
Logging 설정.

모듈별 logger는 logging.getLogger(__name__)로 가져오고,
진입점(app lifespan, scripts)에서 setup_logging()을 한 번 호출.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    루트 logger에 콘솔 핸들러 설정.

    여러 번 호출돼도 핸들러가 중복되지 않음.

    Args:
        level: 로그 레벨 이름 (DEBUG, INFO, WARNING, ...)

    Returns:
        설정된 루트 logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in list(root_logger.handlers):
        if getattr(handler, "_export_engine_handler", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    console_handler._export_engine_handler = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    return root_logger
