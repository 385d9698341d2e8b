"""
utils/logger.py
로그 기록 전담 - 다른 파일에서 from utils.logger import logger 로 사용

[구성]
- 봇 로거 "onepiece_bot" — stdout 1개 핸들러, propagate 끔 (중복 출력 방지)
- 라이브러리 로거(apscheduler / telegram / httpx)도 같은 핸들러로 출력
  단, WARNING 이상만 — httpx 는 getUpdates 롱폴링 요청마다 INFO 를 남김

[수정이력]
- v1.1: LOG_LEVEL 환경변수 지원 (DEBUG 전환용). 잘못된 값이면 INFO + 경고 1회
- v1.2: 라이브러리 로거를 봇과 같은 형식으로 출력 (WARNING 이상)
"""

import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s — %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LIBRARY_LOGGERS = ("apscheduler", "telegram", "httpx")


def resolve_level(value: str | None) -> tuple[int, bool]:
    """LOG_LEVEL 문자열 → (logging 레벨, 유효 여부). 미설정은 INFO 로 유효 처리."""
    if not value:
        return logging.INFO, True
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level, True
    return logging.INFO, False


def _make_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def route_library_loggers(handler: logging.Handler) -> None:
    """라이브러리 로거 → 봇 핸들러 (WARNING 이상). 모듈 로드 시 1회."""
    for lib in LIBRARY_LOGGERS:
        lib_logger = logging.getLogger(lib)
        lib_logger.setLevel(logging.WARNING)
        if handler not in lib_logger.handlers:
            lib_logger.addHandler(handler)
        lib_logger.propagate = False


def get_logger(name: str, level_name: str | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    raw = os.environ.get("LOG_LEVEL") if level_name is None else level_name
    level, valid = resolve_level(raw)
    logger.setLevel(level)
    logger.propagate = False

    handler = _make_handler(level)
    logger.addHandler(handler)

    if not valid:
        logger.warning(f"[logger] 알 수 없는 LOG_LEVEL={raw!r} — INFO 사용")
    return logger


logger = get_logger("onepiece_bot")
route_library_loggers(logger.handlers[0])
