"""처리 시간 측정 유틸리티."""

import time
from contextlib import contextmanager
from dataclasses import dataclass

from loguru import logger


@contextmanager
def timer(label: str = ""):
    """컨텍스트 매니저: 블록 실행 시간(wall-clock)을 측정한다.

    사용법:
        with timer("batch") as t:
            ...
        stats.elapsed = t.elapsed
    """
    t = TimerResult()
    start = time.perf_counter()
    try:
        yield t
    finally:
        t.elapsed = time.perf_counter() - start
        if label:
            logger.debug(f"[{label}] {t.elapsed:.3f}s")


@dataclass
class TimerResult:
    elapsed: float = 0.0
