"""
입력 디렉토리의 이미지를 일괄 변환하고 요약 리포트를 출력한다.

사용법:
    cd src && python -m scripts.run_batch
    cd src && python -m scripts.run_batch --input ../input --output ../output --workers 4

나머지 설정(포맷, 품질, 리사이즈, 워터마크)은 환경 변수 / .env로 준다.
    OUTPUT_FORMAT=webp RESIZE__WIDTH=800 WATERMARK__ENABLED=true python -m scripts.run_batch
"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from core.config import settings
from core.exceptions import InputDirectoryError
from service.batch_service import run_batch
from service.report import render_report
from utility.logger import setup_logger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Batch resize / optimize / watermark images")
    parser.add_argument("--input", default=settings.INPUT_DIR, help="input directory")
    parser.add_argument("--output", default=settings.OUTPUT_DIR, help="output directory")
    parser.add_argument("--workers", type=int, default=settings.WORKERS, help="worker threads (1 = sequential)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)

    config = settings.processing_config()
    try:
        stats = run_batch(Path(args.input), Path(args.output), config, workers=args.workers)
    except InputDirectoryError as exc:
        logger.error(f"An error occurred: {exc.message}")
        return 1

    print(render_report(stats, watermark_enabled=config.watermark.enabled))
    return 0


if __name__ == "__main__":
    sys.exit(main())
