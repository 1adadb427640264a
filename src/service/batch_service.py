"""배치 오케스트레이터.

입력 디렉토리의 파일을 하나씩 처리하고 RunStatistics를 누적한다.
파일 단위 실패(ImageProcessingError)는 여기서만 잡는다. 실행 전체를
중단시키는 것은 입력 디렉토리를 읽을 수 없는 경우(InputDirectoryError) 하나뿐이다.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from loguru import logger

from core.exceptions import ImageProcessingError, InputDirectoryError
from model.config import ProcessingConfig
from model.stats import FileResult, RunStatistics
from processor import decoder, executor
from processor.formats import encode_options_for, is_supported_input, resolve_format
from processor.planner import build_plan
from processor.watermark import Overlay, build_overlay
from service.report import format_bytes, reduction_percent
from utility.timer import timer

SEPARATOR = "-" * 50


def list_entries(input_dir: Path) -> list[Path]:
    try:
        return sorted(Path(input_dir).iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise InputDirectoryError(f"입력 디렉토리를 읽을 수 없습니다: {input_dir} ({exc})") from exc


def output_path_for(source_path: Path, output_dir: Path, output_format: str) -> Path:
    return Path(output_dir) / f"{source_path.stem}.{output_format}"


def process_file(
    path: Path,
    output_dir: Path,
    config: ProcessingConfig,
    overlay: Overlay | None = None,
) -> FileResult:
    """파일 하나: 디코딩 → 포맷 결정 → 계획 → 실행. 실패는 예외로 올린다."""
    source = decoder.load_source(path)
    logger.info(f"  Original: {source.width}x{source.height}, {source.format}")

    output_format = resolve_format(path.suffix, source.has_alpha, config.output_format)
    plan = build_plan(source, config, output_format)
    options = encode_options_for(output_format, config.quality)
    destination = output_path_for(path, output_dir, output_format)

    result = executor.execute(source, plan, options, destination, overlay)

    logger.info(f"  Processed: {result.width}x{result.height}, {result.format}")
    logger.info(
        f"  Size: {format_bytes(source.size_bytes)} → {format_bytes(result.size_bytes)} "
        f"({reduction_percent(source.size_bytes, result.size_bytes):.2f}% reduction)"
    )
    return FileResult(
        name=path.name,
        status="succeeded",
        input_bytes=source.size_bytes,
        output_bytes=result.size_bytes,
        format=result.format,
        watermarked=result.watermarked,
    )


def _process_safely(
    path: Path, output_dir: Path, config: ProcessingConfig, overlay: Overlay | None
) -> FileResult:
    """파일 단위 실패 경계."""
    logger.info(f"Processing: {path.name}")
    try:
        return process_file(path, output_dir, config, overlay)
    except ImageProcessingError as exc:
        logger.error(f"  Error processing {path.name}: {exc.message}")
        return FileResult(name=path.name, status="errored", message=exc.message)
    except Exception as exc:
        # 코덱/래스터화 라이브러리의 예상 못한 예외도 파일 하나의 실패로 끝낸다
        logger.error(f"  Error processing {path.name}: {exc}")
        return FileResult(name=path.name, status="errored", message=str(exc) or type(exc).__name__)


def _classify(entry: Path) -> FileResult | None:
    """건너뛸 항목이면 skipped 결과를, 처리 대상이면 None을 반환한다."""
    if entry.is_dir():
        logger.info(f"Skipping directory: {entry.name}")
        return FileResult(name=entry.name, status="skipped", message="directory")
    if not is_supported_input(entry):
        logger.info(f"Skipping non-image file: {entry.name}")
        return FileResult(name=entry.name, status="skipped", message="unsupported extension")
    return None


def run_batch(
    input_dir: Path,
    output_dir: Path,
    config: ProcessingConfig,
    workers: int = 1,
) -> RunStatistics:
    """입력 디렉토리 전체를 처리하고 통계를 반환한다.

    workers > 1이면 스레드풀에서 파일을 병렬 처리한다. 이 경우에도 통계는
    호출 스레드에서만 갱신되고, 로그 순서는 입력 순서와 다를 수 있다.
    """
    stats = RunStatistics()

    with timer("batch") as t:
        entries = list_entries(input_dir)
        if not entries:
            logger.warning(f"No files found in the input directory: {input_dir}")
        else:
            logger.info(f"Found {len(entries)} files in the input directory.")
            Path(output_dir).mkdir(parents=True, exist_ok=True)
            overlay = build_overlay(config.watermark)

            targets = []
            for entry in entries:
                skipped = _classify(entry)
                if skipped:
                    stats.record(skipped)
                else:
                    targets.append(entry)

            if workers <= 1:
                for path in targets:
                    stats.record(_process_safely(path, output_dir, config, overlay))
                    logger.info(SEPARATOR)
            else:
                with ThreadPoolExecutor(max_workers=workers) as pool:
                    futures = [
                        pool.submit(_process_safely, path, output_dir, config, overlay)
                        for path in targets
                    ]
                    for future in as_completed(futures):
                        stats.record(future.result())

    stats.elapsed = t.elapsed
    return stats
