"""파일 하나에 변환 계획 + 워터마크를 적용하고 인코딩/저장한다."""

from pathlib import Path

from loguru import logger
from PIL import Image

from core.exceptions import EncodeFailure, TransformFailure
from model.image import SourceImage
from model.plan import EncodeOptions, TransformPlan, TransformStep
from model.stats import ExecutionResult
from processor import operations
from processor.watermark import Overlay, apply_watermark


def _apply_step(image: Image.Image, step: TransformStep, save_params: dict) -> Image.Image:
    if step.kind == "reorient":
        return operations.reorient(image)
    if step.kind == "resize":
        return operations.resize(image, step.width, step.height, step.fit)
    if step.kind == "sharpen":
        return operations.sharpen(image)
    if step.kind == "metadata":
        if step.strip:
            return operations.strip_metadata(image)
        save_params.update(operations.metadata_params(image))
        return image
    if step.kind == "flatten_alpha":
        return operations.flatten_alpha(image, step.background)
    raise TransformFailure(f"알 수 없는 변환 단계: {step.kind}")


def transform(
    source: SourceImage, plan: TransformPlan, overlay: Overlay | None = None
) -> tuple[Image.Image, dict, bool]:
    """계획 순서대로 적용한다. 워터마크는 FlattenAlpha 직전(없으면 마지막)에 합성.

    반환값: (결과 이미지, 메타데이터 save 인자, 워터마크 적용 여부)
    """
    image = source.image
    save_params: dict = {}
    watermarked = False
    watermark_done = False

    try:
        for step in plan.steps:
            if step.kind == "flatten_alpha" and not watermark_done:
                image, watermarked = apply_watermark(image, overlay)
                watermark_done = True
            logger.debug(f"  {source.path.name}: {step.kind} {image.size}")
            image = _apply_step(image, step, save_params)

        if not watermark_done:
            image, watermarked = apply_watermark(image, overlay)
    except (OSError, ValueError) as exc:
        raise TransformFailure(f"{source.path.name}: {exc}") from exc

    return image, save_params, watermarked


def encode(image: Image.Image, options: EncodeOptions, extra: dict | None = None) -> bytes:
    params = options.save_params(image.mode)
    params.update(extra or {})
    try:
        return operations.encode(image, options.pillow_format, params)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeFailure(f"{options.format}: {exc}") from exc


def execute(
    source: SourceImage,
    plan: TransformPlan,
    options: EncodeOptions,
    destination: Path,
    overlay: Overlay | None = None,
) -> ExecutionResult:
    """변환 → 인코딩 → 저장. 같은 이름의 기존 파일은 덮어쓴다."""
    image, metadata, watermarked = transform(source, plan, overlay)
    data = encode(image, options, metadata)

    try:
        destination.write_bytes(data)
    except OSError as exc:
        raise EncodeFailure(f"{destination.name}: {exc}") from exc

    return ExecutionResult(
        destination=destination,
        size_bytes=len(data),
        width=image.width,
        height=image.height,
        format=options.format,
        watermarked=watermarked,
    )
