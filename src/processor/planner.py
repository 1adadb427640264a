"""파일별 변환 계획 생성.

적용 순서는 고정이다:
    Reorient → Resize → Sharpen → MetadataPolicy → (워터마크) → FlattenAlpha
리사이즈는 똑바로 선 픽셀 기준이어야 하고, 워터마크는 최종 크기 기준으로
배치되며, 평탄화는 워터마크 합성 이후의 결과에만 적용된다.
"""

from model.config import FitMode, ProcessingConfig
from model.image import SourceImage
from model.plan import (
    FlattenAlpha,
    MetadataPolicy,
    Reorient,
    Resize,
    Sharpen,
    TransformPlan,
)

# 알파 채널을 표현할 수 없는 출력 포맷
OPAQUE_FORMATS = frozenset({"jpeg"})


def _scaled(width: int, height: int, scale: float) -> tuple[int, int]:
    return max(1, round(width * scale)), max(1, round(height * scale))


def resolve_resize(
    src_width: int,
    src_height: int,
    width: int | None,
    height: int | None,
    fit: FitMode = "inside",
) -> tuple[int, int]:
    """리사이즈 목표 크기를 계산한다. 어느 축도 원본보다 커지지 않는다."""
    if width is None and height is None:
        return src_width, src_height

    if width is None or height is None:
        scale = width / src_width if width is not None else height / src_height
        return _scaled(src_width, src_height, min(scale, 1.0))

    if fit == "fill":
        return min(width, src_width), min(height, src_height)

    scale_x = width / src_width
    scale_y = height / src_height

    if fit in ("cover", "outside"):
        scale = min(max(scale_x, scale_y), 1.0)
    else:
        scale = min(scale_x, scale_y, 1.0)
    scaled_w, scaled_h = _scaled(src_width, src_height, scale)

    if fit == "cover":
        return min(width, scaled_w), min(height, scaled_h)
    if fit == "contain":
        # 박스(원본 크기로 제한) 안에 레터박스
        return min(width, src_width), min(height, src_height)
    return scaled_w, scaled_h


def build_plan(source: SourceImage, config: ProcessingConfig, output_format: str) -> TransformPlan:
    steps = [Reorient()]

    resize = config.resize
    if resize.enabled:
        target_w, target_h = resolve_resize(
            source.width, source.height, resize.width, resize.height, resize.fit
        )
        steps.append(Resize(width=target_w, height=target_h, fit=resize.fit))

    if config.optimizations.sharpen:
        steps.append(Sharpen())

    steps.append(MetadataPolicy(strip=config.optimizations.remove_metadata))

    if output_format in OPAQUE_FORMATS and source.has_alpha:
        steps.append(FlattenAlpha(background=config.flatten_background))

    return TransformPlan(steps=tuple(steps))
