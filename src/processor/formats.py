"""출력 포맷 결정 + 포맷별 인코딩 옵션."""

from pathlib import Path

from model.plan import (
    AvifOptions,
    EncodeOptions,
    JpegOptions,
    PngOptions,
    TiffOptions,
    WebpOptions,
)

SUPPORTED_OUTPUTS = ("jpeg", "png", "webp", "avif", "tiff")

# svg는 입력 전용 (항상 fallback 경로로 간다)
INPUT_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "webp", "gif", "avif", "tiff", "tif", "svg"})

_ALIASES = {"jpg": "jpeg", "tif": "tiff"}


def normalize_extension(extension: str) -> str:
    """".JPG" → "jpeg" 처럼 확장자를 포맷 태그로 정규화한다."""
    ext = extension.lower().lstrip(".")
    return _ALIASES.get(ext, ext)


def is_supported_input(path: Path) -> bool:
    return path.suffix.lower().lstrip(".") in INPUT_EXTENSIONS


def resolve_format(extension: str, has_alpha: bool, selector: str = "original") -> str:
    """출력 포맷을 결정한다. 포맷 선택 때문에 에러가 나는 경우는 없다.

    - selector가 "original"이면 입력 확장자를, 아니면 selector를 후보로 쓴다.
    - 후보가 지원 목록에 없으면 알파가 있을 때 png, 없으면 jpeg.
    """
    if selector == "original":
        candidate = normalize_extension(extension)
    else:
        candidate = normalize_extension(selector)

    if candidate not in SUPPORTED_OUTPUTS:
        return "png" if has_alpha else "jpeg"
    return candidate


def encode_options_for(output_format: str, quality: int = 80) -> EncodeOptions:
    if output_format == "jpeg":
        return JpegOptions(quality=quality)
    if output_format == "png":
        return PngOptions()
    if output_format == "webp":
        return WebpOptions(quality=quality)
    if output_format == "avif":
        return AvifOptions(quality=quality)
    if output_format == "tiff":
        return TiffOptions(quality=quality)
    raise ValueError(f"지원하지 않는 출력 포맷: {output_format}")
