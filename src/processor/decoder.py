"""입력 파일 → SourceImage."""

import struct
from pathlib import Path

from PIL import Image

from core.exceptions import DecodeFailure
from model.image import SourceImage
from processor import operations
from processor.formats import normalize_extension

# 90도 회전이 포함된 EXIF orientation 값 (가로/세로가 바뀐다)
_TRANSPOSED_ORIENTATIONS = frozenset({5, 6, 7, 8})
_ORIENTATION_TAG = 0x0112


def _open_raster(path: Path) -> tuple[Image.Image, str]:
    with Image.open(path) as img:
        img.load()
        decoded_format = (img.format or normalize_extension(path.suffix)).lower()
        image = operations.normalize_mode(img)
        if image is img:
            image = img.copy()
    return image, decoded_format


def load_source(path: Path) -> SourceImage:
    """파일을 디코딩한다. 실패하면 DecodeFailure."""
    path = Path(path)
    try:
        size_bytes = path.stat().st_size
        if normalize_extension(path.suffix) == "svg":
            image, decoded_format = operations.rasterize_svg(path.read_bytes()), "svg"
        else:
            image, decoded_format = _open_raster(path)
        orientation = image.getexif().get(_ORIENTATION_TAG, 1)
    except (OSError, SyntaxError, ValueError, EOFError, struct.error, Image.DecompressionBombError) as exc:
        # UnidentifiedImageError는 OSError, 깨진 XML/PNG 청크는 SyntaxError로 온다.
        # 잘린 GIF/TIFF는 플러그인에 따라 EOFError, struct.error가 난다
        raise DecodeFailure(f"{path.name}: {exc}") from exc

    width, height = image.size
    if orientation in _TRANSPOSED_ORIENTATIONS:
        width, height = height, width

    return SourceImage(
        path=path,
        image=image,
        width=width,
        height=height,
        has_alpha=operations.has_alpha(image),
        format=decoded_format,
        size_bytes=size_bytes,
    )
