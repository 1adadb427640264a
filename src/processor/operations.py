"""
순수 이미지 처리 함수.
대부분 PIL.Image를 받아서 PIL.Image를 반환한다.
"""

import io

from PIL import Image, ImageColor, ImageFilter, ImageOps

from model.config import FitMode

ALPHA_MODES = frozenset({"RGBA", "LA", "PA", "RGBa", "La"})


def has_alpha(image: Image.Image) -> bool:
    return image.mode in ALPHA_MODES or "transparency" in image.info


def normalize_mode(image: Image.Image) -> Image.Image:
    """팔레트/그레이/CMYK 등을 RGB 또는 RGBA로 맞춘다."""
    target = "RGBA" if has_alpha(image) else "RGB"
    if image.mode == target:
        return image
    return image.convert(target)


def reorient(image: Image.Image) -> Image.Image:
    """EXIF orientation을 픽셀에 반영하고 태그를 제거한다."""
    return ImageOps.exif_transpose(image)


def resize(image: Image.Image, width: int, height: int, fit: FitMode = "inside") -> Image.Image:
    if image.size == (width, height):
        return image

    if fit == "cover":
        return ImageOps.fit(image, (width, height), Image.LANCZOS)
    if fit == "contain":
        color = (0, 0, 0, 0) if image.mode == "RGBA" else (0, 0, 0)
        return ImageOps.pad(image, (width, height), Image.LANCZOS, color=color)
    return image.resize((width, height), Image.LANCZOS)


def resize_to_width(image: Image.Image, width: int) -> Image.Image:
    """가로를 width로 맞추고 세로는 비율대로."""
    width = max(1, width)
    height = max(1, round(image.height * width / image.width))
    return image.resize((width, height), Image.LANCZOS)


def sharpen(image: Image.Image) -> Image.Image:
    return image.filter(ImageFilter.SHARPEN)


def strip_metadata(image: Image.Image) -> Image.Image:
    for key in ("exif", "icc_profile", "xmp", "XML:com.adobe.xmp", "comment"):
        image.info.pop(key, None)
    return image


def metadata_params(image: Image.Image) -> dict:
    """메타데이터 보존 시 인코더에 넘길 exif/icc 인자."""
    params = {}
    exif = image.getexif()
    if exif:
        params["exif"] = exif.tobytes()
    icc = image.info.get("icc_profile")
    if icc:
        params["icc_profile"] = icc
    return params


def multiply_alpha(image: Image.Image, opacity: float) -> Image.Image:
    """알파 채널에 opacity를 곱한다 (기존 투명도는 곱셈으로 유지)."""
    overlay = image.convert("RGBA")
    alpha = overlay.getchannel("A").point(lambda a: round(a * opacity))
    overlay.putalpha(alpha)
    return overlay


def composite_over(base: Image.Image, layer: Image.Image, position: tuple[int, int] = (0, 0)) -> Image.Image:
    """layer를 position에 "over" 블렌딩한다. base의 모드는 유지된다."""
    canvas = Image.new("RGBA", base.size, (0, 0, 0, 0))
    # 빈 캔버스이므로 마스크 없이 그대로 복사한다 (블렌딩은 alpha_composite 한 번)
    canvas.paste(layer, position)

    blended = Image.alpha_composite(base.convert("RGBA"), canvas)
    if base.mode != "RGBA":
        blended = blended.convert(base.mode)
    return blended


def flatten_alpha(image: Image.Image, background: str = "#ffffff") -> Image.Image:
    """불투명 배경 위에 합성해서 알파 채널을 없앤다."""
    color = ImageColor.getrgb(background)[:3]
    canvas = Image.new("RGBA", image.size, color + (255,))
    return Image.alpha_composite(canvas, image.convert("RGBA")).convert("RGB")


def encode(image: Image.Image, pillow_format: str, params: dict) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=pillow_format, **params)
    return buf.getvalue()


def rasterize_svg(markup: bytes, width: int | None = None, height: int | None = None) -> Image.Image:
    """SVG 마크업을 RGBA 래스터로 변환한다."""
    # libcairo는 SVG를 실제로 다룰 때만 로드
    import cairosvg

    png = cairosvg.svg2png(bytestring=markup, output_width=width, output_height=height)
    return Image.open(io.BytesIO(png)).convert("RGBA")
