"""워터마크 합성.

이미지/텍스트 두 가지 전략이 같은 Overlay 인터페이스(build(base_size))를
구현한다. executor는 종류와 상관없이 apply_watermark()만 호출한다.

배치 기준은 모든 변환(리사이즈 포함)이 끝난 뒤의 최종 크기다.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from loguru import logger
from PIL import Image

from core.exceptions import WatermarkAssetMissing
from model.config import WatermarkConfig
from model.watermark import AnchorClass, OverlayGeometry, OverlayLayer, TextPlacement
from processor import operations

# position(소문자) → (가로, 세로) anchor
ANCHORS: dict[str, AnchorClass] = {
    "topleft": AnchorClass(horizontal="start", vertical="start"),
    "top": AnchorClass(horizontal="center", vertical="start"),
    "topright": AnchorClass(horizontal="end", vertical="start"),
    "left": AnchorClass(horizontal="start", vertical="center"),
    "center": AnchorClass(horizontal="center", vertical="center"),
    "right": AnchorClass(horizontal="end", vertical="center"),
    "bottomleft": AnchorClass(horizontal="start", vertical="end"),
    "bottom": AnchorClass(horizontal="center", vertical="end"),
    "bottomright": AnchorClass(horizontal="end", vertical="end"),
}
DEFAULT_ANCHOR = ANCHORS["bottomright"]

# 텍스트 레이어 anchor → SVG text-anchor / baseline
_TEXT_ANCHOR = {"start": "start", "center": "middle", "end": "end"}
_BASELINE = {"start": "hanging", "center": "middle", "end": "alphabetic"}

_MARKUP_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&apos;",
}

MIN_FONT_SIZE = 16
FONT_SIZE_RATIO = 0.02


def anchor_for(position: str | None) -> AnchorClass:
    """인식하지 못한 position은 bottomRight로 처리한다."""
    return ANCHORS.get(str(position or "").lower(), DEFAULT_ANCHOR)


def overlay_geometry(anchor: AnchorClass, margin: int) -> OverlayGeometry:
    """사용 중인 가장자리에만 margin 오프셋을 준다. center 축은 오프셋 없음."""
    offsets = {}
    if anchor.vertical == "start":
        offsets["top"] = margin
    elif anchor.vertical == "end":
        offsets["bottom"] = margin

    if anchor.horizontal == "start":
        offsets["left"] = margin
    elif anchor.horizontal == "end":
        offsets["right"] = margin

    return OverlayGeometry(anchor=anchor, **offsets)


def escape_markup(text: str) -> str:
    return "".join(_MARKUP_ESCAPES.get(ch, ch) for ch in str(text))


def resolve_font_size(font_size: int | None, base_width: int) -> int:
    if font_size:
        return font_size
    return max(MIN_FONT_SIZE, round(base_width * FONT_SIZE_RATIO))


def text_placement(
    anchor: AnchorClass, base_size: tuple[int, int], margin: int, font_size: int
) -> TextPlacement:
    """텍스트 기준점 (x, y)와 정렬 방식을 계산한다."""
    base_w, base_h = base_size

    if anchor.horizontal == "start":
        x = margin
    elif anchor.horizontal == "end":
        x = base_w - margin
    else:
        x = base_w / 2

    if anchor.vertical == "start":
        y = margin + font_size
    elif anchor.vertical == "end":
        y = base_h - margin
    else:
        y = base_h / 2

    return TextPlacement(
        x=x,
        y=y,
        text_anchor=_TEXT_ANCHOR[anchor.horizontal],
        baseline=_BASELINE[anchor.vertical],
        font_size=font_size,
    )


def _num(value: float) -> str:
    return f"{value:g}"


def render_text_markup(
    text: str,
    base_size: tuple[int, int],
    placement: TextPlacement,
    *,
    font: str = "Arial",
    color: str = "#ffffff",
    opacity: float = 1.0,
    angle: float = 0.0,
) -> str:
    """캔버스 전체 크기의 SVG 한 장. 회전은 텍스트 기준점 (x, y) 중심."""
    width, height = base_size
    x, y = _num(placement.x), _num(placement.y)
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}">'
        f'<text x="{x}" y="{y}"'
        f' text-anchor="{placement.text_anchor}"'
        f' dominant-baseline="{placement.baseline}"'
        f' alignment-baseline="{placement.baseline}"'
        f' font-family="{escape_markup(font)}"'
        f' font-size="{placement.font_size}px"'
        f' font-weight="normal"'
        f' fill="{escape_markup(color)}"'
        f' opacity="{_num(opacity)}"'
        f' transform="rotate({_num(angle)}, {x}, {y})">'
        f"{escape_markup(text)}</text>"
        "</svg>"
    )


class Overlay(ABC):
    def __init__(self, config: WatermarkConfig):
        self.config = config

    @property
    def label(self) -> str:
        return f"{self.config.type} watermark"

    @abstractmethod
    def build(self, base_size: tuple[int, int]) -> OverlayLayer:
        """base 크기에 맞춘 RGBA 레이어와 배치 정보를 만든다."""


class ImageOverlay(Overlay):
    def build(self, base_size: tuple[int, int]) -> OverlayLayer:
        path = Path(self.config.image_path)
        if not path.is_file():
            raise WatermarkAssetMissing(f"워터마크 이미지 없음: {path}")

        with Image.open(path) as mark:
            mark.load()
            resized = operations.resize_to_width(
                mark.convert("RGBA"), round(base_size[0] * self.config.size)
            )
        raster = operations.multiply_alpha(resized, self.config.opacity)

        anchor = anchor_for(self.config.position)
        return OverlayLayer(raster=raster, geometry=overlay_geometry(anchor, self.config.margin))

    @property
    def label(self) -> str:
        return f"image watermark ({self.config.position}, {round(self.config.opacity * 100)}% opacity)"


class TextOverlay(Overlay):
    def markup(self, base_size: tuple[int, int]) -> str:
        anchor = anchor_for(self.config.position)
        font_size = resolve_font_size(self.config.font_size, base_size[0])
        placement = text_placement(anchor, base_size, self.config.margin, font_size)
        return render_text_markup(
            self.config.text,
            base_size,
            placement,
            font=self.config.font or "Arial",
            color=self.config.font_color or "white",
            opacity=self.config.opacity,
            angle=self.config.angle or 0.0,
        )

    def build(self, base_size: tuple[int, int]) -> OverlayLayer:
        width, height = base_size
        raster = operations.rasterize_svg(self.markup(base_size).encode("utf-8"), width, height)
        # 위치는 SVG 좌표에 이미 들어 있으므로 원점(좌상단)에 그대로 붙인다
        origin = OverlayGeometry(anchor=AnchorClass(horizontal="start", vertical="start"))
        return OverlayLayer(raster=raster, geometry=origin)

    @property
    def label(self) -> str:
        return f'text watermark: "{self.config.text}"'


def build_overlay(config: WatermarkConfig) -> Overlay | None:
    """설정에서 워터마크 전략을 고른다. 꺼져 있거나 설정이 불완전하면 None."""
    if not config.enabled:
        return None
    if config.type == "image" and config.image_path:
        return ImageOverlay(config)
    if config.type == "text" and config.text:
        return TextOverlay(config)

    logger.warning(f"Watermark disabled: unsupported type or missing fields (type={config.type!r})")
    return None


def apply_watermark(image: Image.Image, overlay: Overlay | None) -> tuple[Image.Image, bool]:
    """레이어를 만들어 "over" 합성한다. 반환값: (이미지, 적용 여부)."""
    if overlay is None:
        return image, False

    try:
        layer = overlay.build(image.size)
    except WatermarkAssetMissing as exc:
        logger.warning(f"  Watermark skipped: {exc.message}")
        return image, False

    position = layer.geometry.position(image.size, layer.raster.size)
    result = operations.composite_over(image, layer.raster, position)
    logger.info(f"  Applied {overlay.label}")
    return result, True
