"""워터마크 배치 계산 결과 타입."""

from typing import Literal

from PIL import Image
from pydantic import BaseModel, ConfigDict

AxisClass = Literal["start", "center", "end"]


class AnchorClass(BaseModel):
    model_config = ConfigDict(frozen=True)

    horizontal: AxisClass
    vertical: AxisClass


class OverlayGeometry(BaseModel):
    """anchor 기준 픽셀 오프셋. 축마다 최대 하나만 설정된다."""

    model_config = ConfigDict(frozen=True)

    anchor: AnchorClass
    top: int | None = None
    bottom: int | None = None
    left: int | None = None
    right: int | None = None

    def position(self, base_size: tuple[int, int], layer_size: tuple[int, int]) -> tuple[int, int]:
        """레이어 좌상단 좌표를 계산한다."""
        base_w, base_h = base_size
        layer_w, layer_h = layer_size

        if self.anchor.horizontal == "start":
            x = self.left or 0
        elif self.anchor.horizontal == "end":
            x = base_w - layer_w - (self.right or 0)
        else:
            x = (base_w - layer_w) // 2

        if self.anchor.vertical == "start":
            y = self.top or 0
        elif self.anchor.vertical == "end":
            y = base_h - layer_h - (self.bottom or 0)
        else:
            y = (base_h - layer_h) // 2

        return x, y


class TextPlacement(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    text_anchor: Literal["start", "middle", "end"]
    baseline: Literal["hanging", "middle", "alphabetic"]
    font_size: int


class OverlayLayer(BaseModel):
    """Overlay.build()의 결과: RGBA 래스터 + 배치 정보."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    raster: Image.Image
    geometry: OverlayGeometry
