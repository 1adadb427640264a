"""배치 처리 설정 모델.

실행 시작 시 한 번 만들어지고 이후에는 읽기만 한다 (frozen).
Settings(core/config.py)에서 processing_config()로 생성한다.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OutputFormat = Literal["jpeg", "png", "webp", "avif", "tiff", "original"]
FitMode = Literal["cover", "contain", "fill", "inside", "outside"]


class ResizeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    width: int | None = Field(default=1200, gt=0)
    height: int | None = Field(default=None, gt=0)
    fit: FitMode = "inside"


class OptimizationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    sharpen: bool = True
    remove_metadata: bool = True


class WatermarkConfig(BaseModel):
    """워터마크 설정.

    type은 일부러 자유 문자열로 둔다. image/text 외의 값이면
    워터마크 단계가 no-op이 된다 (에러 아님).
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    type: str = "text"
    position: str = "bottomRight"
    opacity: float = Field(default=0.6, ge=0.0, le=1.0)
    margin: int = Field(default=20, ge=0)

    # type == "image"
    image_path: str | None = "./assets/watermark.png"
    size: float = Field(default=0.2, gt=0.0)

    # type == "text"
    text: str | None = "Copyright © 2025"
    font: str = "Arial"
    font_size: int | None = Field(default=20, gt=0)
    font_color: str = "#ffffff"
    angle: float = 0.0


class ProcessingConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    output_format: OutputFormat = "jpeg"
    quality: int = Field(default=80, ge=1, le=100)
    resize: ResizeConfig = ResizeConfig()
    optimizations: OptimizationConfig = OptimizationConfig()
    watermark: WatermarkConfig = WatermarkConfig()
    flatten_background: str = "#ffffff"
