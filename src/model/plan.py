"""변환 계획(TransformPlan)과 인코딩 옵션(EncodeOptions).

둘 다 닫힌 variant 집합이다. 단계 순서는 planner가 고정된 순서로
리스트를 만들어서 보장하고, executor는 kind로 분기한다.
"""

from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from model.config import FitMode


class _Step(BaseModel):
    model_config = ConfigDict(frozen=True)


class Reorient(_Step):
    kind: Literal["reorient"] = "reorient"


class Resize(_Step):
    """width/height는 확대 금지가 적용된 최종 목표 크기."""

    kind: Literal["resize"] = "resize"
    width: int
    height: int
    fit: FitMode = "inside"


class Sharpen(_Step):
    kind: Literal["sharpen"] = "sharpen"


class MetadataPolicy(_Step):
    kind: Literal["metadata"] = "metadata"
    strip: bool = True


class FlattenAlpha(_Step):
    kind: Literal["flatten_alpha"] = "flatten_alpha"
    background: str = "#ffffff"


TransformStep = Annotated[
    Union[Reorient, Resize, Sharpen, MetadataPolicy, FlattenAlpha],
    Field(discriminator="kind"),
]


class TransformPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    steps: tuple[TransformStep, ...] = ()

    @property
    def kinds(self) -> list[str]:
        return [step.kind for step in self.steps]

    def find(self, kind: str) -> TransformStep | None:
        for step in self.steps:
            if step.kind == kind:
                return step
        return None

    def has(self, kind: str) -> bool:
        return self.find(kind) is not None


# --- 인코딩 옵션 ---


class _EncodeOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    pillow_format: ClassVar[str]

    def save_params(self, mode: str = "RGB") -> dict:
        """PIL Image.save()에 넘길 키워드 인자."""
        return self.model_dump(exclude={"format"})


class JpegOptions(_EncodeOptions):
    pillow_format: ClassVar[str] = "JPEG"

    format: Literal["jpeg"] = "jpeg"
    quality: int = 80
    # 허프만 테이블 최적화 + progressive: 고효율 인코딩 모드
    optimize: bool = True
    progressive: bool = True


class PngOptions(_EncodeOptions):
    pillow_format: ClassVar[str] = "PNG"

    format: Literal["png"] = "png"
    compress_level: int = 9


class WebpOptions(_EncodeOptions):
    pillow_format: ClassVar[str] = "WEBP"

    format: Literal["webp"] = "webp"
    quality: int = 80
    lossless: bool = False


class AvifOptions(_EncodeOptions):
    pillow_format: ClassVar[str] = "AVIF"

    format: Literal["avif"] = "avif"
    quality: int = 80


class TiffOptions(_EncodeOptions):
    pillow_format: ClassVar[str] = "TIFF"

    format: Literal["tiff"] = "tiff"
    quality: int = 80

    def save_params(self, mode: str = "RGB") -> dict:
        # quality는 JPEG 압축 TIFF에서만 의미가 있다. 알파 채널은 JPEG 압축 불가.
        if "A" in mode:
            return {"compression": "tiff_adobe_deflate"}
        return {"compression": "jpeg", "quality": self.quality}


EncodeOptions = Annotated[
    Union[JpegOptions, PngOptions, WebpOptions, AvifOptions, TiffOptions],
    Field(discriminator="format"),
]
